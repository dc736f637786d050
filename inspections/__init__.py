"""Inspection app for the Medirank backend.

This package contains the models, serializers, services, views and
route registrations behind the inspection client's API.
"""
