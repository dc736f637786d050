"""
Database models for the inspection backend.

Two collections are kept: users, who authenticate with an email
address, and inspections.  An inspection is stored as a single row
whose nested parts (checklist items, attachments, geolocation and
hospital details) live in JSON columns so the record round-trips in
the same shape the client submits it.
"""
from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models


def _new_inspection_id() -> str:
    return uuid.uuid4().hex


class UserManager(BaseUserManager):
    """Manager for email-addressed users.

    Emails are stored exactly as given: lookups and the unique index
    are case-sensitive.
    """
    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields):
        if not email:
            raise ValueError('email is required')
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        if not extra_fields['is_staff'] or not extra_fields['is_superuser']:
            raise ValueError('superuser must have is_staff=True and is_superuser=True')
        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """An account that can sign in to the inspection app.

    The username column of Django's base user is dropped; the email is
    the login identifier.  ``name`` is the display name shown to other
    inspectors.
    """
    username = None
    first_name = None
    last_name = None
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS: list[str] = []

    objects = UserManager()

    def get_full_name(self) -> str:
        return self.name or self.email

    def get_short_name(self) -> str:
        return self.name or self.email

    def __str__(self) -> str:
        return self.email


class Inspection(models.Model):
    """A submitted hospital inspection.

    ``status`` is an open string; the app uses draft, completed,
    reviewed, escalated and open but any value is stored as-is.
    Attachment columns hold either a bare URL string or an object with
    at least ``url`` and, for files uploaded through the server, ``key``.
    """
    STATUS_DRAFT = 'draft'
    STATUS_COMPLETED = 'completed'
    STATUS_REVIEWED = 'reviewed'

    id = models.CharField(max_length=32, primary_key=True, default=_new_inspection_id, editable=False)
    inspection_date = models.CharField(max_length=64, blank=True, null=True)
    inspector_name = models.CharField(max_length=255)
    inspector_email = models.CharField(max_length=255, blank=True, null=True)
    comments = models.TextField(blank=True, null=True)
    # summary groups by status
    status = models.CharField(max_length=32, default=STATUS_DRAFT, blank=True, null=True, db_index=True)
    items = models.JSONField(default=list, blank=True)
    images = models.JSONField(default=list, blank=True)
    inspector_selfie = models.JSONField(blank=True, null=True)
    inspector_signature = models.JSONField(blank=True, null=True)
    geo_location = models.JSONField(blank=True, null=True)
    hospital = models.JSONField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='inspection_status_created_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.inspector_name} ({self.status or 'unknown'}) {self.id}"
