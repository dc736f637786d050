"""
API error types and the project-wide DRF exception handler.

Every error leaves the API as ``{"error": "<message>"}`` with the
matching HTTP status.  Exceptions that DRF does not know about are
logged with their traceback and reported as 500, except for database
connectivity failures which are reported as 503.
"""
from __future__ import annotations

import logging

from django.db import InterfaceError, OperationalError
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class EmailTaken(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'email already registered'
    default_code = 'conflict'


class InvalidCredentials(APIException):
    """Raised for an unknown email and for a wrong password alike."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'invalid credentials'
    default_code = 'invalid_credentials'


class InspectionNotFound(NotFound):
    default_detail = 'Inspection not found'


class ServiceUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'service unavailable'
    default_code = 'service_unavailable'


class StorageNotConfigured(ServiceUnavailable):
    default_detail = 'S3 not configured on server'
    default_code = 'storage_not_configured'


def _first_message(detail) -> str:
    if isinstance(detail, dict):
        if 'detail' in detail:
            return _first_message(detail['detail'])
        for field, value in detail.items():
            message = _first_message(value)
            if field == 'non_field_errors':
                return message
            return f'{field}: {message}'
        return 'invalid request'
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else 'invalid request'
    return str(detail)


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is not None:
        return Response({'error': _first_message(resp.data)}, status=resp.status_code, headers=_passthrough_headers(resp))
    if isinstance(exc, (OperationalError, InterfaceError)):
        logger.error('database unavailable: %s', exc)
        return Response({'error': 'database unavailable'}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    request = (context or {}).get('request')
    logger.exception('unhandled error on %s', getattr(request, 'path', '?'))
    return Response({'error': str(exc) or 'internal server error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


def _passthrough_headers(resp) -> dict:
    # keep WWW-Authenticate / Retry-After that DRF attached
    return {k: v for k, v in resp.items() if k in ('WWW-Authenticate', 'Retry-After')}
