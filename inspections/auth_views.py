"""
Authentication views.

Email/password registration and login for inspectors.  Login returns a
signed bearer token (see ``SIMPLE_JWT`` in settings) that the client
sends back as ``Authorization: Bearer <token>``.
"""
from __future__ import annotations

import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from inspections.serializers.auth import LoginSerializer, RegisterSerializer
from inspections.exceptions import InvalidCredentials
from inspections.services.accounts import login_user, public_user, register_user

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([AllowAny])
def register_view(request):
    """Create an account.  Returns the public user record."""
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    user = register_user(email=vd['email'], password=vd['password'], name=vd.get('name'))
    logger.info('registered user %s', user['id'])
    return Response({'user': user})


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    """Exchange email and password for a token.

    An unknown email and a wrong password get the same 401 response so
    the endpoint does not reveal which accounts exist.
    """
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    try:
        payload = login_user(email=vd['email'], password=vd['password'], request=request)
    except InvalidCredentials:
        logger.info('failed login from %s', request.META.get('REMOTE_ADDR'))
        raise
    return Response(payload)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me_view(request):
    """Return the user the bearer token belongs to."""
    return Response({'user': public_user(request.user)})
