from typing import Optional

from django.contrib.auth import authenticate, get_user_model
from django.db import IntegrityError, transaction
from rest_framework_simplejwt.tokens import AccessToken

from inspections.exceptions import EmailTaken, InvalidCredentials

User = get_user_model()


def public_user(user) -> dict:
    """Fields of a user that may leave the server (never the digest)."""
    return {'id': user.id, 'email': user.email, 'name': user.name}


def issue_token(user) -> str:
    # userId is added by simplejwt (USER_ID_CLAIM); lifetime comes from SIMPLE_JWT
    token = AccessToken.for_user(user)
    token['email'] = user.email
    return str(token)


def register_user(*, email: str, password: str, name: Optional[str] = None) -> dict:
    if User.objects.filter(email=email).exists():
        raise EmailTaken()
    try:
        with transaction.atomic():
            user = User.objects.create_user(email=email, password=password, name=name or None)
    except IntegrityError:
        # lost a race with a concurrent registration for the same email
        raise EmailTaken()
    return public_user(user)


def login_user(*, email: str, password: str, request=None) -> dict:
    user = authenticate(request, username=email, password=password)
    if user is None:
        raise InvalidCredentials()
    return {'token': issue_token(user), 'user': public_user(user)}
