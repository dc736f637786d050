"""
ASGI config for the Medirank project.

Only HTTP is served; requests are handled by Django's ASGI handler.
"""
import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "medirank.settings")

from django.core.asgi import get_asgi_application  # noqa: E402

application = get_asgi_application()
