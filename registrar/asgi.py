"""ASGI config for the Registrar console."""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "registrar.settings")

application = get_asgi_application()
