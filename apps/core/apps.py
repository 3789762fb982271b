"""Core app configuration."""

from django.apps import AppConfig
from django.conf import settings


class CoreConfig(AppConfig):
    """Configuration for the core app; owns the service container."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.core"
    verbose_name = "Core"

    def ready(self):
        from .container import ServiceContainer
        from .remote import RemoteService

        # Built here, started lazily on first use so that management commands
        # and tests do not hit the network at import time.
        self.container = ServiceContainer(
            remote=RemoteService.from_settings(),
            upload_url=settings.REGISTRY_UPLOAD_URL,
        )
