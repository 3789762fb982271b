"""Service container wiring the console's long-lived services together."""

import logging

from django.apps import apps

from apps.locations.loader import ReferenceDataLoader
from apps.locations.services import LocationResolver
from apps.registrations.services import ApprovalService, CertificateUploader, EntityRegistry, FormSession
from apps.registrations.variants import VARIANTS

from .identifiers import IdGenerator

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Explicitly constructed holder for shared services.

    One reference data loader and resolver are shared by every registry.
    ``start`` kicks off the reference data load; ``close`` tears everything
    down. Views reach the container through ``get_container``.
    """

    def __init__(self, remote, upload_url: str, id_generator: IdGenerator | None = None):
        self.remote = remote
        self.ids = id_generator or IdGenerator()
        self.loader = ReferenceDataLoader(remote)
        self.resolver = LocationResolver(self.loader)
        self.registries = {
            kind: EntityRegistry(variant, remote, self.resolver) for kind, variant in VARIANTS.items()
        }
        self.uploader = CertificateUploader(remote, upload_url)
        self.started = False

    def start(self, background: bool = True) -> None:
        if self.started:
            return
        self.started = True
        logger.info("Starting console services")
        self.loader.start(background=background)

    def close(self) -> None:
        logger.info("Stopping console services")
        for registry in self.registries.values():
            registry.clear()
        self.loader.teardown()
        self.remote.close()
        self.started = False

    def registry(self, kind: str) -> EntityRegistry:
        """Raises KeyError for an unknown entity kind."""
        return self.registries[kind]

    def approvals(self, kind: str) -> ApprovalService:
        return ApprovalService(self.registry(kind))

    def form_session(self, kind: str) -> FormSession:
        registry = self.registry(kind)
        return FormSession(registry.variant, registry, self.resolver, self.ids)


def get_container() -> ServiceContainer:
    """Return the started container owned by the core app config."""
    container = apps.get_app_config("core").container
    container.start()
    return container
