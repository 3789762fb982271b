"""Entity registry: the session's cached copy of a remote collection."""

import logging
import threading
from typing import Any, Optional

from apps.core.remote import RemoteError
from apps.registrations.variants import STATUS_APPROVED, STATUS_PENDING, EntityVariant

from .normalization import normalize_all

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """A registry mutation failed; the base list was left unchanged."""

    pass


class EntityRegistry:
    """
    Holds the base list of one entity variant.

    The base list is only ever replaced wholesale by ``fetch_all``; the one
    exception is ``patch_local``, used to reflect a confirmed approval in
    place. Each fetch takes a sequence number when issued and its response
    is applied only if no newer fetch was issued in the meantime.
    """

    def __init__(self, variant: EntityVariant, remote, resolver):
        self.variant = variant
        self.remote = remote
        self.resolver = resolver
        self._records: list[dict] = []
        self._lock = threading.Lock()
        self._issued = 0

    @property
    def records(self) -> list[dict]:
        """The current base list (a shallow copy)."""
        return list(self._records)

    def get(self, entity_id: str) -> Optional[dict]:
        for record in self._records:
            if record["entityId"] == str(entity_id):
                return record
        return None

    def counts(self) -> dict:
        records = self._records
        approved = sum(1 for r in records if r["approvalStatus"] == STATUS_APPROVED)
        return {
            "total": len(records),
            STATUS_APPROVED: approved,
            STATUS_PENDING: len(records) - approved,
        }

    def fetch_all(self) -> bool:
        """
        Reload the base list from the collection endpoint.

        Returns True when the response was applied. A failed fetch is logged
        and leaves the previous base list in place.
        """
        with self._lock:
            self._issued += 1
            sequence = self._issued

        try:
            raw = self.remote.get(self.variant.collection_path)
        except RemoteError as e:
            logger.error(f"Failed to fetch {self.variant.collection}: {e}")
            return False

        records = normalize_all(self.variant, raw, self.resolver)

        with self._lock:
            if sequence != self._issued:
                logger.info(
                    f"Discarding stale {self.variant.collection} response "
                    f"(request {sequence}, latest {self._issued})"
                )
                return False
            self._records = records
        return True

    def create(self, payload: dict) -> Any:
        """Register a new entity, then reload. No optimistic insert."""
        try:
            result = self.remote.post(self.variant.register_path, payload)
        except RemoteError as e:
            raise RegistryError(f"Could not create {self.variant.label.lower()}: {e}") from e
        self.fetch_all()
        return result

    def update(self, entity_id: str, payload: dict) -> Any:
        try:
            result = self.remote.put(self.variant.member_path(entity_id), payload)
        except RemoteError as e:
            raise RegistryError(f"Could not update {self.variant.label.lower()} {entity_id}: {e}") from e
        self.fetch_all()
        return result

    def delete(self, entity_id: str, confirmed: bool = False) -> bool:
        """
        Delete an entity. Nothing happens unless ``confirmed`` is True.

        Returns True when the record was deleted.
        """
        if not confirmed:
            return False
        try:
            self.remote.delete(self.variant.member_path(entity_id))
        except RemoteError as e:
            raise RegistryError(f"Could not delete {self.variant.label.lower()} {entity_id}: {e}") from e
        self.fetch_all()
        return True

    def patch_local(self, entity_id: str, changes: dict) -> Optional[dict]:
        """Apply ``changes`` to the cached record in place of a refetch."""
        patched = None
        with self._lock:
            records = []
            for record in self._records:
                if record["entityId"] == str(entity_id):
                    record = {**record, **changes}
                    patched = record
                records.append(record)
            self._records = records
        return patched

    def clear(self) -> None:
        with self._lock:
            self._records = []
