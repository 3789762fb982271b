"""Core services including activity logging."""

import logging
from typing import Optional

from .middleware import get_client_ip

audit_logger = logging.getLogger("apps.audit")


class ActivityService:
    """Service for recording console actions.

    The console keeps no tables of its own, so entries go to the
    ``apps.audit`` logger rather than a database.
    """

    @classmethod
    def log(
        cls,
        action: str,
        resource_type: str,
        resource_id: str,
        changes: Optional[dict] = None,
    ) -> dict:
        """Emit an activity entry and return it."""
        entry = {
            "action": action,
            "resource_type": resource_type,
            "resource_id": str(resource_id),
            "ip_address": get_client_ip(),
            "changes": changes or {},
        }
        audit_logger.info(
            f"{entry['action']} {entry['resource_type']}:{entry['resource_id']} "
            f"from {entry['ip_address'] or 'unknown'}",
            extra={"activity": entry},
        )
        return entry

    @classmethod
    def log_create(cls, variant, payload: dict):
        """Log a registration creation."""
        return cls.log(
            action="created",
            resource_type=variant.label,
            resource_id=payload.get(variant.id_field, ""),
        )

    @classmethod
    def log_update(cls, variant, entity_id: str, changes: dict):
        """Log a registration update with the fields sent."""
        return cls.log(
            action="updated",
            resource_type=variant.label,
            resource_id=entity_id,
            changes={k: v for k, v in changes.items() if k != "password"},
        )

    @classmethod
    def log_transition(cls, variant, entity_id: str, action: str):
        """Log an approve, reject or delete."""
        return cls.log(action=action, resource_type=variant.label, resource_id=entity_id)
