"""Approval state machine for registrations."""

import logging
from typing import Optional

from apps.core.remote import RemoteError
from apps.registrations.variants import RECONCILE_PATCH, STATUS_APPROVED, STATUS_PENDING

from .registry import EntityRegistry, RegistryError

logger = logging.getLogger(__name__)

ACTION_VIEW = "view"
ACTION_EDIT = "edit"
ACTION_APPROVE = "approve"
ACTION_REJECT = "reject"
ACTION_DELETE = "delete"


class ApprovalError(Exception):
    """An approval transition was not allowed or the remote call failed."""

    pass


class ApprovalService:
    """
    Governs ``approvalStatus`` transitions.

    pending -> approved via approve. Reject is not a third state: it deletes
    a pending record. Delete is available from every state. Approved is
    terminal; there is no way back to pending.
    """

    def __init__(self, registry: EntityRegistry):
        self.registry = registry
        self.variant = registry.variant

    @staticmethod
    def available_actions(record: dict) -> list[str]:
        """Actions offered for a row; approve/reject only while pending."""
        actions = [ACTION_VIEW, ACTION_EDIT]
        if record.get("approvalStatus") == STATUS_PENDING:
            actions += [ACTION_APPROVE, ACTION_REJECT]
        actions.append(ACTION_DELETE)
        return actions

    def _current(self, entity_id: str) -> Optional[dict]:
        record = self.registry.get(entity_id)
        if record is None:
            self.registry.fetch_all()
            record = self.registry.get(entity_id)
        return record

    def approve(self, entity_id: str) -> Optional[dict]:
        """
        Move a pending record to approved.

        Approving an already approved record is a no-op and an id that is
        not in the collection raises ApprovalError. On failure nothing
        local changes and ApprovalError is raised; there is no retry.
        """
        record = self._current(entity_id)
        if record is None:
            raise ApprovalError(f"No {self.variant.label.lower()} with id {entity_id}.")
        if record["approvalStatus"] == STATUS_APPROVED:
            return record

        try:
            self.registry.remote.put(
                self.variant.approve_path(entity_id),
                {"approvalStatus": STATUS_APPROVED},
            )
        except RemoteError as e:
            logger.error(f"Failed to approve {self.variant.label.lower()} {entity_id}: {e}")
            raise ApprovalError(f"Failed to approve {self.variant.label.lower()}. Please try again.") from e

        if self.variant.approve_reconcile == RECONCILE_PATCH:
            return self.registry.patch_local(entity_id, {"approvalStatus": STATUS_APPROVED})
        self.registry.fetch_all()
        return self.registry.get(entity_id)

    def reject(self, entity_id: str, confirmed: bool = False) -> bool:
        """Reject (delete) a pending registration after confirmation."""
        record = self._current(entity_id)
        if record is None:
            raise ApprovalError(f"No {self.variant.label.lower()} with id {entity_id}.")
        if record["approvalStatus"] != STATUS_PENDING:
            raise ApprovalError("Only pending registrations can be rejected.")
        try:
            return self.registry.delete(entity_id, confirmed=confirmed)
        except RegistryError as e:
            logger.error(f"Failed to reject {self.variant.label.lower()} {entity_id}: {e}")
            raise ApprovalError(f"Failed to reject {self.variant.label.lower()}. Please try again.") from e

    def delete(self, entity_id: str, confirmed: bool = False) -> bool:
        """Delete a registration in any state after confirmation."""
        try:
            return self.registry.delete(entity_id, confirmed=confirmed)
        except RegistryError as e:
            logger.error(f"Failed to delete {self.variant.label.lower()} {entity_id}: {e}")
            raise ApprovalError(f"Failed to delete {self.variant.label.lower()}. Please try again.") from e
