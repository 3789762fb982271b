"""Form sessions: transient editable copies of one registration."""

import logging
from typing import Any, Optional

from apps.registrations.variants import EntityVariant

from .registry import EntityRegistry, RegistryError

logger = logging.getLogger(__name__)

MODE_CREATE = "create"
MODE_EDIT = "edit"
MODE_VIEW = "view"
MODES = (MODE_CREATE, MODE_EDIT, MODE_VIEW)


class FormSessionError(Exception):
    """Raised when a session cannot be opened, edited or submitted."""

    pass


class FormSession:
    """
    A mode-tagged copy of one entity's editable fields.

    The session never shares storage with the registry: ``fields`` is a
    fresh dict seeded on open. A failed submit leaves the session open with
    its fields intact so the user can retry.
    """

    def __init__(self, variant: EntityVariant, registry: EntityRegistry, resolver, id_generator):
        self.variant = variant
        self.registry = registry
        self.resolver = resolver
        self.ids = id_generator
        self.mode: Optional[str] = None
        self.entity_id = ""
        self.fields: dict = {}
        self.submitted: dict = {}
        self.is_open = False

    @property
    def read_only(self) -> bool:
        return self.mode == MODE_VIEW

    def open(self, mode: str, entity: Optional[dict] = None) -> "FormSession":
        if mode not in MODES:
            raise FormSessionError(f"Unknown form mode: {mode}")
        if mode != MODE_CREATE and entity is None:
            raise FormSessionError(f"A record is required to {mode} a {self.variant.label.lower()}.")

        self.mode = mode
        if mode == MODE_CREATE:
            self.entity_id = ""
            self.fields = self.variant.empty_fields()
        else:
            self.entity_id = entity.get("entityId", "")
            defaults = self.variant.empty_fields()
            self.fields = {name: entity.get(name, defaults[name]) for name in self.variant.editable_fields}
        self.is_open = True
        return self

    def set(self, name: str, value: Any) -> None:
        """Replace one field. Changing the state clears the district."""
        if self.read_only:
            raise FormSessionError("This form is read-only.")
        if name == "stateId":
            self.fields = self.resolver.select_state(self.fields, value)
        else:
            self.fields[name] = value

    def update(self, data: dict) -> None:
        # State goes first so a district submitted alongside it survives.
        if "stateId" in data:
            self.set("stateId", data["stateId"])
        for name, value in data.items():
            if name != "stateId" and name in self.fields:
                self.set(name, value)

    def payload(self) -> dict:
        """Server-recognized fields only; derived names are never sent."""
        payload = {name: self.fields.get(name) for name in self.variant.editable_fields}
        if self.mode == MODE_EDIT and not payload.get("password"):
            # Write-only: a blank password on edit means "unchanged".
            payload.pop("password", None)
        return payload

    def submit(self) -> Any:
        if not self.is_open:
            raise FormSessionError("The form is closed.")
        if self.read_only:
            raise FormSessionError("A form opened for viewing cannot be submitted.")

        payload = self.payload()
        try:
            if self.mode == MODE_CREATE:
                payload[self.variant.id_field] = self.ids.new_id(self.variant.id_prefix)
                result = self.registry.create(payload)
            else:
                if not self.entity_id:
                    raise FormSessionError("Cannot update a record without an id.")
                result = self.registry.update(self.entity_id, payload)
        except RegistryError as e:
            logger.warning(f"Submit failed for {self.variant.label.lower()} ({self.mode}): {e}")
            raise FormSessionError(str(e)) from e

        self.submitted = payload
        self.close()
        return result

    def close(self) -> None:
        self.is_open = False
        self.fields = {}
