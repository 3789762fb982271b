"""Entity variants handled by the console.

Clubs, district secretaries and state secretaries share one record shape;
each variant is described by a field table rather than its own code path.
"""

from dataclasses import dataclass, field
from typing import Any

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
APPROVAL_STATUSES = (STATUS_PENDING, STATUS_APPROVED)

RECONCILE_REFETCH = "refetch"
RECONCILE_PATCH = "patch"

# Joined in from reference data at normalize time, never sent to the server.
DERIVED_FIELDS = ("stateName", "districtName")


@dataclass(frozen=True)
class FieldSpec:
    """One canonical field: its default, how it is edited and how it is shown."""

    name: str
    label: str
    default: Any = ""
    widget: str = "text"
    required: bool = True
    column: bool = False
    exportable: bool = True


@dataclass(frozen=True)
class EntityVariant:
    kind: str
    label: str
    plural_label: str
    collection: str
    name_field: str
    id_aliases: tuple[str, ...]
    id_prefix: str
    has_district: bool
    fields: tuple[FieldSpec, ...]
    approve_suffix: str = ""
    approve_reconcile: str = RECONCILE_REFETCH
    sortable: tuple[str, ...] = field(default=())

    @property
    def id_field(self) -> str:
        """Wire name used when sending a client-side id."""
        return self.id_aliases[0]

    @property
    def collection_path(self) -> str:
        return f"{self.collection}/"

    @property
    def register_path(self) -> str:
        return f"{self.collection}/register"

    def member_path(self, entity_id: str) -> str:
        return f"{self.collection}/{entity_id}"

    def approve_path(self, entity_id: str) -> str:
        return f"{self.member_path(entity_id)}{self.approve_suffix}"

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    @property
    def editable_fields(self) -> list[str]:
        return [f.name for f in self.fields if f.name not in DERIVED_FIELDS]

    @property
    def form_fields(self) -> list[FieldSpec]:
        return [f for f in self.fields if f.widget != "hidden"]

    @property
    def columns(self) -> list[FieldSpec]:
        return [f for f in self.fields if f.column]

    @property
    def search_fields(self) -> tuple[str, ...]:
        fields = [self.name_field, "email", "mobileNumber", "stateName"]
        if self.has_district:
            fields.append("districtName")
        return tuple(fields)

    def spec(self, name: str) -> FieldSpec:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)

    def empty_fields(self) -> dict:
        return {name: self.spec(name).default for name in self.editable_fields}


def _contact_fields(has_district: bool) -> tuple[FieldSpec, ...]:
    fields = [FieldSpec("stateId", "State", default=0, widget="state")]
    if has_district:
        fields.append(FieldSpec("districtId", "District", default=0, widget="district"))
    fields += [
        FieldSpec("mobileNumber", "Mobile Number", column=True),
        FieldSpec("email", "Email", widget="email", column=True),
        FieldSpec("password", "Password", widget="password", exportable=False),
        FieldSpec("societyCertificateNumber", "Society Certificate Number"),
        FieldSpec("aadharNumber", "Aadhar Number"),
        FieldSpec("certificateUrl", "Certificate", widget="url", required=False),
        FieldSpec("address", "Address", widget="textarea"),
        FieldSpec("approvalStatus", "Status", default=STATUS_PENDING, widget="hidden", column=True),
        FieldSpec("stateName", "State", widget="hidden", column=True),
    ]
    if has_district:
        fields.append(FieldSpec("districtName", "District", widget="hidden", column=True))
    return tuple(fields)


CLUB = EntityVariant(
    kind="clubs",
    label="Club",
    plural_label="Clubs",
    collection="clubs",
    name_field="clubName",
    id_aliases=("clubId", "id"),
    id_prefix="C",
    has_district=True,
    fields=(FieldSpec("clubName", "Club Name", column=True),) + _contact_fields(has_district=True),
    sortable=("clubName", "email", "mobileNumber", "stateName", "districtName", "approvalStatus"),
)

DISTRICT_SECRETARY = EntityVariant(
    kind="district-secretaries",
    label="District Secretary",
    plural_label="District Secretaries",
    collection="district_secretaries",
    name_field="secretaryName",
    id_aliases=("districtSecretaryId", "id"),
    id_prefix="DS",
    has_district=True,
    fields=(FieldSpec("secretaryName", "Secretary Name", column=True),) + _contact_fields(has_district=True),
    sortable=("secretaryName", "email", "mobileNumber", "stateName", "districtName", "approvalStatus"),
)

STATE_SECRETARY = EntityVariant(
    kind="state-secretaries",
    label="State Secretary",
    plural_label="State Secretaries",
    collection="state_secretaries",
    name_field="secretaryName",
    id_aliases=("stateSecretaryId", "id"),
    id_prefix="SS",
    has_district=False,
    fields=(FieldSpec("secretaryName", "Secretary Name", column=True),) + _contact_fields(has_district=False),
    approve_suffix="/approve",
    approve_reconcile=RECONCILE_PATCH,
    sortable=("secretaryName", "email", "mobileNumber", "stateName", "approvalStatus"),
)

VARIANTS = {v.kind: v for v in (CLUB, DISTRICT_SECRETARY, STATE_SECRETARY)}


def get_variant(kind: str) -> EntityVariant:
    """Look up a variant by its URL kind. Raises KeyError for unknown kinds."""
    return VARIANTS[kind]
