"""Normalization of raw server records into the canonical registration shape."""

from collections.abc import Mapping
from typing import Any

from apps.locations.models import as_int
from apps.registrations.variants import APPROVAL_STATUSES, DERIVED_FIELDS, STATUS_PENDING, EntityVariant


def _coerce(value: Any, default: Any) -> Any:
    if isinstance(default, int):
        number = as_int(value)
        return default if number is None else number
    if value is None:
        return default
    return str(value)


def entity_id_of(variant: EntityVariant, raw: Mapping) -> str:
    """Return the first non-empty id among the variant's id aliases."""
    for alias in variant.id_aliases:
        value = raw.get(alias)
        if value not in (None, ""):
            return str(value)
    return ""


def normalize(variant: EntityVariant, raw: Any, resolver) -> dict:
    """
    Build a complete canonical record from one raw server record.

    Never raises: anything missing or of the wrong type falls back to the
    field default ("" for text, 0 for numbers, "pending" for the status).
    Password is write-only and always blanked. State and district names are
    looked up in the current reference data; a miss gives "".
    """
    if not isinstance(raw, Mapping):
        raw = {}

    record = {"entityId": entity_id_of(variant, raw)}
    for spec in variant.fields:
        if spec.name in DERIVED_FIELDS:
            continue
        record[spec.name] = _coerce(raw.get(spec.name), spec.default)

    record["password"] = ""
    if record["approvalStatus"] not in APPROVAL_STATUSES:
        record["approvalStatus"] = STATUS_PENDING

    record["stateName"] = resolver.state_name(record["stateId"])
    if variant.has_district:
        record["districtName"] = resolver.district_name(record["districtId"])
    return record


def normalize_all(variant: EntityVariant, raw_records: Any, resolver) -> list[dict]:
    """Normalize every record independently; a non-list payload yields []."""
    if not isinstance(raw_records, list):
        return []
    return [normalize(variant, raw, resolver) for raw in raw_records]
