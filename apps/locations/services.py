"""Hierarchy services for the state/district reference data."""

from typing import Any, Optional

from .models import GeoDistrict, GeoState, as_int


class LocationResolver:
    """
    Pure derivation layer over the loaded reference data.

    Cascading rule: the district options are always the districts of the
    currently selected state, in the order the service returned them. A
    state change clears the selected district in the same update.
    """

    def __init__(self, loader):
        self.loader = loader

    @property
    def loading(self) -> bool:
        return self.loader.loading

    @property
    def states(self) -> list[GeoState]:
        return self.loader.states

    def districts_for(self, state_id: Any) -> list[GeoDistrict]:
        """Return the districts whose state matches ``state_id``, input order kept."""
        state_id = as_int(state_id)
        if state_id is None:
            return []
        return [d for d in self.loader.districts if d.state_id == state_id]

    def get_state(self, state_id: Any) -> Optional[GeoState]:
        state_id = as_int(state_id)
        for state in self.loader.states:
            if state.id == state_id:
                return state
        return None

    def get_district(self, district_id: Any) -> Optional[GeoDistrict]:
        district_id = as_int(district_id)
        for district in self.loader.districts:
            if district.id == district_id:
                return district
        return None

    def state_name(self, state_id: Any) -> str:
        state = self.get_state(state_id)
        return state.name if state else ""

    def district_name(self, district_id: Any) -> str:
        district = self.get_district(district_id)
        return district.name if district else ""

    def is_valid_pair(self, state_id: Any, district_id: Any) -> bool:
        """Check that the district belongs to the state."""
        district_id = as_int(district_id)
        return any(d.id == district_id for d in self.districts_for(state_id))

    def select_state(self, fields: dict, state_id: Any) -> dict:
        """
        Return a copy of ``fields`` with the state replaced.

        The district is cleared whenever the state actually changes, so a
        stale district from another state never survives the update.
        """
        state_id = as_int(state_id)
        updated = dict(fields)
        if as_int(updated.get("stateId")) != state_id:
            updated["districtId"] = None
        updated["stateId"] = state_id
        return updated

    def state_choices(self) -> list[tuple[str, str]]:
        return [(str(s.id), s.name) for s in self.loader.states]

    def district_choices(self, state_id: Any) -> list[tuple[str, str]]:
        return [(str(d.id), d.name) for d in self.districts_for(state_id)]
