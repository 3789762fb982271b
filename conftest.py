"""Shared fixtures: an in-memory registry service and wired-up services."""

import copy

import pytest
from django.apps import apps as django_apps

from apps.core.container import ServiceContainer
from apps.core.identifiers import IdGenerator
from apps.core.remote import RemoteError
from apps.locations.loader import ReferenceDataLoader
from apps.locations.services import LocationResolver
from apps.registrations.services import EntityRegistry
from apps.registrations.variants import CLUB, STATE_SECRETARY

ID_KEYS = ("clubId", "districtSecretaryId", "stateSecretaryId", "id")

STATES = [
    {"id": 1, "code": "KA", "name": "Karnataka"},
    {"id": 2, "code": "KL", "name": "Kerala"},
    {"id": 3, "code": "GA", "name": "Goa"},
]

DISTRICTS = [
    {"id": 10, "stateId": 1, "name": "Mysuru"},
    {"id": 11, "stateId": 1, "name": "Belagavi"},
    {"id": 20, "stateId": 2, "name": "Kochi"},
    {"id": 99, "stateId": 7, "name": "Nowhere"},
]

CLUBS = [
    {
        "clubId": "C1",
        "clubName": "Alpha Club",
        "stateId": 1,
        "districtId": 10,
        "mobileNumber": "9000000001",
        "email": "alpha@example.com",
        "password": "hunter2",
        "societyCertificateNumber": "SOC-1",
        "aadharNumber": "1111",
        "certificateUrl": "https://files.test/alpha.png",
        "address": "1 Palace Road",
        "approvalStatus": "pending",
    },
    {
        "clubId": "C2",
        "clubName": "Beta Club",
        "stateId": 2,
        "districtId": 20,
        "mobileNumber": "9000000002",
        "email": "beta@example.com",
        "approvalStatus": "approved",
    },
    {
        "id": 3,
        "clubName": "Gamma Club",
        "stateId": "1",
        "districtId": "11",
        "email": None,
        "approvalStatus": "on-hold",
    },
]

DISTRICT_SECRETARIES = [
    {
        "districtSecretaryId": "DS1",
        "secretaryName": "Devi Rao",
        "stateId": 1,
        "districtId": 11,
        "email": "devi@example.com",
        "approvalStatus": "pending",
    },
]

STATE_SECRETARIES = [
    {
        "stateSecretaryId": "SS1",
        "secretaryName": "Suresh Nair",
        "stateId": 2,
        "email": "suresh@example.com",
        "approvalStatus": "pending",
    },
    {
        "stateSecretaryId": "SS2",
        "secretaryName": "Asha Menon",
        "stateId": 1,
        "email": "asha@example.com",
        "approvalStatus": "approved",
    },
]


class FakeRemote:
    """In-memory stand-in for the registry service.

    Collections behave like the real endpoints: GET lists, POST register
    appends, PUT merges, DELETE removes. Every call is recorded in
    ``calls`` as ``(method, path, payload)``.
    """

    timeout = 1

    def __init__(self, states=(), districts=(), collections=None):
        self.reference = {"states": list(states), "districts": list(districts)}
        self.collections = {k: [dict(r) for r in v] for k, v in (collections or {}).items()}
        self.failures = set()
        self.calls = []
        self.closed = False

    def fail(self, method, path):
        self.failures.add((method, path))

    def calls_for(self, method):
        return [c for c in self.calls if c[0] == method]

    def _record(self, method, path, payload=None):
        self.calls.append((method, path, payload))
        if (method, path) in self.failures:
            raise RemoteError(f"{method} {path} failed with status 500", status_code=500)

    def _find(self, collection, entity_id):
        for row in self.collections.get(collection, []):
            if any(str(row.get(k)) == str(entity_id) for k in ID_KEYS if row.get(k) is not None):
                return row
        raise RemoteError(f"{collection}/{entity_id} not found", status_code=404)

    def get(self, path):
        self._record("GET", path)
        if path in self.reference:
            return copy.deepcopy(self.reference[path])
        return copy.deepcopy(self.collections.get(path.rstrip("/"), []))

    def post(self, path, payload):
        self._record("POST", path, payload)
        collection = path.split("/")[0]
        self.collections.setdefault(collection, []).append(dict(payload))
        return {"message": "Registered successfully"}

    def put(self, path, payload):
        self._record("PUT", path, payload)
        collection, entity_id = path.split("/")[:2]
        row = self._find(collection, entity_id)
        row.update(payload)
        return dict(row)

    def delete(self, path):
        self._record("DELETE", path)
        collection, entity_id = path.split("/")[:2]
        self.collections[collection].remove(self._find(collection, entity_id))
        return None

    def upload(self, url, filename, content, content_type="application/octet-stream"):
        self._record("UPLOAD", url, {"filename": filename, "content_type": content_type})
        return {"url": f"https://files.test/{filename}"}

    def close(self):
        self.closed = True


@pytest.fixture
def remote():
    """A fake registry service seeded with reference data and records."""
    return FakeRemote(
        states=STATES,
        districts=DISTRICTS,
        collections={
            "clubs": CLUBS,
            "district_secretaries": DISTRICT_SECRETARIES,
            "state_secretaries": STATE_SECRETARIES,
        },
    )


@pytest.fixture
def loader(remote):
    """A reference data loader that has finished loading."""
    loader = ReferenceDataLoader(remote)
    loader.start(background=False)
    return loader


@pytest.fixture
def resolver(loader):
    return LocationResolver(loader)


@pytest.fixture
def club_registry(remote, resolver):
    registry = EntityRegistry(CLUB, remote, resolver)
    registry.fetch_all()
    return registry


@pytest.fixture
def state_secretary_registry(remote, resolver):
    registry = EntityRegistry(STATE_SECRETARY, remote, resolver)
    registry.fetch_all()
    return registry


@pytest.fixture
def id_generator():
    """Generator pinned to a fixed clock."""
    return IdGenerator(clock=lambda: 1718000000.0)


@pytest.fixture
def container(remote, id_generator):
    container = ServiceContainer(remote, upload_url="https://files.test/upload", id_generator=id_generator)
    container.start(background=False)
    return container


@pytest.fixture
def console(container, monkeypatch):
    """Install the test container on the core app so views use it."""
    monkeypatch.setattr(django_apps.get_app_config("core"), "container", container)
    return container
