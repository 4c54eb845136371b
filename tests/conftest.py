"""Shared fixtures: app client with the DB dependency replaced by a fake session."""

import uuid
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.db.session import get_db
from app.main import app


class FakeResult:
    def __init__(self, value=None):
        self._value = value

    def scalar_one_or_none(self):
        return self._value

    def scalar_one(self):
        return self._value


class FakeSession:
    """Stands in for AsyncSession.

    `execute` returns the queued results in order, then the last added object.
    """

    def __init__(self, *results):
        self.results = list(results)
        self.added = []

    async def execute(self, stmt):
        if self.results:
            return FakeResult(self.results.pop(0))
        return FakeResult(self.added[-1] if self.added else None)

    def add(self, obj):
        self.added.append(obj)

    async def flush(self):
        for obj in self.added:
            if getattr(obj, "id", None) is None:
                obj.id = uuid.uuid4()

    async def refresh(self, obj):
        pass


def make_settings(**overrides):
    values = dict(
        current_bodyweight=80.0,
        weight_unit="kg",
        distance_unit="km",
        partial_reps_volume_weight="none",
        barbell_increment=2.5,
        dumbbell_increment=2.0,
        machine_increment=5.0,
        cable_increment=2.5,
        kettlebell_increment=4.0,
        plate_loaded_increment=5.0,
        default_increment=1.25,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.fixture
def fake_db():
    return FakeSession()


@pytest.fixture
def client(fake_db):
    async def override_get_db():
        yield fake_db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def user_settings():
    return make_settings()
