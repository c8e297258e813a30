"""Shared pytest fixtures for the hotel rooms API tests."""

import pytest
from fastapi.testclient import TestClient

from hotelrooms.api.factory import create_app
from hotelrooms.infra.repositories.memory_repository import MemoryStore


@pytest.fixture(autouse=True)
def _reset_store_singleton():
    """Drop the module-level store so STORAGE_BACKEND changes between tests are seen."""
    import hotelrooms.api.deps as deps_module

    deps_module.reset_store()
    yield
    deps_module.reset_store()


@pytest.fixture
def store():
    """Fresh in-memory store per test."""
    return MemoryStore()


@pytest.fixture
def client(store):
    """TestClient serving from the in-memory store."""
    return TestClient(create_app(store=store))


@pytest.fixture
def hotel_payload():
    """Builder for a valid hotel body; keyword args override fields."""

    def _make(**overrides) -> dict:
        payload = {
            "name": "Plaza",
            "address": "Calle 10 # 5-20",
            "city": "Bogota",
            "tax_id": 900111,
            "tax_verification_digit": 7,
            "room_count_declared": 40,
        }
        payload.update(overrides)
        return payload

    return _make


@pytest.fixture
def room_payload():
    """Builder for a valid room body; keyword args override fields."""

    def _make(**overrides) -> dict:
        payload = {
            "hotel_id": 1,
            "quantity": 5,
            "room_type": "Suite",
            "accommodation": "Doble",
        }
        payload.update(overrides)
        return payload

    return _make
