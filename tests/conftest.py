"""Shared fixtures for the test suite."""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterator

import pytest
from fastapi import testclient

from dataguard import app as app_mod
from dataguard import config
from dataguard.models import consent
from dataguard.store import consent_store, persistence


def rules_from(levels: dict[consent.Category, consent.ConsentLevel], default: consent.ConsentLevel = "deny") -> list[consent.ConsentRule]:
    """Build a full rule set, overriding the *default* level per category."""
    return [consent.ConsentRule(category=c, level=levels.get(c, default)) for c in consent.CATEGORIES]


# ── Store Fixtures ──────────────────────────────────────────────


@pytest.fixture()
def clock() -> Callable[[], str]:
    """A clock that advances one second per call."""
    ticks = itertools.count()
    return lambda: f"2026-01-01T00:00:{next(ticks):02d}.000Z"


@pytest.fixture()
def id_factory() -> Callable[[], str]:
    """Sequential partner ids: ``p1``, ``p2``, …"""
    ids = itertools.count(1)
    return lambda: f"p{next(ids)}"


@pytest.fixture()
def memory_storage() -> persistence.InMemoryStorage:
    return persistence.InMemoryStorage()


@pytest.fixture()
def store(
    memory_storage: persistence.InMemoryStorage,
    clock: Callable[[], str],
    id_factory: Callable[[], str],
) -> consent_store.ConsentStore:
    """A store without any partners loaded."""
    return consent_store.ConsentStore(memory_storage, clock=clock, id_factory=id_factory)


@pytest.fixture()
def seeded_store(store: consent_store.ConsentStore) -> consent_store.ConsentStore:
    """A store loaded from empty storage (the three seed partners)."""
    store.load()
    return store


# ── API Fixtures ────────────────────────────────────────────────


@pytest.fixture()
def client(memory_storage: persistence.InMemoryStorage) -> Iterator[testclient.TestClient]:
    """Test client for an app backed by in-memory storage."""
    settings = config.Settings(storage_dir="")
    with testclient.TestClient(app_mod.create_app(settings, memory_storage)) as test_client:
        yield test_client
