"""Shared fixtures for the health tracker unit tests."""

from __future__ import annotations

from datetime import date

import pytest

from healthlog.storage import InMemoryStore

TODAY = date(2026, 10, 19)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def store() -> InMemoryStore:
    """A fresh in-memory store for each test."""
    return InMemoryStore()
