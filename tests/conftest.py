"""
Root conftest.py — shared fixtures and helpers for the entire test suite.

Provides:
- Contact / ContactDraft factory helpers
- Snapshot helper (serialize contacts the way the store persists them)
- Blob-store fakes (failing store) and mock fixtures
- Ready-to-use ContactStore fixtures
"""

import asyncio
import json
import uuid
from typing import Iterable, Optional
from unittest.mock import AsyncMock

import pytest

from contactbook.adapters.memory_blob_store import MemoryBlobStore
from contactbook.domain.entities.contact import PROFILE_ID, Contact, ContactDraft
from contactbook.domain.errors import PersistenceError
from contactbook.domain.interfaces.i_blob_store import IBlobStore
from contactbook.use_cases.contact_store import DEFAULT_STORAGE_KEY, ContactStore


# ─────────────────────────────────────────────────────────────────────────────
# Domain object factories
# ─────────────────────────────────────────────────────────────────────────────


def make_contact(
    name: str = "Jane Smith",
    phone: str = "+1 555 0100",
    email: str = "jane.smith@example.com",
    title: Optional[str] = "Colleague",
    avatar: str = "",
    contact_id: Optional[str] = None,
) -> Contact:
    """Create a Contact with sensible test defaults."""
    return Contact(
        id=contact_id or f"contact-{uuid.uuid4().hex}",
        name=name,
        phone=phone,
        email=email,
        avatar=avatar,
        title=title,
    )


def make_profile(
    name: str = "Rinesa Bislimi",
    phone: str = "+383 44 777 777",
    email: str = "rinesa.bislimi@example.com",
    title: Optional[str] = "Design Lead",
) -> Contact:
    return make_contact(
        name=name, phone=phone, email=email, title=title, contact_id=PROFILE_ID
    )


def make_draft(
    name: Optional[str] = "Ann Lee",
    phone: Optional[str] = "+1 555 0111",
    email: Optional[str] = "ann.lee@example.com",
    title: Optional[str] = None,
    avatar: Optional[str] = None,
) -> ContactDraft:
    """Create a ContactDraft with every required field filled in."""
    return ContactDraft(name=name, phone=phone, email=email, title=title, avatar=avatar)


def snapshot_of(contacts: Iterable[Contact]) -> str:
    """Serialize contacts exactly like ContactStore.snapshot()."""
    return json.dumps([c.to_dict() for c in contacts], ensure_ascii=False)


def stored_rows(blob_store: MemoryBlobStore, key: str = DEFAULT_STORAGE_KEY) -> list:
    return json.loads(blob_store.items[key])


# ─────────────────────────────────────────────────────────────────────────────
# Blob-store fakes
# ─────────────────────────────────────────────────────────────────────────────


class FailingBlobStore(IBlobStore):
    """Blob store whose reads and/or writes always fail."""

    def __init__(self, fail_reads: bool = False, fail_writes: bool = True):
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.write_attempts = 0

    async def get_item(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise PersistenceError("disk unavailable", key=key)
        return None

    async def set_item(self, key: str, value: str) -> None:
        self.write_attempts += 1
        if self.fail_writes:
            raise PersistenceError("disk full", key=key)


# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def mock_blob_store():
    """AsyncMock for IBlobStore. Defaults to an empty store."""
    mock = AsyncMock(spec=IBlobStore)
    mock.get_item.return_value = None
    mock.set_item.return_value = None
    return mock


@pytest.fixture
def blob_store():
    return MemoryBlobStore()


@pytest.fixture
def default_contacts():
    """Small bundled-style dataset: profile + three contacts."""
    return [
        make_profile(),
        make_contact(name="Bob Stone", contact_id="contact-b"),
        make_contact(name="alice Wong", contact_id="contact-a", email="alice@wong.io"),
        make_contact(name="Čarli Novak", contact_id="contact-c"),
    ]


@pytest.fixture
def store(blob_store, default_contacts):
    """A ContactStore hydrated from the defaults (nothing persisted yet)."""
    s = ContactStore(blob_store=blob_store, default_contacts=default_contacts)
    asyncio.run(s.load())
    return s
