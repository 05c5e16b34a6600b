"""
ContactStore - single source of truth for the contact list.

Owns the in-memory list and the profile record, exposes create/update/delete,
and writes the full snapshot to the blob store after every mutation.

Persistence is fire-and-forget: the in-memory change is authoritative as
soon as the call returns. Inside a running event loop the write is scheduled
as a task and not awaited; outside one it is run to completion on the spot,
so synchronous callers block until the snapshot is stored and get
synchronous durability in exchange.
A failed write is logged and recorded in last_persistence_error, never
raised and never rolled back. Two writes in flight race; last one wins.
"""

import asyncio
import json
import logging
from typing import List, Optional, Set

from ..domain.entities.contact import Contact, ContactDraft, is_profile_id
from ..domain.errors import (
    ForbiddenOperationError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from ..domain.interfaces.i_blob_store import IBlobStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "@contacts"


class ContactStore:
    """
    Holds the contact collection and mirrors it to an IBlobStore.
    Dependencies injected via constructor (Hexagonal Architecture).
    """

    def __init__(
        self,
        blob_store: IBlobStore,
        storage_key: str = DEFAULT_STORAGE_KEY,
        require_email: bool = True,
        default_contacts: Optional[List[Contact]] = None,
    ):
        self.blob_store = blob_store
        self.storage_key = storage_key
        self.require_email = require_email
        self.default_contacts: List[Contact] = list(default_contacts or [])
        self.last_persistence_error: Optional[Exception] = None

        self._profile: Optional[Contact] = None
        self._contacts: List[Contact] = []
        self._pending: Set[asyncio.Task] = set()

    # ── Reads ──────────────────────────────────────────────────────────────

    @property
    def profile(self) -> Optional[Contact]:
        return self._profile

    def list_contacts(self) -> List[Contact]:
        """Ordinary contacts in insertion order (the profile is not included)."""
        return list(self._contacts)

    def get(self, contact_id: str) -> Contact:
        if self._profile is not None and self._profile.id == contact_id:
            return self._profile
        return self._find(contact_id)

    # ── Hydration ──────────────────────────────────────────────────────────

    async def load(self) -> List[Contact]:
        """
        Hydrate from the persisted snapshot, or from the default dataset when
        there is none or it cannot be read. Never raises.
        """
        records = await self._read_snapshot()
        if records is None:
            records = [c.copy() for c in self.default_contacts]
            logger.info(
                f"[Store] Using default dataset ({len(records)} records) "
                f"for key={self.storage_key!r}"
            )
        self._hydrate(records)
        return self.list_contacts()

    async def _read_snapshot(self) -> Optional[List[Contact]]:
        try:
            raw = await self.blob_store.get_item(self.storage_key)
        except Exception as e:
            logger.warning(
                f"[Store] Snapshot read failed for key={self.storage_key!r}: {e} "
                f"| falling back to defaults"
            )
            return None

        if raw is None:
            logger.info(f"[Store] No snapshot under key={self.storage_key!r}")
            return None

        try:
            rows = json.loads(raw)
            if not isinstance(rows, list):
                raise ValueError(f"expected a JSON array, got {type(rows).__name__}")
            return [Contact.from_dict(row) for row in rows]
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning(
                f"[Store] Snapshot under key={self.storage_key!r} is unparsable: {e} "
                f"| falling back to defaults"
            )
            return None

    def _hydrate(self, records: List[Contact]) -> None:
        seen: Set[str] = set()
        profile: Optional[Contact] = None
        contacts: List[Contact] = []
        for record in records:
            if record.id in seen:
                logger.warning(f"[Store] Dropping duplicate id={record.id!r} from snapshot")
                continue
            seen.add(record.id)
            if record.is_profile:
                profile = record
            else:
                contacts.append(record)

        if profile is None:
            profile = next(
                (c.copy() for c in self.default_contacts if c.is_profile), None
            )

        self._profile = profile
        self._contacts = contacts
        logger.info(
            f"[Store] Loaded {len(contacts)} contacts | profile={'yes' if profile else 'no'}"
        )

    # ── Mutations ──────────────────────────────────────────────────────────

    def create(self, draft: ContactDraft) -> Contact:
        clean = self._validated(draft)
        contact = Contact.create(
            name=clean.name,
            phone=clean.phone,
            email=clean.email or "",
            title=clean.title,
            avatar=clean.avatar,
        )
        self._contacts.append(contact)
        logger.info(f"[Store] Created {contact.name!r} | id={contact.id}")
        self._persist()
        return contact

    def update(self, contact_id: str, draft: ContactDraft) -> Contact:
        contact = self.get(contact_id)
        clean = self._validated(draft)
        contact.apply(clean)
        logger.info(f"[Store] Updated {contact.name!r} | id={contact.id}")
        self._persist()
        return contact

    def delete(self, contact_id: str) -> None:
        if is_profile_id(contact_id):
            raise ForbiddenOperationError("delete", contact_id)
        contact = self._find(contact_id)
        self._contacts = [c for c in self._contacts if c.id != contact_id]
        logger.info(f"[Store] Deleted {contact.name!r} | id={contact_id}")
        self._persist()

    def _find(self, contact_id: str) -> Contact:
        for contact in self._contacts:
            if contact.id == contact_id:
                return contact
        raise NotFoundError(contact_id)

    def _validated(self, draft: ContactDraft) -> ContactDraft:
        clean = draft.normalized()
        missing = clean.missing_fields(require_email=self.require_email)
        if missing:
            raise ValidationError(missing)
        return clean

    # ── Persistence ────────────────────────────────────────────────────────

    def snapshot(self) -> str:
        """Serialize profile + contacts as the persisted JSON array."""
        records = ([self._profile] if self._profile is not None else []) + self._contacts
        return json.dumps([r.to_dict() for r in records], ensure_ascii=False)

    def _persist(self) -> None:
        write = self._write_snapshot(self.snapshot())
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(write)
            return
        task = loop.create_task(write)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _write_snapshot(self, snapshot: str) -> None:
        try:
            await self.blob_store.set_item(self.storage_key, snapshot)
        except Exception as e:
            if not isinstance(e, PersistenceError):
                e = PersistenceError(str(e), key=self.storage_key)
            self.last_persistence_error = e
            logger.error(
                f"[Store] Snapshot write FAILED for key={self.storage_key!r}: {e} "
                f"| in-memory state kept"
            )
            return
        logger.debug(f"[Store] Snapshot written | key={self.storage_key!r} | chars={len(snapshot)}")

    async def flush(self) -> None:
        """Wait for every in-flight snapshot write to finish."""
        while True:
            in_flight = [t for t in self._pending if not t.done()]
            if not in_flight:
                return
            await asyncio.gather(*in_flight)

    @property
    def pending_writes(self) -> int:
        return len(self._pending)
