"""
SupabaseBlobStore - Implements IBlobStore.
Uses the supabase-py client to keep snapshots in a key/value table via PostgREST.

Expected table:
    create table kv_store (
        key text primary key,
        value text not null,
        updated_at timestamptz
    );
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from supabase import create_client, Client

from ..domain.errors import PersistenceError
from ..domain.interfaces.i_blob_store import IBlobStore

logger = logging.getLogger(__name__)


class SupabaseBlobStore(IBlobStore):
    """
    Key-value adapter via Supabase PostgREST.
    Use the service role key for backend operations.
    """

    def __init__(self, url: str, key: str, table: str = "kv_store"):
        self.client: Client = create_client(url, key)
        self.table = table

    async def get_item(self, key: str) -> Optional[str]:
        try:
            response = (
                self.client.table(self.table)
                .select("value")
                .eq("key", key)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise PersistenceError(
                f"Supabase read failed for key={key!r}: {e}", key=key
            ) from e
        if response.data:
            return response.data[0]["value"]
        return None

    async def set_item(self, key: str, value: str) -> None:
        row = {
            "key": key,
            "value": value,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            self.client.table(self.table).upsert(row).execute()
        except Exception as e:
            raise PersistenceError(
                f"Supabase write failed for key={key!r}: {e}", key=key
            ) from e
        logger.debug(f"[SupabaseBlobStore] Upserted {self.table}.{key} ({len(value)} chars)")
