"""
MemoryBlobStore - Implements IBlobStore with a plain dict.
Nothing survives the process; used for tests and throwaway sessions.
"""

from typing import Dict, Optional

from ..domain.interfaces.i_blob_store import IBlobStore


class MemoryBlobStore(IBlobStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self.items[key] = value
