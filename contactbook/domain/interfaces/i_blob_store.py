"""
IBlobStore - Port: defines the key-value persistence contract.
The domain doesn't know whether snapshots live on disk, in memory, or in Supabase.
"""

from abc import ABC, abstractmethod
from typing import Optional


class IBlobStore(ABC):
    """Port for reading and writing string blobs by key."""

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass
