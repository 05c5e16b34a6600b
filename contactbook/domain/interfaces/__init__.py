from .i_blob_store import IBlobStore

__all__ = [
    "IBlobStore",
]
