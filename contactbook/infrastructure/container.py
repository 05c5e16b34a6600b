"""
Dependency Injection Container.
Wires the blob-store adapter to its interface and composes the use cases.
This is the ONLY place that knows about concrete implementations.
The domain and use case layers remain framework-agnostic.
"""

from .config import Config
from ..adapters.file_blob_store import FileBlobStore
from ..adapters.memory_blob_store import MemoryBlobStore
from ..adapters.supabase_blob_store import SupabaseBlobStore
from ..domain.interfaces.i_blob_store import IBlobStore
from ..use_cases.browse_contacts import BrowseContactsUseCase
from ..use_cases.contact_store import ContactStore
from ..use_cases.default_dataset import load_default_contacts


def build_blob_store(config: Config) -> IBlobStore:
    if config.storage_backend == "supabase":
        return SupabaseBlobStore(
            url=config.supabase_url,
            key=config.supabase_service_key,
            table=config.supabase_table,
        )
    if config.storage_backend == "memory":
        return MemoryBlobStore()
    return FileBlobStore(config.data_dir)


class Container:
    """
    Composes the full application object graph.
    Swap the storage backend by changing CONTACTS_STORAGE_BACKEND.
    """

    def __init__(self, config: Config):
        self.config = config

        # ── Adapters (Ports & Adapters layer) ─────────────────────────────
        self.blob_store = build_blob_store(config)

        # ── Use Cases (Application layer) ──────────────────────────────────
        self.contact_store = ContactStore(
            blob_store=self.blob_store,
            storage_key=config.storage_key,
            require_email=config.require_email,
            default_contacts=load_default_contacts(),
        )
        self.browse_use_case = BrowseContactsUseCase(
            store=self.contact_store,
            match_email=config.search_email,
        )
