"""
Configuration — reads all settings from environment variables.
Never hardcodes credentials. Uses python-dotenv for local dev.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

STORAGE_BACKENDS = ("file", "memory", "supabase")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise EnvironmentError(f"{name} must be a boolean (true/false), got {raw!r}")


@dataclass(frozen=True)
class Config:
    # Storage
    storage_backend: str = "file"
    storage_key: str = "@contacts"
    data_dir: str = ".contactbook"

    # Supabase (only for storage_backend="supabase")
    supabase_url: str = ""
    supabase_service_key: str = ""  # Service role key (backend only, never exposed to clients)
    supabase_table: str = "kv_store"

    # Behaviour
    search_email: bool = True
    require_email: bool = True

    @classmethod
    def from_env(cls) -> "Config":
        backend = os.getenv("CONTACTS_STORAGE_BACKEND", "file").strip().lower()
        if backend not in STORAGE_BACKENDS:
            raise EnvironmentError(
                f"Unknown CONTACTS_STORAGE_BACKEND={backend!r} "
                f"(expected one of: {', '.join(STORAGE_BACKENDS)})\n"
                f"Copy .env.example to .env and fill in the values."
            )

        if backend == "supabase":
            missing = [
                key for key in ("SUPABASE_URL", "SUPABASE_SERVICE_KEY")
                if not os.getenv(key)
            ]
            if missing:
                raise EnvironmentError(
                    f"Missing required environment variables: {', '.join(missing)}\n"
                    f"Copy .env.example to .env and fill in the values."
                )

        return cls(
            storage_backend=backend,
            storage_key=os.getenv("CONTACTS_STORAGE_KEY", "@contacts"),
            data_dir=os.getenv("CONTACTS_DATA_DIR", ".contactbook"),
            supabase_url=os.getenv("SUPABASE_URL", ""),
            supabase_service_key=os.getenv("SUPABASE_SERVICE_KEY", ""),
            supabase_table=os.getenv("CONTACTS_SUPABASE_TABLE", "kv_store"),
            search_email=_env_flag("CONTACTS_SEARCH_EMAIL", True),
            require_email=_env_flag("CONTACTS_REQUIRE_EMAIL", True),
        )
