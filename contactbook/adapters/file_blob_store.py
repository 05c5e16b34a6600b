"""
FileBlobStore - Implements IBlobStore on the local filesystem.
One file per key inside a data directory, the on-device equivalent of
a key-value storage API. Writes go through a temp file and os.replace so
a crash never leaves a half-written snapshot behind.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union
from urllib.parse import quote

from ..domain.errors import PersistenceError
from ..domain.interfaces.i_blob_store import IBlobStore

logger = logging.getLogger(__name__)


class FileBlobStore(IBlobStore):
    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        # Keys like "@contacts" become "%40contacts.json"
        return self.directory / f"{quote(key, safe='')}.json"

    async def get_item(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Could not read {path}: {e}", key=key) from e

    async def set_item(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.directory, prefix=".tmp-", suffix=".json"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise PersistenceError(f"Could not write {path}: {e}", key=key) from e
        logger.debug(f"[FileBlobStore] Wrote {len(value)} chars → {path}")
