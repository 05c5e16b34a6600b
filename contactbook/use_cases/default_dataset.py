"""
Bundled default dataset, used when no snapshot has been persisted yet.
"""

import json
from pathlib import Path
from typing import List, Optional, Union

from ..domain.entities.contact import Contact

DEFAULT_DATASET_PATH = Path(__file__).resolve().parents[1] / "data" / "default_contacts.json"


def load_default_contacts(path: Optional[Union[str, Path]] = None) -> List[Contact]:
    source = Path(path) if path else DEFAULT_DATASET_PATH
    rows = json.loads(source.read_text(encoding="utf-8"))
    return [Contact.from_dict(row) for row in rows]
