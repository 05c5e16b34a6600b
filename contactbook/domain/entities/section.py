"""
Section - one alphabetical group of contacts, as rendered under a letter header.
"""

from dataclasses import dataclass, field
from typing import List

from .contact import Contact


@dataclass
class Section:
    title: str
    members: List[Contact] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.members)
