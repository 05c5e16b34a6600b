"""
BrowseContactsUseCase - what the contact list screen shows.

Filters the store's contacts by the search text, groups the matches into
lettered sections, and returns the profile separately as a pinned header.
The profile never takes part in filtering or grouping.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..domain.entities.contact import Contact
from ..domain.entities.section import Section
from .alphabetical_grouper import group_contacts, section_titles
from .contact_store import ContactStore
from .search_filter import filter_contacts

logger = logging.getLogger(__name__)


@dataclass
class BrowseContactsRequest:
    query: str = ""


@dataclass
class BrowseContactsResponse:
    profile: Optional[Contact]
    sections: List[Section] = field(default_factory=list)
    total: int = 0
    matched: int = 0

    @property
    def section_titles(self) -> List[str]:
        return section_titles(self.sections)


class BrowseContactsUseCase:
    def __init__(self, store: ContactStore, match_email: bool = False):
        self.store = store
        self.match_email = match_email

    def execute(self, request: BrowseContactsRequest) -> BrowseContactsResponse:
        contacts = self.store.list_contacts()
        matches = filter_contacts(contacts, request.query, match_email=self.match_email)
        sections = group_contacts(matches)
        logger.debug(
            f"[Browse] query={request.query!r} | matched={len(matches)}/{len(contacts)} "
            f"| sections={len(sections)}"
        )
        return BrowseContactsResponse(
            profile=self.store.profile,
            sections=sections,
            total=len(contacts),
            matched=len(matches),
        )
