"""
Alphabetical grouper - partitions contacts into lettered sections.

Ordering is accent- and case-insensitive: names are compared on their
NFKD-decomposed, casefolded form with combining marks dropped, so "Čarli"
sorts with the Cs and lands in section "C". Names that are blank or start
with anything other than a letter or digit go to the "#" section.

Contacts are sorted by (section, collation key, raw name), which keeps the
concatenation of all section members identical to sort_contacts().
"""

import unicodedata
from typing import Dict, Iterable, List, Tuple

from ..domain.entities.contact import Contact
from ..domain.entities.section import Section

FALLBACK_SECTION_TITLE = "#"


def collation_key(name: str) -> str:
    decomposed = unicodedata.normalize("NFKD", (name or "").strip())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def section_title_for(name: str) -> str:
    key = collation_key(name)
    if not key or not key[0].isalnum():
        return FALLBACK_SECTION_TITLE
    # "ß".upper() is "SS"
    return key[0].upper()[0]


def contact_sort_key(contact: Contact) -> Tuple[str, str, str]:
    name = contact.name or ""
    return (section_title_for(name), collation_key(name), name)


def sort_contacts(contacts: Iterable[Contact]) -> List[Contact]:
    return sorted(contacts, key=contact_sort_key)


def group_contacts(contacts: Iterable[Contact]) -> List[Section]:
    """
    Group contacts by leading letter.
    Sections come out in ascending title order, members sorted by name.
    Deterministic for a given input.
    """
    buckets: Dict[str, List[Contact]] = {}
    for contact in sort_contacts(contacts):
        buckets.setdefault(section_title_for(contact.name), []).append(contact)

    return [
        Section(title=title, members=members)
        for title, members in sorted(buckets.items())
    ]


def section_titles(sections: Iterable[Section]) -> List[str]:
    return [s.title for s in sections]


def find_section_index(sections: List[Section], letter: str) -> int:
    """Index of the section headed by letter (case-insensitive), -1 if none."""
    wanted = (letter or "").casefold()
    for i, section in enumerate(sections):
        if section.title.casefold() == wanted:
            return i
    return -1
