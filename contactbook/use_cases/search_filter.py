"""
Search filter - reduces a contact list to the entries matching a query.

Plain case-insensitive substring containment on the name, and on the email
when match_email is set. No tokenizing, no fuzzy matching. Input order is
kept; ordering is the grouper's job.
"""

from typing import Iterable, List

from ..domain.entities.contact import Contact


def matches(contact: Contact, query: str, match_email: bool = False) -> bool:
    needle = query.casefold()
    if needle in (contact.name or "").casefold():
        return True
    return match_email and needle in (contact.email or "").casefold()


def filter_contacts(
    contacts: Iterable[Contact], query: str, match_email: bool = False
) -> List[Contact]:
    if not query:
        return list(contacts)
    return [c for c in contacts if matches(c, query, match_email)]
