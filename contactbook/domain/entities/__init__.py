from .contact import (
    Contact,
    ContactDraft,
    DEFAULT_TITLE,
    PROFILE_ID,
    avatar_url_for,
    is_profile_id,
)
from .section import Section

__all__ = [
    "Contact",
    "ContactDraft",
    "DEFAULT_TITLE",
    "PROFILE_ID",
    "avatar_url_for",
    "is_profile_id",
    "Section",
]
