"""
Contact Entity - Core domain object.
No framework dependencies. Business logic lives here.
"""

import uuid
from dataclasses import dataclass, replace
from typing import List, Optional

PROFILE_ID = "my-profile"
DEFAULT_TITLE = "Colleague"
AVATAR_URL_TEMPLATE = "https://i.pravatar.cc/150?u={id}"


def avatar_url_for(contact_id: str) -> str:
    """Deterministic placeholder avatar for an id."""
    return AVATAR_URL_TEMPLATE.format(id=contact_id)


def is_profile_id(contact_id: Optional[str]) -> bool:
    return contact_id == PROFILE_ID


def _strip(value: Optional[str]) -> Optional[str]:
    return value.strip() if value is not None else None


def _text_field(row: dict, field: str) -> Optional[str]:
    value = row.get(field)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"Contact field {field!r} must be a string, got {type(value).__name__}")
    return value


@dataclass
class ContactDraft:
    """
    Payload of an add/edit form submission.
    A field left as None means "not provided"; for edits that keeps the
    current value where the field is optional.
    """

    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    title: Optional[str] = None
    avatar: Optional[str] = None

    def normalized(self) -> "ContactDraft":
        """Copy of the draft with surrounding whitespace stripped."""
        return ContactDraft(
            name=_strip(self.name),
            phone=_strip(self.phone),
            email=_strip(self.email),
            title=_strip(self.title),
            avatar=_strip(self.avatar) or None,
        )

    def missing_fields(self, require_email: bool = True) -> List[str]:
        required = ["name", "phone"]
        if require_email:
            required.append("email")
        return [f for f in required if not (getattr(self, f) or "").strip()]


@dataclass
class Contact:
    """
    A person in the contact list.
    The record with id PROFILE_ID is the owner's own profile.
    """

    id: str
    name: str
    phone: str = ""
    email: str = ""
    avatar: str = ""
    title: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.avatar:
            self.avatar = avatar_url_for(self.id)

    @classmethod
    def create(
        cls,
        name: str,
        phone: str,
        email: str = "",
        title: Optional[str] = None,
        avatar: Optional[str] = None,
    ) -> "Contact":
        """Factory method to create a new Contact with a generated ID."""
        contact_id = f"contact-{uuid.uuid4().hex}"
        return cls(
            id=contact_id,
            name=name,
            phone=phone,
            email=email or "",
            avatar=avatar or avatar_url_for(contact_id),
            title=title or DEFAULT_TITLE,
        )

    @property
    def is_profile(self) -> bool:
        return is_profile_id(self.id)

    @property
    def display_title(self) -> str:
        return self.title or DEFAULT_TITLE

    def apply(self, draft: ContactDraft) -> None:
        """
        Replace editable fields from a normalized draft. The id never changes;
        avatar and title are kept when the draft leaves them out.
        """
        self.name = draft.name or ""
        self.phone = draft.phone or ""
        self.email = draft.email or ""
        if draft.title is not None:
            self.title = draft.title or None
        if draft.avatar:
            self.avatar = draft.avatar

    def copy(self) -> "Contact":
        return replace(self)

    # ── Deep-link targets ─────────────────────────────────────────────────

    def tel_url(self) -> str:
        return f"tel:{''.join(self.phone.split())}"

    def sms_url(self) -> str:
        return f"sms:{''.join(self.phone.split())}"

    def mailto_url(self) -> str:
        return f"mailto:{self.email.strip()}"

    # ── Snapshot codec ────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "avatar": self.avatar,
            "title": self.title,
        }

    @classmethod
    def from_dict(cls, row: dict) -> "Contact":
        """
        Decode a snapshot row.
        Raises KeyError when id or name is absent, TypeError when an optional
        text field holds a non-string value.
        """
        contact_id = str(row["id"])
        return cls(
            id=contact_id,
            name=str(row["name"] or ""),
            phone=_text_field(row, "phone") or "",
            email=_text_field(row, "email") or "",
            avatar=_text_field(row, "avatar") or avatar_url_for(contact_id),
            title=_text_field(row, "title"),
        )
