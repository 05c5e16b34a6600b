"""
ContactBook — CLI Entry Point

Usage:
  # List contacts grouped by letter (optionally filtered)
  python main.py list --search ann

  # Show one contact with its call / sms / mail links
  python main.py show contact-001

  # Add, edit, delete
  python main.py add --name "Ann Lee" --phone "+1 555 0100" --email ann@example.com
  python main.py edit contact-001 --phone "+1 555 0199"
  python main.py delete contact-001 --yes

  # Edit my profile
  python main.py profile --title "Design Lead"
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("contactbook")

from contactbook.domain.entities.contact import PROFILE_ID, Contact, ContactDraft
from contactbook.domain.entities.section import Section
from contactbook.domain.errors import ContactBookError
from contactbook.use_cases.browse_contacts import BrowseContactsRequest


def _add_form_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name", help="Display name")
    parser.add_argument("--phone", help="Phone number")
    parser.add_argument("--email", help="Email address")
    parser.add_argument("--title", help="Role label")
    parser.add_argument("--avatar", help="Avatar image URL")


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="ContactBook — contact list with search and alphabetical sections"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List contacts by letter")
    list_parser.add_argument(
        "--search", "-s", default="", help="Only show names (and emails) containing this text"
    )

    show_parser = subparsers.add_parser("show", help="Show one contact")
    show_parser.add_argument("id", help="Contact id")

    add_parser = subparsers.add_parser("add", help="Add a new contact")
    _add_form_arguments(add_parser)

    edit_parser = subparsers.add_parser("edit", help="Edit an existing contact")
    edit_parser.add_argument("id", help="Contact id")
    _add_form_arguments(edit_parser)

    delete_parser = subparsers.add_parser("delete", help="Delete a contact")
    delete_parser.add_argument("id", help="Contact id")
    delete_parser.add_argument(
        "--yes", "-y", action="store_true", help="Skip the confirmation prompt"
    )

    profile_parser = subparsers.add_parser("profile", help="Show or edit my profile")
    _add_form_arguments(profile_parser)

    return parser.parse_args(argv)


# ── Rendering ─────────────────────────────────────────────────────────────


def format_contact_line(contact: Contact) -> str:
    return f"  {contact.name:<28} {contact.phone:<18} {contact.email}  [{contact.id}]"


def format_sections(sections: List[Section]) -> str:
    lines = []
    for section in sections:
        lines.append(f"── {section.title} ──")
        lines.extend(format_contact_line(c) for c in section.members)
    return "\n".join(lines)


def format_card(contact: Contact) -> str:
    star = "⭐️ " if contact.is_profile else ""
    return "\n".join([
        f"{contact.name}",
        f"  {star}{contact.display_title}",
        f"  id:     {contact.id}",
        f"  phone:  {contact.phone}   ({contact.tel_url()} | {contact.sms_url()})",
        f"  email:  {contact.email}   ({contact.mailto_url()})",
        f"  avatar: {contact.avatar}",
    ])


def draft_from_args(args, existing: Optional[Contact] = None) -> ContactDraft:
    """Form fields from the command line, prefilled from the existing record."""
    if existing is None:
        return ContactDraft(
            name=args.name, phone=args.phone, email=args.email,
            title=args.title, avatar=args.avatar,
        )
    return ContactDraft(
        name=args.name if args.name is not None else existing.name,
        phone=args.phone if args.phone is not None else existing.phone,
        email=args.email if args.email is not None else existing.email,
        title=args.title,
        avatar=args.avatar,
    )


def confirm(prompt: str) -> bool:
    answer = input(f"{prompt} [y/N] ").strip().lower()
    return answer in ("y", "yes")


# ── Commands ──────────────────────────────────────────────────────────────


async def run_command(args) -> int:
    from contactbook.infrastructure.config import Config
    from contactbook.infrastructure.container import Container

    config = Config.from_env()
    container = Container(config)
    store = container.contact_store
    await store.load()

    try:
        if args.command == "list":
            response = container.browse_use_case.execute(
                BrowseContactsRequest(query=args.search)
            )
            if response.profile is not None:
                print(format_card(response.profile))
                print()
            if response.sections:
                print(format_sections(response.sections))
            elif args.search and response.total:
                print(f"No contacts found for \"{args.search}\".")
            else:
                print("Your contact list is empty.")
            print(f"\n{response.matched} of {response.total} contacts")

        elif args.command == "show":
            print(format_card(store.get(args.id)))

        elif args.command == "add":
            contact = store.create(draft_from_args(args))
            print(f"{contact.name} added successfully! [{contact.id}]")

        elif args.command == "edit":
            contact = store.update(args.id, draft_from_args(args, store.get(args.id)))
            print(f"{contact.name} updated successfully!")

        elif args.command == "delete":
            contact = store.get(args.id)
            if not args.yes and not contact.is_profile:
                if not confirm(f"Are you sure you want to delete {contact.name}?"):
                    print("Cancelled.")
                    return 0
            store.delete(args.id)
            print("Contact deleted successfully.")

        elif args.command == "profile":
            if any(v is not None for v in (args.name, args.phone, args.email, args.title, args.avatar)):
                store.update(PROFILE_ID, draft_from_args(args, store.get(PROFILE_ID)))
                print("Profile updated successfully!")
            print(format_card(store.get(PROFILE_ID)))

    except ContactBookError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        await store.flush()

    if store.last_persistence_error is not None:
        logger.warning(f"Changes may not have been saved: {store.last_persistence_error}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    return asyncio.run(run_command(args))


if __name__ == "__main__":
    sys.exit(main())
