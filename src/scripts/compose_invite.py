#!/usr/bin/env python3
"""
Compose an invitation interactively against a running gateway.

Prompts for event details, lets you search the contact directory for
attendees, prints the invitation text and optionally saves it as a template.

Usage:
    uv run python src/scripts/compose_invite.py [--gateway http://localhost:8000]
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import EXTRA_PARTICIPANT_EMAIL, GATEWAY_BASE_URL
from core.database import create_tables, get_connection, insert_template
from services.composer import ContactResolver
from services.gateway_client import DirectoryGatewayClient


async def ask(prompt: str) -> str:
    return (await asyncio.to_thread(input, prompt)).strip()


async def pick_attendees(resolver: ContactResolver):
    """Search-and-select loop; an empty query ends it."""
    while True:
        query = await ask("Search attendee (blank to finish): ")
        if not query:
            return

        resolver.set_query(query)
        await resolver.wait_for_search()

        contacts = resolver.visible_contacts[:10]
        if not contacts:
            print("  No contacts found")
            continue
        for idx, contact in enumerate(contacts, start=1):
            print(f"  {idx}. {contact.full_name} <{contact.email}> {contact.organization_name}")

        choice = await ask("Add which number (blank to skip): ")
        if choice.isdigit() and 1 <= int(choice) <= len(contacts):
            contact = contacts[int(choice) - 1]
            if resolver.add_attendee(contact):
                print(f"  Added {contact.full_name}")
            else:
                print(f"  {contact.full_name} is already invited")


async def run(gateway_url: str, save: bool):
    resolver = ContactResolver(DirectoryGatewayClient(gateway_url))
    await resolver.load_directory()
    print(f"Loaded {len(resolver.state.directory)} contacts\n")

    for field_name in ("title", "date", "time", "goal", "agenda"):
        resolver.set_field(field_name, await ask(f"{field_name.capitalize()}: "))

    await pick_attendees(resolver)

    if EXTRA_PARTICIPANT_EMAIL:
        include = await ask(f"Include {EXTRA_PARTICIPANT_EMAIL}? [y/N]: ")
        resolver.set_include_extra(include.lower() == "y")

    location = await ask(f"Location [{resolver.state.form.location}]: ")
    if location:
        resolver.select_location(location)

    text = resolver.preview()
    if not text:
        print("\nError: title, date (YYYY-MM-DD) and time (HH:MM) are required")
        sys.exit(1)
    print(f"\n{text}\n")

    if save:
        conn = get_connection()
        try:
            create_tables(conn)
            stored = insert_template(conn, resolver.to_template())
        finally:
            conn.close()
        print(f"Template saved with id {stored.id}")


def main():
    parser = argparse.ArgumentParser(description="Compose an event invitation")
    parser.add_argument("--gateway", default=GATEWAY_BASE_URL, help="Gateway base URL")
    parser.add_argument("--save", action="store_true", help="Save the result as a template")

    args = parser.parse_args()
    logging.basicConfig(level=logging.WARNING)

    asyncio.run(run(args.gateway, args.save))


if __name__ == "__main__":
    main()
