#!/usr/bin/env python3
"""
Search HubSpot contacts from the command line.

Runs the same search and company merge as the gateway endpoint and prints
one line per contact.

Usage:
    uv run python src/scripts/search_contacts.py "John Smith"
    uv run python src/scripts/search_contacts.py 555-123 --type phone
    uv run python src/scripts/search_contacts.py --all
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import SEARCH_TYPES
from core.errors import DirectoryError
from core.hubspot_client import get_hubspot_client
from services.directory import list_contacts, search_contacts


async def run(query: str | None, search_type: str, list_all: bool):
    client = get_hubspot_client()

    if list_all:
        result = await list_contacts(client)
        for entry in result.contacts:
            company = entry.company.name if entry.company else ""
            print(f"  {entry.id}: {entry.firstname} {entry.lastname} <{entry.email}> {company}")
    else:
        result = await search_contacts(client, query, search_type)
        for hit in result.contacts:
            print(f"  {hit.id}: {hit.first_name} {hit.last_name} <{hit.email}> {hit.company_name}")
            if hit.company_address:
                print(f"      {hit.company_address}")

    print(f"\n{len(result.contacts)} contact(s)")
    if result.enrichment_degraded:
        print("Warning: company lookup failed, company details omitted")


def main():
    parser = argparse.ArgumentParser(description="Search HubSpot contacts")
    parser.add_argument("query", nargs="?", default="", help="Search text")
    parser.add_argument(
        "--type",
        dest="search_type",
        choices=sorted(SEARCH_TYPES),
        default="name",
        help="Field to search (default: name)",
    )
    parser.add_argument("--all", action="store_true", help="List contacts without filtering")

    args = parser.parse_args()
    logging.basicConfig(level=logging.WARNING)

    try:
        asyncio.run(run(args.query, args.search_type, args.all))
    except DirectoryError as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
