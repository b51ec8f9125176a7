#!/usr/bin/env python3
"""
Print the invitation text for a saved template.

Usage:
    uv run python src/scripts/render_invite.py --list
    uv run python src/scripts/render_invite.py 3
    uv run python src/scripts/render_invite.py          # newest template
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.database import create_tables, get_connection, get_template, list_templates
from core.validation import validate_template
from services.formatting import format_event_text


def main():
    parser = argparse.ArgumentParser(description="Render a saved event template")
    parser.add_argument("template_id", nargs="?", type=int, help="Template id (default: newest)")
    parser.add_argument("--list", action="store_true", help="List saved templates")

    args = parser.parse_args()

    conn = get_connection()
    try:
        create_tables(conn)
        templates = list_templates(conn)

        if args.list:
            for template in templates:
                print(f"  {template.id}: {template.title} ({template.date} at {template.time})")
            print(f"\n{len(templates)} template(s)")
            return

        if args.template_id is not None:
            template = get_template(conn, args.template_id)
        else:
            template = templates[0] if templates else None
    finally:
        conn.close()

    if template is None:
        print("\nError: no matching template")
        sys.exit(1)

    for problem in validate_template(template):
        print(f"Warning: {problem}")

    text = format_event_text(template)
    if not text:
        print("\nError: template needs a title, date and time to render")
        sys.exit(1)
    print(text)


if __name__ == "__main__":
    main()
