"""
SQLite database operations for saved event templates.
"""

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path

from core.config import DB_PATH
from models.templates import EventTemplate, RecurringPattern, StoredTemplate

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS event_templates (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL DEFAULT '',
        date TEXT NOT NULL DEFAULT '',
        time TEXT NOT NULL DEFAULT '',
        location TEXT NOT NULL DEFAULT '',
        goal TEXT NOT NULL DEFAULT '',
        agenda TEXT NOT NULL DEFAULT '',
        rsvp TEXT NOT NULL DEFAULT '',
        recurring TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS api_requests (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        request_id TEXT UNIQUE NOT NULL,
        timestamp TEXT NOT NULL,
        endpoint TEXT NOT NULL,
        method TEXT NOT NULL,
        client_ip TEXT,
        search_query TEXT,
        search_type TEXT,
        status_code INTEGER NOT NULL,
        error_code TEXT,
        error_message TEXT,
        processing_time_ms INTEGER NOT NULL,
        result_count INTEGER,
        enrichment_degraded INTEGER NOT NULL DEFAULT 0
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_event_templates_created ON event_templates(created_at)",
    "CREATE INDEX IF NOT EXISTS idx_api_requests_timestamp ON api_requests(timestamp)",
    "CREATE INDEX IF NOT EXISTS idx_api_requests_status ON api_requests(status_code)",
]


def get_connection(db_path: Path | None = None) -> sqlite3.Connection:
    """
    Get a database connection.

    One connection per request; it is used from both threadpool and
    event loop threads.
    """
    db_path = Path(db_path or DB_PATH)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


def create_tables(conn: sqlite3.Connection):
    """Create all tables and indexes if they don't exist."""
    cursor = conn.cursor()
    for statement in SCHEMA:
        cursor.execute(statement)
    conn.commit()


def _row_to_template(row: sqlite3.Row) -> StoredTemplate:
    recurring = None
    if row["recurring"]:
        recurring = RecurringPattern.model_validate(json.loads(row["recurring"]))
    return StoredTemplate(
        id=row["id"],
        title=row["title"],
        date=row["date"],
        time=row["time"],
        location=row["location"],
        goal=row["goal"],
        agenda=row["agenda"],
        rsvp=row["rsvp"],
        recurring=recurring,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def insert_template(conn: sqlite3.Connection, template: EventTemplate) -> StoredTemplate:
    """Insert a template snapshot and return it with its id and timestamps."""
    now = datetime.now(timezone.utc).isoformat()
    recurring = None
    if template.recurring is not None:
        recurring = json.dumps(template.recurring.model_dump(by_alias=True))

    cursor = conn.cursor()
    cursor.execute(
        """
        INSERT INTO event_templates (
            title, date, time, location, goal, agenda, rsvp,
            recurring, created_at, updated_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            template.title,
            template.date,
            template.time,
            template.location,
            template.goal,
            template.agenda,
            template.rsvp,
            recurring,
            now,
            now,
        ),
    )
    conn.commit()

    cursor.execute("SELECT * FROM event_templates WHERE id = ?", (cursor.lastrowid,))
    return _row_to_template(cursor.fetchone())


def list_templates(conn: sqlite3.Connection) -> list[StoredTemplate]:
    """Return all templates, newest first."""
    cursor = conn.cursor()
    cursor.execute("SELECT * FROM event_templates ORDER BY created_at DESC, id DESC")
    return [_row_to_template(row) for row in cursor.fetchall()]


def get_template(conn: sqlite3.Connection, template_id: int) -> StoredTemplate | None:
    """Return one template by id, or None."""
    cursor = conn.cursor()
    cursor.execute("SELECT * FROM event_templates WHERE id = ?", (template_id,))
    row = cursor.fetchone()
    return _row_to_template(row) if row else None
