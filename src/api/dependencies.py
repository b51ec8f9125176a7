"""FastAPI dependencies for shared resources."""

import sqlite3
from collections.abc import Callable, Iterator

from core.database import create_tables, get_connection
from core.hubspot_client import HubSpotClient, get_hubspot_client


async def get_directory_client() -> Callable[[], HubSpotClient]:
    """
    Provide a factory for the configured HubSpot client.

    Routes call it inside their logged try block, so a missing access
    token (UpstreamAuthError) is recorded like any other upstream failure.
    """
    return get_hubspot_client


def get_db() -> Iterator[sqlite3.Connection]:
    """Open a template store connection for the duration of a request."""
    conn = get_connection()
    try:
        create_tables(conn)
        yield conn
    finally:
        conn.close()
