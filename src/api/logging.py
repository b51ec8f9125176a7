"""SQLite request logging for directory gateway calls."""

import sqlite3
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from core.config import DB_PATH


@dataclass
class RequestLog:
    """Captured request/response data for logging."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    endpoint: str = ""
    method: str = ""
    client_ip: str | None = None
    search_query: str | None = None
    search_type: str | None = None
    status_code: int = 0
    error_code: str | None = None
    error_message: str | None = None
    processing_time_ms: int = 0
    result_count: int | None = None
    enrichment_degraded: bool = False


def log_request(log: RequestLog, db_path=None) -> None:
    """Write request log to SQLite database."""
    conn = sqlite3.connect(db_path or DB_PATH)
    try:
        cursor = conn.cursor()
        cursor.execute(
            """
            INSERT INTO api_requests (
                request_id, timestamp, endpoint, method, client_ip,
                search_query, search_type, status_code, error_code,
                error_message, processing_time_ms, result_count,
                enrichment_degraded
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
            (
                log.request_id,
                log.timestamp,
                log.endpoint,
                log.method,
                log.client_ip,
                log.search_query,
                log.search_type,
                log.status_code,
                log.error_code,
                log.error_message,
                log.processing_time_ms,
                log.result_count,
                int(log.enrichment_degraded),
            ),
        )
        conn.commit()
    finally:
        conn.close()
