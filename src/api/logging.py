"""SQLite request logging for API."""

import sqlite3
import uuid
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from pathlib import Path

from core.config import DB_PATH


@dataclass
class RequestLog:
    """One calendar API call: what was asked, how many events landed, how it ended."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    endpoint: str = ""
    method: str = ""
    client_ip: str | None = None
    year: int | None = None
    month0: int | None = None
    status_code: int = 0
    error_code: str | None = None
    error_message: str | None = None
    processing_time_ms: int = 0
    events_received: int | None = None
    events_placed: int | None = None
    events_skipped: int | None = None
    details: list[tuple[str, str]] = field(default_factory=list)  # (type, message)

    def record_error(self, status_code: int, error_code: str | None, message: str) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.error_message = message

    def add_detail(self, detail_type: str, message: str) -> None:
        self.details.append((detail_type, message))


# api_requests columns mirror the dataclass; details go to their own table
REQUEST_COLUMNS = tuple(f.name for f in fields(RequestLog) if f.name != "details")


def log_request(log: RequestLog, db_path: Path | None = None) -> None:
    """Write request log and its detail rows to SQLite in one transaction."""
    conn = sqlite3.connect(db_path or DB_PATH)
    try:
        with conn:
            conn.execute(
                f"INSERT INTO api_requests ({', '.join(REQUEST_COLUMNS)}) "
                f"VALUES ({', '.join('?' for _ in REQUEST_COLUMNS)})",
                [getattr(log, column) for column in REQUEST_COLUMNS],
            )
            conn.executemany(
                "INSERT INTO api_request_details (request_id, detail_type, message) VALUES (?, ?, ?)",
                [(log.request_id, detail_type, message) for detail_type, message in log.details],
            )
    finally:
        conn.close()
