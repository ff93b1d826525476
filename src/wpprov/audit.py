"""Dual-write run journal: JSONL file + SQLite database in the site log dir."""

from __future__ import annotations

import getpass
import logging
import os
import sqlite3
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator

from wpprov_common import AuditEvent

from wpprov.config import get_settings

log = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS provision_runs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    timestamp TEXT NOT NULL,
    site_id TEXT NOT NULL,
    actor TEXT NOT NULL,
    action TEXT NOT NULL,
    params TEXT NOT NULL DEFAULT '{}',
    result TEXT NOT NULL DEFAULT 'success',
    error TEXT,
    duration_ms INTEGER
);
CREATE INDEX IF NOT EXISTS idx_runs_timestamp ON provision_runs(timestamp);
CREATE INDEX IF NOT EXISTS idx_runs_site ON provision_runs(site_id);
"""


def _get_actor() -> str:
    return os.environ.get("WPPROV_ACTOR") or getpass.getuser()


def _init_db(db_path: Path) -> sqlite3.Connection:
    conn = sqlite3.connect(str(db_path))
    conn.executescript(_SCHEMA)
    return conn


def _write_jsonl(path: Path, event: AuditEvent) -> None:
    with open(path, "a") as f:
        f.write(event.to_jsonl() + "\n")


def _write_sqlite(db_path: Path, event: AuditEvent) -> None:
    conn = _init_db(db_path)
    try:
        conn.execute(
            """INSERT INTO provision_runs
               (timestamp, site_id, actor, action, params, result, error, duration_ms)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                event.timestamp.isoformat(),
                event.site_id,
                event.actor,
                event.action,
                event.model_dump_json(include={"params"}),
                event.result,
                event.error,
                event.duration_ms,
            ),
        )
        conn.commit()
    finally:
        conn.close()


def log_event(event: AuditEvent) -> None:
    """Write a journal event to both JSONL and SQLite.

    The journal lives in the site ``log/`` dir, which a failed run may have
    left uncreatable; a journal failure is logged and never replaces the
    run's own outcome.
    """
    settings = get_settings()
    try:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        _write_jsonl(settings.audit_jsonl_path, event)
        _write_sqlite(settings.audit_db_path, event)
    except (OSError, sqlite3.Error) as exc:
        log.warning("Could not journal %s for site %s: %s", event.action, event.site_id, exc)


@contextmanager
def audit(action: str, **params: Any) -> Generator[AuditEvent, None, None]:
    """Context manager that records timing and success/failure."""
    settings = get_settings()
    event = AuditEvent(
        site_id=settings.site_name,
        actor=_get_actor(),
        action=action,
        params=params,
    )
    start = time.monotonic()
    try:
        yield event
        event.result = "success"
    except Exception as exc:
        event.result = "failure"
        event.error = str(exc)
        raise
    finally:
        event.duration_ms = int((time.monotonic() - start) * 1000)
        log_event(event)
