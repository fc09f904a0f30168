import os
import sqlite3
import logging
from typing import Iterator
from app.core import config

log = logging.getLogger("db")

# Development bootstrap only; production tables are managed outside this service.
SCHEMA = """
CREATE TABLE IF NOT EXISTS vendors (
    vendor_key  TEXT PRIMARY KEY,
    name        TEXT
);

CREATE TABLE IF NOT EXISTS firmware (
    vendor_key  TEXT NOT NULL,
    addr        TEXT,
    timestamp   TEXT NOT NULL,
    filename    TEXT NOT NULL,
    hash        TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_firmware_hash ON firmware(hash);
"""


class FirmwareDatabaseError(RuntimeError):
    ...


def get_db(path: str | None = None) -> sqlite3.Connection:
    path = path or config.DB_PATH
    try:
        conn = sqlite3.connect(path, check_same_thread=False)
    except sqlite3.Error as e:
        log.exception("failed to open database %s", path)
        raise FirmwareDatabaseError(f"failed to connect: {e}") from e
    conn.row_factory = sqlite3.Row
    return conn


def init_db(path: str | None = None) -> None:
    path = path or config.DB_PATH
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    conn = get_db(path)
    try:
        conn.executescript(SCHEMA)
        conn.commit()
    finally:
        conn.close()


def get_conn() -> Iterator[sqlite3.Connection]:
    """FastAPI dependency: one connection per request, always closed."""
    conn = get_db()
    try:
        yield conn
    finally:
        conn.close()
