import sqlite3
import logging
from app.core.db import FirmwareDatabaseError

log = logging.getLogger("auth")

def check_auth(conn: sqlite3.Connection, token: str) -> bool:
    """True if `token` is the key of a known vendor."""
    if not token:
        return False
    try:
        row = conn.execute(
            "SELECT 1 FROM vendors WHERE vendor_key = ?", (token,)
        ).fetchone()
    except sqlite3.Error as e:
        log.exception("vendor lookup failed")
        raise FirmwareDatabaseError(f"failed to execute: {e}") from e
    return row is not None
