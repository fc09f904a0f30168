# app/services/firmware.py
from __future__ import annotations

import hashlib
import logging
import sqlite3
from datetime import datetime, timezone
from typing import List

from app.core import config
from app.core.db import FirmwareDatabaseError
from app.models.firmware import FirmwareRecord, UploadRequest, UploadResult
from app.services.auth import check_auth
from app.utils.storage import clean_filename, remove_file, save_firmware, stored_filename

log = logging.getLogger("upload")


def content_hash(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


def hash_exists(conn: sqlite3.Connection, digest: str) -> bool:
    try:
        row = conn.execute("SELECT 1 FROM firmware WHERE hash = ?", (digest,)).fetchone()
    except sqlite3.Error as e:
        log.exception("firmware lookup failed for hash=%s", digest)
        raise FirmwareDatabaseError(f"failed to execute: {e}") from e
    return row is not None


def insert_record(conn: sqlite3.Connection, record: FirmwareRecord) -> None:
    query = (
        "INSERT INTO firmware (vendor_key, addr, timestamp, filename, hash) "
        "VALUES (?, ?, ?, ?, ?)"
    )
    try:
        conn.execute(
            query,
            (
                record.vendor_key,
                record.addr,
                record.timestamp.isoformat(),
                record.filename,
                record.hash,
            ),
        )
        conn.commit()
    except sqlite3.Error as e:
        log.exception("firmware insert failed for %s", record.filename)
        raise FirmwareDatabaseError(f"failed to execute: {e}") from e


def validate_upload(conn: sqlite3.Connection, req: UploadRequest, digest: str) -> List[str]:
    """
    Run every check and return the flags of those that failed, in check order.
    Nothing short-circuits: a bad token still gets its size and content checked.
    """
    failed: List[str] = []

    if not check_auth(conn, req.auth_token):
        failed.append("authkey")

    if not config.MIN_UPLOAD_BYTES <= req.size <= config.MAX_UPLOAD_BYTES:
        failed.append("sizecheck")

    if not req.data.startswith(config.CAB_MAGIC):
        failed.append("filetype")

    if config.METAINFO_MARKER not in req.data:
        failed.append("metadata")

    if hash_exists(conn, digest):
        failed.append("exists")

    return failed


def upload_firmware(
    conn: sqlite3.Connection,
    req: UploadRequest,
    upload_dir: str | None = None,
) -> UploadResult:
    """
    Validate -> write `{sha1}-{name}` into the upload dir -> insert the firmware row.

    Storage failures surface as HTTPException (403/413) from the storage layer;
    database failures as FirmwareDatabaseError. A failed insert removes the file
    it was meant to describe.
    """
    upload_dir = upload_dir or config.UPLOAD_DIR
    digest = content_hash(req.data)

    failed = validate_upload(conn, req, digest)
    if failed:
        log.info(
            "rejected upload %r from %s: %s",
            req.filename, req.remote_addr, ", ".join(failed),
        )
        return UploadResult(failed=failed)

    new_filename = stored_filename(digest, clean_filename(req.filename))
    dest = save_firmware(req.data, upload_dir, new_filename)

    record = FirmwareRecord(
        vendor_key=req.auth_token,
        addr=req.remote_addr,
        timestamp=datetime.now(timezone.utc),
        filename=new_filename,
        hash=digest,
    )
    try:
        insert_record(conn, record)
    except FirmwareDatabaseError:
        remove_file(dest)
        raise

    log.info("accepted %s from %s", new_filename, req.remote_addr)
    return UploadResult(record=record)
