# tests/conftest.py
from __future__ import annotations
import os
import sqlite3
import uuid
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core import config
from app.core.db import get_db, init_db

VENDOR_KEY = "0123456789abcdef-test-vendor"

# --------------------------------------------------------------------
# Point DATA_DIR / UPLOAD_DIR / DB_PATH at a fresh temp dir per test
# --------------------------------------------------------------------
@pytest.fixture(autouse=True)
def patch_data_dir(tmp_path, monkeypatch):
    data_dir = str(tmp_path / "data")
    monkeypatch.setattr(config, "DATA_DIR", data_dir)
    monkeypatch.setattr(config, "UPLOAD_DIR", os.path.join(data_dir, "uploads"))
    monkeypatch.setattr(config, "DB_PATH", os.path.join(data_dir, "lvfs.db"))
    init_db()
    conn = get_db()
    conn.execute("INSERT INTO vendors (vendor_key, name) VALUES (?, ?)", (VENDOR_KEY, "Test Vendor"))
    conn.commit()
    conn.close()
    return data_dir

@pytest.fixture
def conn(patch_data_dir) -> Generator[sqlite3.Connection, None, None]:
    c = get_db()
    yield c
    c.close()

@pytest.fixture(scope="session")
def client() -> TestClient:
    return TestClient(app)

@pytest.fixture
def vendor_key() -> str:
    return VENDOR_KEY

# --------------------------------------------------------------------
# In-memory cabinet payloads
# --------------------------------------------------------------------
def make_cab(size: int = 4096, magic: bytes = b"MSCF", metainfo: bool = True) -> bytes:
    """Bytes of exactly `size` that look like a cab archive; unique per call."""
    body = magic + b"\0\0\0\0" + uuid.uuid4().hex.encode()
    if metainfo:
        body += b"firmware.metainfo.xml\0"
    assert len(body) <= size
    return body + b"\0" * (size - len(body))

@pytest.fixture
def cab_bytes() -> bytes:
    return make_cab()

def count_rows(digest: str) -> int:
    conn = get_db()
    try:
        return conn.execute("SELECT COUNT(*) FROM firmware WHERE hash = ?", (digest,)).fetchone()[0]
    finally:
        conn.close()
