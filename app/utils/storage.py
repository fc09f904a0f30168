import os
import logging
from fastapi import HTTPException
from app.core import config

log = logging.getLogger("storage")

def clean_filename(name: str | None) -> str:
    """Final path component of a client-declared filename."""
    base = os.path.basename((name or "").replace("\\", "/"))
    if base in ("", ".", ".."):
        return config.DEFAULT_FILENAME
    return base

def stored_filename(digest: str, name: str) -> str:
    return f"{digest}-{name}"

def remove_file(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError:
        log.warning("could not remove %s", path, exc_info=True)

def save_firmware(data: bytes, upload_dir: str, filename: str) -> str:
    dest = os.path.join(upload_dir, filename)
    try:
        os.makedirs(upload_dir, exist_ok=True)
        fh = open(dest, "wb")
    except OSError:
        log.exception("cannot open %s for writing", dest)
        raise HTTPException(
            status_code=403,
            detail=f"Write permission for {upload_dir} missing",
        )

    try:
        with fh:
            fh.write(data)
    except OSError:
        log.exception("short write to %s", dest)
        remove_file(dest)
        raise HTTPException(status_code=413, detail=f"Failed to write {dest}")

    log.info("stored %d bytes at %s", len(data), dest)
    return dest

def firmware_path(upload_dir: str, name: str) -> str:
    if not name or name in (".", "..") or os.path.basename(name) != name or "\\" in name:
        raise HTTPException(status_code=400, detail="Invalid filename")
    return os.path.join(upload_dir, name)
