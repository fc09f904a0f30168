import os
from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import FileResponse
from app.core import config
from app.utils.storage import firmware_path

router = APIRouter(tags=["download"])

@router.get("/download")
def download(
    filename: str = Query(..., description="Stored filename, e.g. <sha1>-firmware.cab")
):
    path = firmware_path(config.UPLOAD_DIR, filename)
    if not os.path.isfile(path):
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(path, filename=filename, media_type="application/vnd.ms-cab-compressed")
