import sqlite3
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import RedirectResponse
from app.core import config
from app.core.db import get_conn
from app.models.firmware import UploadRequest
from app.services.firmware import upload_firmware

router = APIRouter(tags=["upload"])

@router.post("/upload")
@router.post("/upload.php", include_in_schema=False)
async def upload(
    request: Request,
    auth: str = Form(""),
    file: UploadFile = File(...),
    conn: sqlite3.Connection = Depends(get_conn),
):
    data = await file.read()
    req = UploadRequest(
        auth_token=auth,
        remote_addr=request.client.host if request.client else "",
        data=data,
        filename=file.filename or "",
        size=file.size if file.size is not None else len(data),
    )
    result = upload_firmware(conn, req)
    return RedirectResponse(result.location(config.RESULT_PAGE), status_code=302)
