from typing import Optional
from fastapi import APIRouter, Query
from app.models.firmware import CHECK_FLAGS, ResultReport

router = APIRouter(tags=["result"])

MESSAGES = {
    "authkey": "Failed to upload file: authentication key invalid",
    "sizecheck": "Failed to upload file: file size not in the allowed range",
    "filetype": "Failed to upload file: not a cabinet archive",
    "metadata": "Failed to upload file: archive has no .metainfo.xml metadata",
    "exists": "Failed to upload file: firmware already uploaded",
}

@router.get("/result", response_model=ResultReport)
@router.get("/result.php", response_model=ResultReport, include_in_schema=False)
def result(
    result: bool = Query(False, description="Overall outcome from /upload"),
    authkey: Optional[bool] = None,
    sizecheck: Optional[bool] = None,
    filetype: Optional[bool] = None,
    metadata: Optional[bool] = None,
    exists: Optional[bool] = None,
):
    flags = {
        "authkey": authkey,
        "sizecheck": sizecheck,
        "filetype": filetype,
        "metadata": metadata,
        "exists": exists,
    }
    failed = [f for f in CHECK_FLAGS if flags[f] is False]
    return ResultReport(
        result=result and not failed,
        failed=failed,
        messages={f: MESSAGES[f] for f in failed},
    )
