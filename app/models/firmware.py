from datetime import datetime
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field

# query flags, in the order the checks run
CheckFlag = Literal["authkey", "sizecheck", "filetype", "metadata", "exists"]
CHECK_FLAGS: List[str] = ["authkey", "sizecheck", "filetype", "metadata", "exists"]

class UploadRequest(BaseModel):
    auth_token: str
    remote_addr: str
    data: bytes
    filename: str
    size: int

class FirmwareRecord(BaseModel):
    vendor_key: str
    addr: str
    timestamp: datetime
    filename: str
    hash: str

class UploadResult(BaseModel):
    failed: List[CheckFlag] = Field(default_factory=list)
    record: Optional[FirmwareRecord] = None

    @property
    def success(self) -> bool:
        return not self.failed

    def location(self, result_page: str) -> str:
        """Redirect target: one `<flag>=False&` per failed check, then `result=<bool>`."""
        parts = [f"{flag}=False" for flag in self.failed]
        parts.append(f"result={self.success}")
        return f"{result_page}?" + "&".join(parts)

class ResultReport(BaseModel):
    result: bool
    failed: List[CheckFlag]
    messages: Dict[str, str]
