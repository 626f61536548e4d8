from datetime import datetime
from typing import Optional

from pydantic import Field

from kc_api.models.enums import ApprovalStatus
from kc_api.schemas.base import CamelModel


class FileRecordResponse(CamelModel):
    id: str = Field(..., examples=["1"], description="File identification number")
    owner_id: Optional[str] = Field(None, examples=["1"], description="Uploader, recorded but not enforced")
    filename: str = Field(..., examples=["report.pdf"], description="File name provided by the client")
    mimetype: Optional[str] = Field(None, examples=["application/pdf"], description="Content type declared by the client")
    storage_path: Optional[str] = Field(None, examples=["uploads/report.pdf"])
    size: int = Field(0, examples=[4005], description="File size in bytes")
    description: Optional[str] = None
    approval_status: ApprovalStatus = Field(..., examples=["pending"])
    uploaded_at: Optional[datetime] = Field(None, examples=["2025-09-03T12:34:56Z"])


class ApproveFileRequest(CamelModel):
    status: str = Field("approved", examples=["approved"], description="approved or rejected")
