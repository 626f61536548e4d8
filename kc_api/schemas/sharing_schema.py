from datetime import datetime
from typing import Optional

from pydantic import Field

from kc_api.schemas.base import CamelModel


class CreateSharingRequest(CamelModel):
    file_id: Optional[str] = Field(None, examples=["1"])
    public: bool = Field(False, description="A public share gets a lookup token")
    expires_at: Optional[datetime] = Field(None, examples=["2025-09-03T12:34:56Z"], description="Stored, never checked")


class UpdateSharingRequest(CamelModel):
    public: Optional[bool] = None
    expires_at: Optional[datetime] = None


class SharingResponse(CamelModel):
    id: str
    owner_id: Optional[str] = None
    file_id: Optional[str] = None
    public: bool = False
    public_token: Optional[str] = Field(None, examples=["share-1"])
    created_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
