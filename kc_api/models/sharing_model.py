from sqlalchemy import Column, String, DateTime, func, Boolean
from kc_api.database import Base


class SharingRecord(Base):
    __tablename__ = "sharing_records"
    id = Column(String, primary_key=True, index=True)
    owner_id = Column(String, nullable=True)
    # no foreign key: a share may point at a file that never existed
    file_id = Column(String, nullable=True)
    public = Column(Boolean, default=False)
    public_token = Column(String, nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    expires_at = Column(DateTime(timezone=True), nullable=True)
