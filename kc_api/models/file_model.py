from sqlalchemy import Column, String, DateTime, func, BIGINT
from kc_api.database import Base
from kc_api.models.enums import ApprovalStatus


class FileRecord(Base):
    __tablename__ = "file_records"
    id = Column(String, primary_key=True, index=True)
    owner_id = Column(String, nullable=True)
    filename = Column(String, nullable=False)
    mimetype = Column(String, nullable=True)
    storage_path = Column(String, nullable=True)
    size = Column(BIGINT, default=0)
    description = Column(String, nullable=True)
    approval_status = Column(String, nullable=False, default=ApprovalStatus.PENDING.value)
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now())
