from sqlalchemy import Column, String, DateTime, func
from kc_api.database import Base
from kc_api.models.enums import Role


class User(Base):
    __tablename__ = "users"
    # id is "count + 1", see database.next_sequential_id
    id = Column(String, primary_key=True, index=True)
    # not unique: duplicates are only rejected by the check in registration
    email = Column(String, nullable=False, index=True)
    username = Column(String, nullable=False)
    password = Column(String, nullable=False)
    role = Column(String, nullable=False, default=Role.USER.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())
