from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from jobtrack.db.base import Base

class Application(Base):
    """
    A submitted application moving through the hiring stages.

    `stage` and `progress` are always written together from the fixed
    stage list in jobtrack.services.applications.
    """
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    company = Column(String, nullable=False)
    position = Column(String, nullable=False)
    stage = Column(String, nullable=False, default="서류 접수")
    progress = Column(Integer, nullable=False, default=10)
    deadline = Column(String(10), nullable=True)  # YYYY-MM-DD
    applied_at = Column(DateTime(timezone=True), nullable=False)
    status = Column(String, nullable=False, default="active")
    url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        Index("idx_applications_user_applied", "user_id", "applied_at"),
    )
