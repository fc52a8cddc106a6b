from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.sql import func
from jobtrack.db.base import Base


class TimeLog(Base):
    """A block of time on one day, [start_hour, end_hour)."""
    __tablename__ = "time_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category = Column(String, nullable=False)
    content = Column(Text, nullable=False, default="")
    date = Column(String(10), nullable=False)  # YYYY-MM-DD
    start_hour = Column(Integer, nullable=False)
    end_hour = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        Index("idx_time_logs_user_date", "user_id", "date"),
        CheckConstraint("start_hour >= 0 AND end_hour <= 23 AND end_hour > start_hour", name="ck_time_logs_hours"),
    )
