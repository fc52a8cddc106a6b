from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from jobtrack.db.base import Base


class DailyRoutine(Base):
    """
    Completion state of one routine on one day.

    At most one row exists per (user_id, date, routine_key).
    """
    __tablename__ = "daily_routine_status"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(String(10), nullable=False, index=True)  # YYYY-MM-DD
    routine_key = Column(String, nullable=False)  # wake_up, exercise, time_block, news_scrap, job_listing
    check_type = Column(String, nullable=False)  # "self" | "auto"
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "date", "routine_key", name="uq_routine_user_date_key"),
    )
