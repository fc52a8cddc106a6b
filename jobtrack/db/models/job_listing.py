"""
JobListing model for companies the user is considering but has not applied to.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from jobtrack.db.base import Base


class JobListing(Base):
    __tablename__ = "job_listings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    company = Column(String, nullable=False)
    position = Column(String, nullable=False)
    location = Column(String, nullable=False, default="")
    industry = Column(String, nullable=False, default="")
    company_size = Column(String, nullable=True)  # 대기업, 중견기업, 중소기업, 스타트업
    status = Column(String, nullable=False, default="Not applied")  # "Not applied" | "Applied"
    deadline = Column(String(10), nullable=True)  # YYYY-MM-DD
    job_post_url = Column(String, nullable=False, default="")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        Index("idx_job_listings_user_deadline", "user_id", "deadline"),
    )

    def __repr__(self):
        return f"<JobListing(id={self.id}, company='{self.company}', position='{self.position}')>"
