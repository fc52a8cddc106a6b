from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from jobtrack.db.base import Base


class NewsScrap(Base):
    __tablename__ = "news_scraps"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    article_url = Column(String, nullable=False)
    headline = Column(String, nullable=False)
    content = Column(Text, nullable=False, default="")  # rich text (HTML)
    applied_role = Column(String, nullable=True)
    industry = Column(String, nullable=True)
    company_name = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
