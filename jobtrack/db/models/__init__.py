"""
Database models module.

Importing this package registers every model with SQLAlchemy's Base.metadata
before table creation or migration autogeneration.
"""
from jobtrack.db.models.user import User
from jobtrack.db.models.job_listing import JobListing
from jobtrack.db.models.application import Application
from jobtrack.db.models.schedule import Schedule
from jobtrack.db.models.daily_routine import DailyRoutine
from jobtrack.db.models.news_scrap import NewsScrap
from jobtrack.db.models.time_log import TimeLog
from jobtrack.db.models.weekly_goal import WeeklyGoal
from jobtrack.db.models.sticker import Sticker

__all__ = [
    "User",
    "JobListing",
    "Application",
    "Schedule",
    "DailyRoutine",
    "NewsScrap",
    "TimeLog",
    "WeeklyGoal",
    "Sticker",
]
