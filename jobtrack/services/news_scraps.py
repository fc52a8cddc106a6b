"""
News scrap service.

Saving a new scrap also completes today's news_scrap routine.
"""
import logging
from datetime import date, datetime, time
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from jobtrack.db.data_access import UserScopedTable
from jobtrack.db.models.news_scrap import NewsScrap
from jobtrack.services.dates import DateLike, parse_date
from jobtrack.services.routines import mark_auto_check

logger = logging.getLogger(__name__)

SCRAP_FIELDS = ("article_url", "headline", "content", "applied_role", "industry", "company_name")


def _table(db: Session, user) -> UserScopedTable:
    return UserScopedTable(db, NewsScrap, user)


def get_all_news_scraps(db: Session, user) -> List[NewsScrap]:
    """All scraps, newest first."""
    return _table(db, user).select_all(order_by=[NewsScrap.created_at.desc(), NewsScrap.id.desc()])


def get_news_scrap(db: Session, user, scrap_id: int) -> NewsScrap:
    return _table(db, user).get_or_raise(scrap_id)


def get_today_news_scraps_count(db: Session, user, today: Optional[DateLike] = None) -> int:
    day = parse_date(today) if today is not None else date.today()
    start = datetime.combine(day, time.min)
    end = datetime.combine(day, time.max)
    return _table(db, user).count(where=[NewsScrap.created_at >= start, NewsScrap.created_at <= end])


def create_news_scrap(
    db: Session, user, values: Dict[str, Any], today: Optional[DateLike] = None
) -> NewsScrap:
    scrap = _table(db, user).insert({key: values.get(key) for key in SCRAP_FIELDS if key in values})
    mark_auto_check(db, user, today or date.today(), "news_scrap")
    return scrap


def update_news_scrap(db: Session, user, scrap_id: int, changes: Dict[str, Any]) -> NewsScrap:
    values = {key: value for key, value in changes.items() if key in SCRAP_FIELDS}
    return _table(db, user).update(scrap_id, values)


def delete_news_scrap(db: Session, user, scrap_id: int) -> None:
    _table(db, user).delete(scrap_id)
