"""
News scrap endpoints.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobtrack.core.auth_dependency import get_db, get_current_user_obj
from jobtrack.db.models.user import User
from jobtrack.services import news_scraps as news_scrap_service
from jobtrack.schemas.job_listing import CountResponse
from jobtrack.schemas.news_scrap import NewsScrapCreate, NewsScrapResponse, NewsScrapUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/news-scraps", tags=["News Scraps"])


@router.get("", response_model=List[NewsScrapResponse])
def list_news_scraps(
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """All scraps, newest first."""
    return [NewsScrapResponse.model_validate(scrap) for scrap in news_scrap_service.get_all_news_scraps(db, user)]


@router.get("/today/count", response_model=CountResponse)
def today_count(
    today: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    return CountResponse(count=news_scrap_service.get_today_news_scraps_count(db, user, today))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=NewsScrapResponse)
def create_news_scrap(
    scrap_data: NewsScrapCreate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Create a scrap; also completes today's news_scrap routine."""
    scrap = news_scrap_service.create_news_scrap(db, user, scrap_data.model_dump())
    logger.info(f"News scrap created: scrap_id={scrap.id}, user_id={user.id}")
    return NewsScrapResponse.model_validate(scrap)


@router.get("/{scrap_id}", response_model=NewsScrapResponse)
def get_news_scrap(
    scrap_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    return NewsScrapResponse.model_validate(news_scrap_service.get_news_scrap(db, user, scrap_id))


@router.patch("/{scrap_id}", response_model=NewsScrapResponse)
def update_news_scrap(
    scrap_id: int,
    scrap_data: NewsScrapUpdate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    scrap = news_scrap_service.update_news_scrap(db, user, scrap_id, scrap_data.model_dump(exclude_unset=True))
    return NewsScrapResponse.model_validate(scrap)


@router.delete("/{scrap_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_news_scrap(
    scrap_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    news_scrap_service.delete_news_scrap(db, user, scrap_id)
    return None
