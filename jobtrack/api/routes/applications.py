"""
Application board endpoints.

Provides CRUD plus the stage, deadline and reject/restore transitions of
submitted applications.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobtrack.core.auth_dependency import get_db, get_current_user_obj
from jobtrack.db.models.user import User
from jobtrack.services import applications as application_service
from jobtrack.schemas.application import (
    ApplicationBoardResponse,
    ApplicationBucketResponse,
    ApplicationCreate,
    ApplicationResponse,
    ApplicationUpdate,
    DDayBadgeResponse,
    DeadlineUpdate,
    ProgressUpdate,
    StatusCountResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["Applications"])

DATE_QUERY = r"^\d{4}-\d{2}-\d{2}$"


def application_response(application, today: Optional[str] = None) -> ApplicationResponse:
    response = ApplicationResponse.model_validate(application)
    response.badge = DDayBadgeResponse.model_validate(application_service.d_day_badge(application, today))
    return response


def bucket_response(bucket, today: Optional[str] = None) -> ApplicationBucketResponse:
    return ApplicationBucketResponse(
        items=[application_response(application, today) for application in bucket.visible],
        total=len(bucket.items),
        has_more=bucket.has_more,
        hidden_count=bucket.hidden_count,
    )


@router.get("", response_model=List[ApplicationResponse])
def list_applications(
    application_status: Optional[str] = Query(None, alias="status", description="Filter by status"),
    today: Optional[str] = Query(None, pattern=DATE_QUERY, description="Reference day for badges"),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """All applications, most recently applied first."""
    if application_status:
        applications = application_service.get_applications_by_status(db, user, application_status)
    else:
        applications = application_service.get_all_applications(db, user)
    return [application_response(application, today) for application in applications]


@router.get("/board", response_model=ApplicationBoardResponse)
def application_board(
    search: Optional[str] = Query(None, description="Company name contains (case-insensitive)"),
    position: str = Query("all", description="Exact position or 'all'"),
    expand_active: bool = Query(False),
    expand_accepted: bool = Query(False),
    expand_rejected: bool = Query(False),
    today: Optional[str] = Query(None, pattern=DATE_QUERY),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """
    Applications split into active, accepted and rejected buckets.

    Active shows 10 items and the closed buckets 1 item unless expanded.
    """
    board = application_service.bucket_applications(
        application_service.get_all_applications(db, user),
        search=search,
        position=position,
        expand_active=expand_active,
        expand_accepted=expand_accepted,
        expand_rejected=expand_rejected,
    )
    return ApplicationBoardResponse(
        active=bucket_response(board.active, today),
        accepted=bucket_response(board.accepted, today),
        rejected=bucket_response(board.rejected, today),
        positions=board.positions,
    )


@router.get("/counts", response_model=StatusCountResponse)
def status_counts(
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    return StatusCountResponse(counts=application_service.get_applications_count_by_status(db, user))


@router.get("/upcoming", response_model=List[ApplicationResponse])
def upcoming_deadlines(
    today: Optional[str] = Query(None, pattern=DATE_QUERY),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Active or reviewing applications due within seven days."""
    applications = application_service.get_upcoming_deadlines(db, user, today)
    return [application_response(application, today) for application in applications]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApplicationResponse)
def create_application(
    application_data: ApplicationCreate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    application = application_service.create_application(db, user, **application_data.model_dump())
    logger.info(f"Application created: application_id={application.id}, user_id={user.id}, company={application.company}")
    return application_response(application)


@router.get("/{application_id}", response_model=ApplicationResponse)
def get_application(
    application_id: int,
    today: Optional[str] = Query(None, pattern=DATE_QUERY),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    return application_response(application_service.get_application(db, user, application_id), today)


@router.patch("/{application_id}", response_model=ApplicationResponse)
def update_application(
    application_id: int,
    application_data: ApplicationUpdate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Only updates provided fields."""
    application = application_service.update_application(
        db, user, application_id, application_data.model_dump(exclude_unset=True)
    )
    return application_response(application)


@router.put("/{application_id}/progress", response_model=ApplicationResponse)
def update_progress(
    application_id: int,
    progress_data: ProgressUpdate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Move to a stage; 최종합격 marks the application accepted."""
    application = application_service.update_application_progress(
        db, user, application_id, progress_data.stage
    )
    return application_response(application)


@router.put("/{application_id}/deadline", response_model=ApplicationResponse)
def update_deadline(
    application_id: int,
    deadline_data: DeadlineUpdate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Setting a deadline makes the application active; clearing it marks it under review."""
    application = application_service.update_application_deadline(
        db, user, application_id, deadline_data.deadline
    )
    return application_response(application)


@router.post("/{application_id}/reject", response_model=ApplicationResponse)
def reject_application(
    application_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    application = application_service.reject_application(db, user, application_id)
    logger.info(f"Application rejected: application_id={application_id}, user_id={user.id}")
    return application_response(application)


@router.post("/{application_id}/restore", response_model=ApplicationResponse)
def restore_application(
    application_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    application = application_service.restore_application(db, user, application_id)
    logger.info(f"Application restored: application_id={application_id}, user_id={user.id}")
    return application_response(application)


@router.delete("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_application(
    application_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    application_service.delete_application(db, user, application_id)
    return None
