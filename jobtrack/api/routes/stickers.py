"""
Sticker (sticky-note todo) endpoints.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobtrack.core.auth_dependency import get_db, get_current_user_obj
from jobtrack.db.models.user import User
from jobtrack.services import stickers as sticker_service
from jobtrack.schemas.sticker import StickerCreate, StickerResponse, StickerUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stickers", tags=["Stickers"])


@router.get("", response_model=List[StickerResponse])
def list_stickers(
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    return [StickerResponse.model_validate(sticker) for sticker in sticker_service.get_all_stickers(db, user)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=StickerResponse)
def create_sticker(
    sticker_data: StickerCreate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    return StickerResponse.model_validate(sticker_service.create_sticker(db, user, sticker_data.text))


@router.post("/{sticker_id}/toggle", response_model=StickerResponse)
def toggle_sticker(
    sticker_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    return StickerResponse.model_validate(sticker_service.toggle_sticker(db, user, sticker_id))


@router.patch("/{sticker_id}", response_model=StickerResponse)
def update_sticker(
    sticker_id: int,
    sticker_data: StickerUpdate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    return StickerResponse.model_validate(
        sticker_service.update_sticker(db, user, sticker_id, sticker_data.text)
    )


@router.delete("/{sticker_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_sticker(
    sticker_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    sticker_service.delete_sticker(db, user, sticker_id)
    return None
