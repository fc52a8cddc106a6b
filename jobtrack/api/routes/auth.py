import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from jobtrack.db.models.user import User
from jobtrack.core.auth_dependency import get_db, get_current_user_obj
from jobtrack.core.logging_config import sanitize_log_data
from jobtrack.core.security import hash_password, verify_password, create_access_token
from jobtrack.schemas.auth import SignupRequest, TokenResponse, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


# ✅ USER SIGNUP
@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
def signup(
    payload: SignupRequest,
    db: Session = Depends(get_db)
):
    logger.info(f"Signup requested: {sanitize_log_data(payload.model_dump())}")

    existing_user = db.query(User).filter(User.email == payload.email).first()
    if existing_user:
        raise HTTPException(status_code=400, detail="Email already registered")

    user = User(
        full_name=payload.full_name,
        email=payload.email,
        password_hash=hash_password(payload.password),
        avatar_url=payload.avatar_url
    )

    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create user: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create user"
        )

    logger.info(f"User created: user_id={user.id}")
    return UserResponse.model_validate(user)


# ✅ OAUTH2 LOGIN FOR SWAGGER + JWT
@router.post("/login", response_model=TokenResponse)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    # Swagger sends "username", but we treat it as email
    user = db.query(User).filter(User.email == form_data.username).first()

    if not user or not verify_password(form_data.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token({"sub": user.email})

    return TokenResponse(access_token=token, token_type="bearer")


# ✅ CURRENT USER
@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user_obj)):
    return UserResponse.model_validate(user)
