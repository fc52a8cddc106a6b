import logging

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from sqlalchemy.orm import Session
from jobtrack.core.config import SECRET_KEY, ALGORITHM
from jobtrack.core.exceptions import NotAuthenticatedError
from jobtrack.db.session import SessionLocal
from jobtrack.db.models.user import User

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def get_db():
    """Database session dependency, one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(token: str = Depends(oauth2_scheme)) -> str:
    """Email (`sub` claim) of the bearer token."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise NotAuthenticatedError("Invalid token") from e

    email = payload.get("sub")
    if not email:
        raise NotAuthenticatedError("Invalid token")
    return email


def get_current_user_obj(
    email: str = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> User:
    """
    Owner of every record the request touches.

    A token whose user no longer exists is treated as unauthenticated.
    """
    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise NotAuthenticatedError()
    return user
