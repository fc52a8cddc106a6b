import logging
import bcrypt
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from jose import jwt
from jobtrack.core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES

logger = logging.getLogger(__name__)

# passlib verifies legacy hashes; new hashes go through bcrypt directly
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
)

BCRYPT_MAX_BYTES = 72


def _truncate_password(password: str) -> bytes:
    """Encode a password and cut it to the bcrypt limit on a UTF-8 boundary."""
    password_bytes = password.encode("utf-8")
    if len(password_bytes) <= BCRYPT_MAX_BYTES:
        return password_bytes

    logger.warning("Password exceeds 72 bytes, truncating before hashing")
    truncated = password_bytes[:BCRYPT_MAX_BYTES]
    return truncated.decode("utf-8", errors="ignore").encode("utf-8")


def hash_password(password: str) -> str:
    """
    Hash a password with bcrypt.

    Args:
        password: Plain text password

    Returns:
        Hashed password string (bcrypt format compatible with passlib)

    Raises:
        ValueError: If the password cannot be hashed
    """
    try:
        hashed = bcrypt.hashpw(_truncate_password(password), bcrypt.gensalt())
        return hashed.decode("utf-8")
    except (TypeError, ValueError) as e:
        logger.error(f"Password hashing failed: {e}")
        raise ValueError("Invalid password") from e


def verify_password(password: str, hashed: str) -> bool:
    """
    Verify a password against its hash.

    Falls back to passlib for hashes bcrypt cannot read directly.
    """
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(_truncate_password(password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        try:
            return pwd_context.verify(password, hashed)
        except (ValueError, TypeError) as e:
            logger.error(f"Password verification failed: {e}")
            return False


def create_access_token(data: dict, expires_delta: timedelta = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
