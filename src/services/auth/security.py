from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from src.core.configs import settings
from src.core.errors import InvalidCredentialError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCESS_TOKEN = "access"
VERIFICATION_TOKEN = "email_verification"


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def _encode(user_id: int, token_type: str, expires_delta: timedelta) -> str:
    expire = datetime.now(timezone.utc) + expires_delta
    payload = {"sub": str(user_id), "type": token_type, "exp": expire}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.jwt_algorithm)


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a bearer token for ``user_id``; defaults to the configured lifetime."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    return _encode(user_id, ACCESS_TOKEN, expires_delta)


def create_verification_token(user_id: int) -> str:
    return _encode(
        user_id,
        VERIFICATION_TOKEN,
        timedelta(hours=settings.verification_token_expire_hours),
    )


def decode_token(token: str, expected_type: str = ACCESS_TOKEN) -> int:
    """
    Verify signature, expiry and purpose of a token.

    Args:
        token: Encoded JWT
        expected_type: Required value of the ``type`` claim

    Returns:
        int: The user id carried in ``sub``

    Raises:
        InvalidCredentialError: If the token is malformed, tampered, expired,
            issued for another purpose or has a non-numeric subject
    """
    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.jwt_algorithm]
        )
    except JWTError as e:
        raise InvalidCredentialError() from e

    if payload.get("type") != expected_type:
        raise InvalidCredentialError()

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidCredentialError() from e
