from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from src.core.configs import settings
from src.core.errors import (
    ConflictError,
    FieldValidationError,
    HerdbookError,
    InvalidCredentialError,
    NotFoundError,
)
from src.models.schema.user import User as UserModel
from src.models.user import UserCreate, UserLogin
from src.services.auth.security import (
    VERIFICATION_TOKEN,
    create_access_token,
    create_verification_token,
    decode_token,
    get_password_hash,
    verify_password,
)
from src.services.mail.verification import send_verification_email
from src.utils.logging import get_logger

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def register_user(db: Session, user: UserCreate) -> UserModel:
    """
    Create an account and send its verification e-mail.

    Args:
        db: Database session
        user: Registration payload

    Returns:
        User: The stored user

    Raises:
        FieldValidationError: Empty name or a password that is too short
        ConflictError: The e-mail is already registered
    """
    name = user.name.strip()
    if not name or not user.password:
        raise FieldValidationError("All fields are required")
    if len(user.password) < MIN_PASSWORD_LENGTH:
        raise FieldValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )

    email = _normalize_email(user.email)
    if db.query(UserModel.id).filter(UserModel.email == email).first():
        raise ConflictError("Email already registered")

    new_user = UserModel(
        email=email,
        password=get_password_hash(user.password),
        name=name,
        email_verified=False,
    )
    try:
        db.add(new_user)
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent registration
        db.rollback()
        raise ConflictError("Email already registered")

    db.refresh(new_user)
    logger.info(f"Registered user {new_user.id}")

    send_verification_email(
        new_user.email, create_verification_token(new_user.id), new_user.name
    )
    return new_user


def authenticate_user(db: Session, credentials: UserLogin) -> tuple[UserModel, str]:
    """
    Check e-mail and password and issue an access token.

    Returns:
        tuple: (user, access token)

    Raises:
        HerdbookError: 401 on a wrong e-mail or password, 403 when e-mail
            verification is required and still pending
    """
    email = _normalize_email(credentials.email)
    user = db.query(UserModel).filter(UserModel.email == email).first()

    if user is None or not verify_password(credentials.password, user.password):
        logger.info("Rejected login attempt")
        raise HerdbookError("Invalid email or password", http_status=401)

    if settings.require_email_verification and not user.email_verified:
        raise HerdbookError("Please verify your email before logging in", http_status=403)

    return user, create_access_token(user.id)


def verify_email(db: Session, token: str) -> UserModel:
    """Mark the account behind a verification token as verified."""
    try:
        user_id = decode_token(token, expected_type=VERIFICATION_TOKEN)
    except InvalidCredentialError:
        raise FieldValidationError("Invalid or expired verification link")

    user = db.query(UserModel).filter(UserModel.id == user_id).first()
    if user is None:
        raise NotFoundError("User not found")

    if not user.email_verified:
        user.email_verified = True
        db.commit()
        db.refresh(user)
        logger.info(f"Verified e-mail for user {user_id}")

    return user
