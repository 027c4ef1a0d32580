from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from src.core.db import get_db
from src.core.errors import (
    AuthenticationRequiredError,
    StoreError,
    SubjectNotFoundError,
)
from src.models.schema.user import User as UserModel
from src.models.user import CurrentUser
from src.services.auth.security import decode_token
from src.utils.logging import get_logger

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> CurrentUser:
    """
    Resolve the bearer token on the request to the calling user.

    Raises:
        AuthenticationRequiredError: No bearer token was sent (401)
        InvalidCredentialError: Token failed verification (403)
        SubjectNotFoundError: Token is valid but its user is gone (403)
        StoreError: The user lookup itself failed (500)
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationRequiredError()

    user_id = decode_token(credentials.credentials)

    try:
        row = (
            db.query(UserModel.id, UserModel.email)
            .filter(UserModel.id == user_id)
            .first()
        )
    except SQLAlchemyError as e:
        logger.error(f"Error resolving token subject {user_id}: {e}")
        raise StoreError() from e

    if row is None:
        logger.warning(f"Token subject {user_id} no longer exists")
        raise SubjectNotFoundError()

    return CurrentUser(id=row.id, email=row.email)
