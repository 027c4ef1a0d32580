from sqlalchemy.orm import Session
from src.core.errors import NotFoundError
from src.models.schema.user import User as UserModel


def get_profile(db: Session, user_id: int) -> UserModel:
    """Return the user row behind an authenticated identity."""
    user = db.query(UserModel).filter(UserModel.id == user_id).first()
    if user is None:
        # account removed between authentication and this lookup
        raise NotFoundError("User not found")
    return user
