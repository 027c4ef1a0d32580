from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from src.core.db import get_db
from src.models.user import CurrentUser, UserProfile
from src.services.auth.dependencies import get_current_user
from src.services.users.profile import get_profile

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/profile", response_model=UserProfile)
def get_profile_route(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return UserProfile.model_validate(get_profile(db, current_user.id))
