from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from src.core.db import get_db
from src.models.dashboard import HerdSummary
from src.models.user import CurrentUser
from src.services.auth.dependencies import get_current_user
from src.services.dashboard.data_fetcher import fetch_herd_summary

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=HerdSummary)
def dashboard_stats_route(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Counts of the caller's animals per type, status and gender."""
    return fetch_herd_summary(db, current_user.id)
