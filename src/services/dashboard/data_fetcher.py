from sqlalchemy import func
from sqlalchemy.orm import Session
from src.domain.herd_summary import build_summary
from src.models.schema.animal import Animal as AnimalModel
from src.utils.logging import get_logger

logger = get_logger(__name__)


def _count_by(db: Session, user_id: int, column) -> dict[str, int]:
    rows = (
        db.query(column, func.count(AnimalModel.id))
        .filter(AnimalModel.user_id == user_id)
        .group_by(column)
        .all()
    )
    return {value: count for value, count in rows}


def fetch_herd_summary(db: Session, user_id: int) -> dict:
    """
    Count the caller's animals per type, status and gender.

    Args:
        db: Database session
        user_id: Owner whose herd is summarised

    Returns:
        dict: Summary as built by ``build_summary``
    """
    summary = build_summary(
        type_counts=_count_by(db, user_id, AnimalModel.type),
        status_counts=_count_by(db, user_id, AnimalModel.status),
        gender_counts=_count_by(db, user_id, AnimalModel.gender),
    )
    logger.info(f"Built herd summary for user {user_id}: {summary['total']} animals")
    return summary
