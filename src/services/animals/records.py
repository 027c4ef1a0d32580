from datetime import date, datetime
from typing import Optional
from fastapi import UploadFile
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func
from src.core.errors import ConflictError, FieldValidationError, NotFoundError
from src.models.animal import AnimalFilters, AnimalStatus, AnimalType, Gender
from src.models.schema.animal import Animal as AnimalModel
from src.services.animals.assets import delete_image, has_upload, save_image
from src.utils.logging import get_logger

logger = get_logger(__name__)

REQUIRED_FIELDS = ("number", "type", "age", "status", "gender")

ENUM_FIELDS = {
    "type": (AnimalType, "Invalid animal type"),
    "status": (AnimalStatus, "Invalid status"),
    "gender": (Gender, "Invalid gender"),
}


def parse_birth_date(value: str) -> date:
    """Parse ``YYYY-MM-DD`` (or a full ISO timestamp) into a past-or-present date."""
    try:
        birth_date = date.fromisoformat(value)
    except ValueError:
        try:
            birth_date = datetime.fromisoformat(value).date()
        except ValueError:
            raise FieldValidationError("Invalid birth date")

    if birth_date > date.today():
        raise FieldValidationError("Birth date cannot be in the future")
    return birth_date


def build_changes(fields: dict[str, Optional[str]]) -> dict:
    """
    Validate the submitted form fields and map them to column values.

    Only fields that were actually submitted (not None) end up in the
    result, so the same mapping drives both inserts and partial updates.

    Args:
        fields: Raw form values keyed by column name

    Returns:
        dict: {column: value} for every submitted field

    Raises:
        FieldValidationError: If a submitted value is empty or not allowed
    """
    changes = {}

    number = fields.get("number")
    if number is not None:
        number = number.strip()
        if not number:
            raise FieldValidationError("Animal number cannot be empty")
        changes["number"] = number

    for name, (enum, message) in ENUM_FIELDS.items():
        value = fields.get(name)
        if value is None:
            continue
        try:
            changes[name] = enum(value).value
        except ValueError:
            raise FieldValidationError(message)

    age = fields.get("age")
    if age is not None:
        changes["age"] = parse_birth_date(age)

    return changes


def _is_duplicate_number(db: Session, number: Optional[str], exclude_id: Optional[int] = None) -> bool:
    if number is None:
        return False
    query = db.query(AnimalModel.id).filter(AnimalModel.number == number)
    if exclude_id is not None:
        query = query.filter(AnimalModel.id != exclude_id)
    return query.first() is not None


def list_animals(db: Session, user_id: int, filters: AnimalFilters) -> list[AnimalModel]:
    """
    List the caller's animals, newest first.

    Args:
        db: Database session
        user_id: Owner whose records are listed
        filters: Optional equality filters on type/status/gender and a
            substring search on the animal number, combined with AND

    Returns:
        list: Matching Animal rows (empty when nothing matches)
    """
    query = db.query(AnimalModel).filter(AnimalModel.user_id == user_id)

    if filters.type:
        query = query.filter(AnimalModel.type == filters.type)
    if filters.status:
        query = query.filter(AnimalModel.status == filters.status)
    if filters.gender:
        query = query.filter(AnimalModel.gender == filters.gender)
    if filters.search:
        query = query.filter(AnimalModel.number.contains(filters.search, autoescape=True))

    animals = query.order_by(AnimalModel.created_at.desc(), AnimalModel.id.desc()).all()

    logger.info(f"Retrieved {len(animals)} animals for user {user_id}")
    return animals


def get_animal(db: Session, user_id: int, animal_id: int) -> AnimalModel:
    """Fetch one animal; another owner's record is reported as missing."""
    animal = (
        db.query(AnimalModel)
        .filter(AnimalModel.id == animal_id, AnimalModel.user_id == user_id)
        .first()
    )
    if animal is None:
        raise NotFoundError("Animal not found")
    return animal


def create_animal(
    db: Session,
    user_id: int,
    fields: dict[str, Optional[str]],
    image: Optional[UploadFile] = None,
) -> AnimalModel:
    """
    Create an animal owned by ``user_id``.

    Args:
        db: Database session
        user_id: Owner of the new record
        fields: Form values for number, type, age, status and gender
        image: Optional photo upload

    Returns:
        Animal: The stored row with its generated id and timestamps

    Raises:
        FieldValidationError: A field is missing or invalid, or the upload is rejected
        ConflictError: The animal number is already taken by any owner
    """
    missing = [name for name in REQUIRED_FIELDS if not fields.get(name)]
    if missing:
        raise FieldValidationError(f"All fields are required (missing: {', '.join(missing)})")

    values = build_changes(fields)
    image_url = save_image(image) if has_upload(image) else None

    animal = AnimalModel(**values, image=image_url, user_id=user_id)
    try:
        db.add(animal)
        db.commit()
    except IntegrityError:
        db.rollback()
        delete_image(image_url)
        if _is_duplicate_number(db, values["number"]):
            raise ConflictError("Animal number already exists")
        raise
    except SQLAlchemyError:
        db.rollback()
        delete_image(image_url)
        raise

    db.refresh(animal)
    logger.info(f"Created animal {animal.id} ({animal.number}) for user {user_id}")
    return animal


def update_animal(
    db: Session,
    user_id: int,
    animal_id: int,
    fields: dict[str, Optional[str]],
    image: Optional[UploadFile] = None,
) -> AnimalModel:
    """
    Partially update one of the caller's animals.

    Fields left out of ``fields`` keep their stored value; ``updated_at`` is
    always refreshed. A replaced image is deleted only after the new row
    state is committed, and a failed deletion does not fail the update.

    Raises:
        NotFoundError: The animal does not exist or belongs to someone else
        FieldValidationError: A submitted value or the upload is rejected
        ConflictError: The new number is already taken
    """
    animal = get_animal(db, user_id, animal_id)
    previous_image = animal.image

    changes = build_changes(fields)
    new_image = save_image(image) if has_upload(image) else None
    if new_image:
        changes["image"] = new_image
    changes["updated_at"] = func.now()

    statement = (
        update(AnimalModel)
        .where(AnimalModel.id == animal_id, AnimalModel.user_id == user_id)
        .values(**changes)
        .execution_options(synchronize_session=False)
    )
    try:
        result = db.execute(statement)
        if result.rowcount == 0:
            # deleted after get_animal
            db.rollback()
            delete_image(new_image)
            raise NotFoundError("Animal not found")
        db.commit()
    except IntegrityError:
        db.rollback()
        delete_image(new_image)
        if _is_duplicate_number(db, changes.get("number"), exclude_id=animal_id):
            raise ConflictError("Animal number already exists")
        raise
    except SQLAlchemyError:
        db.rollback()
        delete_image(new_image)
        raise

    if new_image and previous_image and previous_image != new_image:
        delete_image(previous_image)

    db.refresh(animal)
    logger.info(
        f"Updated animal {animal_id} for user {user_id}: {sorted(k for k in changes if k != 'updated_at')}"
    )
    return animal


def delete_animal(db: Session, user_id: int, animal_id: int) -> None:
    """Permanently delete one of the caller's animals and its photo."""
    animal = get_animal(db, user_id, animal_id)
    image = animal.image

    db.delete(animal)
    db.commit()

    # row is gone; a leftover file is the accepted failure mode
    delete_image(image)
    logger.info(f"Deleted animal {animal_id} for user {user_id}")
