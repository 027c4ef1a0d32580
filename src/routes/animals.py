from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session
from src.core.db import get_db
from src.models.animal import AnimalFilters, AnimalResponse, MessageResponse
from src.models.user import CurrentUser
from src.services.auth.dependencies import get_current_user
from src.services.animals.records import (
    create_animal,
    delete_animal,
    get_animal,
    list_animals,
    update_animal,
)
from src.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/animals", tags=["Animals"])


@router.get("", response_model=list[AnimalResponse])
def get_animals_route(
    type: Optional[str] = None,
    status: Optional[str] = None,
    gender: Optional[str] = None,
    search: Optional[str] = None,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    filters = AnimalFilters(type=type, status=status, gender=gender, search=search)
    animals = list_animals(db, current_user.id, filters)
    return [AnimalResponse.model_validate(animal) for animal in animals]


@router.get("/{animal_id}", response_model=AnimalResponse)
def get_animal_route(
    animal_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return AnimalResponse.model_validate(get_animal(db, current_user.id, animal_id))


@router.post("", response_model=AnimalResponse, status_code=status.HTTP_201_CREATED)
def create_animal_route(
    number: Optional[str] = Form(None),
    type: Optional[str] = Form(None),
    age: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    gender: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Create an animal from a multipart form.

    All of number, type, age (birth date), status and gender are required;
    ``image`` is an optional jpeg/png/gif photo up to 5 MB.
    """
    fields = {
        "number": number,
        "type": type,
        "age": age,
        "status": status,
        "gender": gender,
    }
    animal = create_animal(db, current_user.id, fields, image)
    return AnimalResponse.model_validate(animal)


@router.put("/{animal_id}", response_model=AnimalResponse)
def update_animal_route(
    animal_id: int,
    number: Optional[str] = Form(None),
    type: Optional[str] = Form(None),
    age: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    gender: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Partially update an animal; omitted fields keep their current value."""
    fields = {
        "number": number,
        "type": type,
        "age": age,
        "status": status,
        "gender": gender,
    }
    animal = update_animal(db, current_user.id, animal_id, fields, image)
    return AnimalResponse.model_validate(animal)


@router.delete("/{animal_id}", response_model=MessageResponse)
def delete_animal_route(
    animal_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    delete_animal(db, current_user.id, animal_id)
    return MessageResponse(message="Animal deleted successfully")
