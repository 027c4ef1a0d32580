from datetime import date, datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict


class AnimalType(str, Enum):
    COW = "cow"
    GOAT = "goat"


class AnimalStatus(str, Enum):
    ACTIVE = "active"
    SOLD = "sold"
    DEAD = "dead"
    OTHER = "other"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class AnimalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    number: str
    type: AnimalType
    age: date
    status: AnimalStatus
    gender: Gender
    image: Optional[str] = None
    user_id: int
    created_at: datetime
    updated_at: datetime


class AnimalFilters(BaseModel):
    type: Optional[str] = None
    status: Optional[str] = None
    gender: Optional[str] = None
    search: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
