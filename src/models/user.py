from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr


class UserCreate(BaseModel):
    name: str
    email: EmailStr
    password: str


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserProfile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    created_at: datetime


class RegisterResponse(BaseModel):
    message: str
    user: UserProfile


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserProfile


class CurrentUser(BaseModel):
    """Identity attached to an authenticated request."""

    id: int
    email: str
