from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from src.core.db import get_db
from src.models.animal import MessageResponse
from src.models.user import (
    LoginResponse,
    RegisterResponse,
    UserCreate,
    UserLogin,
    UserProfile,
)
from src.services.auth.accounts import authenticate_user, register_user, verify_email

router = APIRouter(prefix="/auth", tags=["Auth"])

# overrides the global BearerAuth requirement in the OpenAPI schema
PUBLIC = {"security": []}


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    openapi_extra=PUBLIC,
)
def register_route(user: UserCreate, db: Session = Depends(get_db)):
    new_user = register_user(db, user)
    return RegisterResponse(
        message="Registration successful. Please check your email to verify your account.",
        user=UserProfile.model_validate(new_user),
    )


@router.post("/login", response_model=LoginResponse, openapi_extra=PUBLIC)
def login_route(credentials: UserLogin, db: Session = Depends(get_db)):
    user, token = authenticate_user(db, credentials)
    return LoginResponse(token=token, user=UserProfile.model_validate(user))


@router.get("/verify/{token}", response_model=MessageResponse, openapi_extra=PUBLIC)
def verify_email_route(token: str, db: Session = Depends(get_db)):
    verify_email(db, token)
    return MessageResponse(message="Email verified successfully")
