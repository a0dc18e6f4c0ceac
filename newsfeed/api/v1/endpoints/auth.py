import re

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator

from ...dependencies import get_user_repository
from ....core.security import create_access_token, hash_password, verify_password
from ....exceptions import UserAlreadyExistsError
from ....repositories.user_repository import InMemoryUserRepository

logger = structlog.get_logger(__name__)

router = APIRouter()

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        name = value.strip()
        if len(name) < 2:
            raise ValueError("Name must be at least 2 characters long")
        if len(name) > 100:
            raise ValueError("Name must be no more than 100 characters long")
        return name

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        email = value.strip()
        if not EMAIL_PATTERN.match(email):
            raise ValueError("Invalid email format")
        return email

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value) < 8:
            raise ValueError("Password must be at least 8 characters long")
        if len(value) > 128:
            raise ValueError("Password must be no more than 128 characters long")
        return value


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: int
    name: str
    email: str


class TokenResponse(BaseModel):
    token: str


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(
    request: RegisterRequest,
    users: InMemoryUserRepository = Depends(get_user_repository)
):
    try:
        user = users.create(
            name=request.name,
            email=request.email,
            password_hash=hash_password(request.password),
        )
    except UserAlreadyExistsError:
        raise HTTPException(status_code=409, detail="User already exists")

    logger.info("user_registered", user_id=user.id)
    return UserResponse(id=user.id, name=user.name, email=user.email)


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    users: InMemoryUserRepository = Depends(get_user_repository)
):
    user = users.get_by_email(request.email)
    if not user or not verify_password(request.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return TokenResponse(token=create_access_token(user.id, user.email))
