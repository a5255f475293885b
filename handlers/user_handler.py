"""
handlers/user_handler.py
-------------------------
Registration, login and user listing under /api/users.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from handlers.dependencies import get_user_service
from services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


@router.post("/register")
def register(body: RegisterRequest, service: UserService = Depends(get_user_service)):
    user = service.register(body.name, body.email, body.password)
    return user.to_public_dict()


@router.post("/login")
def login(body: LoginRequest, service: UserService = Depends(get_user_service)):
    user = service.login(body.email, body.password)
    return user.to_public_dict()


@router.get("")
def list_users(service: UserService = Depends(get_user_service)):
    return [u.to_public_dict() for u in service.list_users()]
