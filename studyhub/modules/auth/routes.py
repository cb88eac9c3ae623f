from fastapi import APIRouter, Depends
from studyhub.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
from studyhub.modules.auth.service import AuthService
from studyhub.core.dependencies import get_auth_service, get_session, get_current_user_id
from studyhub.core.session import SessionContext
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user and create their profile"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
def logout(session: SessionContext = Depends(get_session)):
    """End the session for the presented token"""
    session.logout()
    return {"message": "Logged out successfully"}


@router.get("/me")
def get_current_user(current_user: Dict = Depends(get_current_user_id)):
    """Get current authenticated user"""
    return current_user
