from typing import Optional
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from resume_builder.core.config import Settings
from resume_builder.schemas.user import UserResponse
from resume_builder.services.auth_service import AuthService
from resume_builder.services.photo_storage import PhotoStorage
from resume_builder.services.resume_service import ResumeService

# auto_error=False: a missing header is reported through AuthError like any other bad token
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_resume_service(request: Request) -> ResumeService:
    return request.app.state.resume_service


def get_photo_storage(request: Request) -> PhotoStorage:
    return request.app.state.photo_storage


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """Current user from the Bearer token"""
    return auth_service.authenticate(token)
