"""
Error taxonomy shared by stores, services and the API layer.

Services raise these, the handlers in ``resume_builder.api.errors`` turn
them into ``{"message": ..., "detail": ...}`` responses with the matching status code.
"""
from fastapi import status


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, message: str = None, status_code: int = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Required fields are missing"


class ConflictError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists with this email or mobile number"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Token is not valid"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"
