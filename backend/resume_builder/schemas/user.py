from pydantic import EmailStr
from typing import Optional, Union
from datetime import datetime
from resume_builder.schemas.base import CamelModel


class SignupRequest(CamelModel):
    full_name: Optional[str] = None
    email: Optional[EmailStr] = None
    mobile: Optional[str] = None
    password: Optional[str] = None
    language: Optional[str] = None
    photo: Optional[str] = None
    # multipart forms send the string "true"
    terms_accepted: Optional[Union[bool, str]] = None


class LoginRequest(CamelModel):
    # the frontend sends the identifier in the "email" field
    email: Optional[str] = None
    identifier: Optional[str] = None
    password: Optional[str] = None


class SendOtpRequest(CamelModel):
    mobile: Optional[str] = None


class VerifyOtpRequest(CamelModel):
    mobile: Optional[str] = None
    otp: Optional[str] = None


class UserResponse(CamelModel):
    """Sanitized user view: no password hash, no OTP"""
    id: int
    full_name: str
    email: Optional[str] = None
    mobile: Optional[str] = None
    photo: Optional[str] = None
    language: str
    is_email_verified: bool = False
    is_mobile_verified: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AuthResponse(CamelModel):
    message: str
    token: str
    user: UserResponse


class MeResponse(CamelModel):
    user: UserResponse


class MessageResponse(CamelModel):
    message: str


class OtpSentResponse(CamelModel):
    message: str
    otp: Optional[str] = None
