from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from typing import Optional
import logging
from resume_builder.api.dependencies import (
    get_app_settings,
    get_auth_service,
    get_current_user,
    get_photo_storage,
)
from resume_builder.core.config import Settings
from resume_builder.schemas.user import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    MessageResponse,
    OtpSentResponse,
    SendOtpRequest,
    UserResponse,
    VerifyOtpRequest,
)
from resume_builder.services.auth_service import AuthService
from resume_builder.services.photo_storage import PhotoStorage

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    full_name: Optional[str] = Form(None, alias="fullName"),
    email: Optional[str] = Form(None),
    mobile: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    language: Optional[str] = Form(None),
    terms_accepted: Optional[str] = Form(None, alias="termsAccepted"),
    photo: Optional[UploadFile] = File(None),
    auth_service: AuthService = Depends(get_auth_service),
    photo_storage: PhotoStorage = Depends(get_photo_storage),
):
    """Registration (multipart form, optional profile photo)"""
    signup_request = auth_service.validate_signup({
        "full_name": full_name,
        "email": email,
        "mobile": mobile,
        "password": password,
        "language": language,
        "terms_accepted": terms_accepted,
    })

    stored_photo = None
    if photo is not None and photo.filename:
        stored_photo = photo_storage.save(photo)
        signup_request = signup_request.model_copy(update={"photo": stored_photo.reference})

    try:
        result = auth_service.signup(signup_request)
    except Exception:
        if stored_photo is not None:
            logger.info(f"Signup failed, removing uploaded photo {stored_photo.path}")
            photo_storage.discard(stored_photo.path)
        raise

    return AuthResponse(message="User created successfully", **result)


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Login with email or mobile number"""
    result = auth_service.login(credentials.identifier or credentials.email, credentials.password)
    return AuthResponse(message="Login successful", **result)


@router.get("/me", response_model=MeResponse)
def me(current_user: UserResponse = Depends(get_current_user)):
    """Current user"""
    return MeResponse(user=current_user)


@router.post("/send-otp", response_model=OtpSentResponse, response_model_exclude_none=True)
def send_otp(
    body: SendOtpRequest,
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
):
    """Issues an OTP for the mobile number"""
    otp_code = auth_service.request_otp(body.mobile)
    return OtpSentResponse(
        message="OTP sent successfully",
        otp=otp_code if settings.OTP_DEBUG_ECHO else None,
    )


@router.post("/verify-otp", response_model=MessageResponse)
def verify_otp(
    body: VerifyOtpRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Verifies the mobile number with the OTP"""
    auth_service.verify_otp(body.mobile, body.otp)
    return MessageResponse(message="Mobile number verified successfully")
