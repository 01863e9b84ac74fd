"""
Signup, login, bearer-token authentication and mobile OTP verification.
"""
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Union
import logging
import secrets
from passlib.context import CryptContext
from pydantic import EmailStr, TypeAdapter, ValidationError as SchemaError
from resume_builder.core.config import Settings
from resume_builder.core.exceptions import (
    AuthError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from resume_builder.core.security import (
    build_password_context,
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from resume_builder.models.user import User
from resume_builder.schemas.user import SignupRequest, UserResponse
from resume_builder.stores.credential_store import CredentialStore

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_OTP = "Invalid or expired OTP"

email_adapter = TypeAdapter(EmailStr)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes, they were written as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def normalize_identifier(identifier: str) -> str:
    """Emails go through the same EmailStr normalization as at signup, mobiles stay as given"""
    if "@" not in identifier:
        return identifier
    try:
        return email_adapter.validate_python(identifier)
    except SchemaError:
        return identifier


def _blank_to_none(value):
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


class AuthService:
    def __init__(
        self,
        store: CredentialStore,
        settings: Settings,
        pwd_context: Optional[CryptContext] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.settings = settings
        self.pwd_context = pwd_context or build_password_context(settings.BCRYPT_ROUNDS)
        self.clock = clock

    def hash_password(self, password: str) -> str:
        return get_password_hash(password, self.pwd_context)

    def validate_signup(self, data: Union[SignupRequest, dict]) -> SignupRequest:
        """Checks a signup request without touching storage"""
        if isinstance(data, dict):
            cleaned = {key: _blank_to_none(value) for key, value in data.items()}
            try:
                data = SignupRequest.model_validate(cleaned)
            except SchemaError as e:
                fields = ", ".join(str(err["loc"][-1]) for err in e.errors())
                raise ValidationError(f"Invalid value for: {fields}") from e

        if not data.full_name or not data.password or not data.language:
            raise ValidationError("Required fields are missing")
        if not data.email and not data.mobile:
            raise ValidationError("Either email or mobile number is required")
        if data.terms_accepted is not True and data.terms_accepted != "true":
            raise ValidationError("You must accept the terms and conditions")
        return data

    def signup(self, data: Union[SignupRequest, dict]) -> dict:
        """Creates the user and returns {"token", "user"}"""
        request = self.validate_signup(data)

        if self.store.find_conflicting(request.email, request.mobile):
            raise ConflictError()

        user = self.store.create_user(
            full_name=request.full_name,
            password_hash=self.hash_password(request.password),
            language=request.language,
            email=request.email,
            mobile=request.mobile,
            photo=request.photo,
        )
        logger.info(f"User {user.id} signed up ({user.email or user.mobile})")
        return self._session_for(user)

    def login(self, identifier: Optional[str], password: Optional[str]) -> dict:
        """Email or mobile plus password. Unknown user and wrong password fail the same way."""
        if not identifier or not password:
            raise ValidationError("Email and password are required")

        user = self.store.find_by_identifier(normalize_identifier(identifier))
        if user is None or not verify_password(password, user.password_hash, self.pwd_context):
            logger.info("Failed login attempt")
            raise AuthError(INVALID_CREDENTIALS, status_code=400)

        return self._session_for(user)

    def authenticate(self, token: Optional[str]) -> UserResponse:
        """Resolves a bearer token to the sanitized user view"""
        if not token:
            raise AuthError("No token, authorization denied")

        payload = decode_access_token(token, self.settings.SECRET_KEY, self.settings.ALGORITHM)
        if payload is None:
            raise AuthError()

        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            raise AuthError()

        user = self.store.get_by_id(user_id)
        if user is None:
            raise AuthError()
        return UserResponse.model_validate(user)

    def request_otp(self, mobile: Optional[str]) -> str:
        """Issues a new code for the mobile number, replacing any pending one"""
        if not mobile:
            raise ValidationError("Mobile number is required")

        user = self.store.find_by_mobile(mobile)
        if user is None:
            raise NotFoundError("User not found")

        otp_code = self._generate_otp()
        otp_expires = self.clock() + timedelta(minutes=self.settings.OTP_EXPIRE_MINUTES)
        self.store.set_otp(user.id, otp_code, otp_expires)

        # SMS delivery is not wired, the log line stands in for it
        logger.info(f"OTP for {mobile}: {otp_code}")
        return otp_code

    def verify_otp(self, mobile: Optional[str], otp: Optional[str]) -> UserResponse:
        if not mobile or not otp:
            raise ValidationError("Mobile number and OTP are required")

        user = self.store.find_by_mobile(mobile)
        if user is None:
            raise NotFoundError("User not found")

        if (
            not user.otp_code
            or user.otp_expires is None
            or not secrets.compare_digest(user.otp_code.encode("utf-8"), str(otp).encode("utf-8"))
            or self.clock() >= _as_utc(user.otp_expires)
        ):
            raise AuthError(INVALID_OTP, status_code=400)

        if not self.store.mark_mobile_verified(user.id, user.otp_code):
            # a newer code was requested in between
            raise AuthError(INVALID_OTP, status_code=400)

        logger.info(f"Mobile verified for user {user.id}")
        return UserResponse.model_validate(self.store.get_by_id(user.id))

    def _generate_otp(self) -> str:
        length = self.settings.OTP_LENGTH
        # first digit non-zero keeps the code exactly `length` digits long
        lower = 10 ** (length - 1)
        return str(lower + secrets.randbelow(9 * lower))

    def _session_for(self, user: User) -> dict:
        token = create_access_token(
            data={"sub": str(user.id)},
            secret_key=self.settings.SECRET_KEY,
            algorithm=self.settings.ALGORITHM,
            expires_delta=timedelta(days=self.settings.ACCESS_TOKEN_EXPIRE_DAYS),
            now=self.clock(),
        )
        return {"token": token, "user": UserResponse.model_validate(user)}
