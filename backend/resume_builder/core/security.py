from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext

ACCESS_TOKEN_TYPE = "access"


def build_password_context(rounds: int = 12) -> CryptContext:
    """bcrypt context with the configured cost factor"""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def verify_password(plain_password: str, hashed_password: str, pwd_context: CryptContext) -> bool:
    """Checks a password against a stored hash"""
    if not hashed_password or hashed_password.strip() == "":
        return False
    try:
        return pwd_context.verify(_truncate(plain_password), hashed_password)
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str, pwd_context: CryptContext) -> str:
    """Hashes a password"""
    return pwd_context.hash(_truncate(password))


def _truncate(password: str) -> str:
    # bcrypt only looks at the first 72 bytes
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > 72:
        password = password_bytes[:72].decode("utf-8", errors="ignore")
    return password


def create_access_token(
    data: dict,
    secret_key: str,
    algorithm: str,
    expires_delta: timedelta,
    now: Optional[datetime] = None,
) -> str:
    """Creates a signed access JWT"""
    to_encode = data.copy()
    issued_at = now or datetime.now(timezone.utc)
    to_encode.update({
        "iat": issued_at,
        "exp": issued_at + expires_delta,
        "type": ACCESS_TOKEN_TYPE,
    })
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def decode_access_token(token: str, secret_key: str, algorithm: str) -> Optional[dict]:
    """Decodes an access JWT, None if the signature, expiry or type is wrong"""
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError:
        return None
    if payload.get("type") != ACCESS_TOKEN_TYPE:
        return None
    return payload
