import pytest
from pydantic import ValidationError
from resume_builder.core.config import Settings


def test_secret_key_is_mandatory(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_blank_secret_key_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, SECRET_KEY="   ")


def test_defaults():
    settings = Settings(_env_file=None, SECRET_KEY="s3cret")
    assert settings.ACCESS_TOKEN_EXPIRE_DAYS == 7
    assert settings.OTP_LENGTH == 6
    assert settings.OTP_EXPIRE_MINUTES == 10
    assert settings.MAX_PHOTO_SIZE == 5 * 1024 * 1024


def test_cors_origins_list():
    settings = Settings(_env_file=None, SECRET_KEY="s3cret", CORS_ORIGINS="http://a.test, ,http://b.test")
    assert settings.CORS_ORIGINS_LIST == ["http://a.test", "http://b.test"]
