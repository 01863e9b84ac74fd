import logging
import os
import secrets
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from fastapi import UploadFile
from resume_builder.core.exceptions import InternalError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif"}
ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif"}


@dataclass
class StoredPhoto:
    path: Path
    reference: str


class PhotoStorage:
    """Profile photos on local disk, served under /uploads"""

    def __init__(self, upload_dir: str, max_size: int, url_prefix: str = "/uploads"):
        self.upload_dir = Path(upload_dir)
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        self.max_size = max_size
        self.url_prefix = url_prefix.rstrip("/")

    def validate(self, file: UploadFile) -> str:
        """Returns the normalized extension or raises ValidationError"""
        extension = Path(file.filename or "").suffix.lower()
        content_type = (file.content_type or "").lower()
        if extension not in ALLOWED_EXTENSIONS or content_type not in ALLOWED_CONTENT_TYPES:
            raise ValidationError("Only image files are allowed")

        file.file.seek(0, os.SEEK_END)
        file_size = file.file.tell()
        file.file.seek(0)
        if file_size > self.max_size:
            raise ValidationError(f"File size must be less than {self.max_size // (1024 * 1024)} MB")
        return extension

    def save(self, file: UploadFile) -> StoredPhoto:
        extension = self.validate(file)
        filename = f"profile-{int(time.time() * 1000)}-{secrets.randbelow(10 ** 9)}{extension}"
        path = self.upload_dir / filename
        try:
            with open(path, "wb") as buffer:
                shutil.copyfileobj(file.file, buffer)
        except OSError as e:
            logger.error(f"Error saving uploaded file {path}: {e}")
            self.discard(path)
            raise InternalError() from e
        return StoredPhoto(path=path, reference=f"{self.url_prefix}/{filename}")

    def discard(self, path: Path) -> None:
        """Best-effort removal after a failed signup"""
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Error deleting uploaded file {path}: {e}")
