from typing import Any, Dict, Union
import logging
from pydantic import ValidationError as SchemaError
from resume_builder.core.exceptions import NotFoundError, ValidationError
from resume_builder.schemas.resume import ResumePayload, ResumeResponse
from resume_builder.stores.resume_store import ResumeStore

logger = logging.getLogger(__name__)


class ResumeService:
    """Single resume per user. user_id always comes from the authenticated identity."""

    def __init__(self, store: ResumeStore):
        self.store = store

    def get(self, user_id: int) -> ResumeResponse:
        resume = self.store.get(user_id)
        if resume is None:
            raise NotFoundError("Resume not found")
        return resume

    def save(self, user_id: int, resume_data: Union[ResumePayload, Dict[str, Any]]) -> ResumeResponse:
        """Creates or fully replaces the user's resume and returns it as stored"""
        payload = self._validate(resume_data)
        resume = self.store.upsert(user_id, payload)
        logger.info(f"Resume saved for user {user_id}")
        return resume

    def delete(self, user_id: int) -> None:
        if self.store.delete(user_id) == 0:
            raise NotFoundError("Resume not found")
        logger.info(f"Resume deleted for user {user_id}")

    @staticmethod
    def _validate(resume_data) -> ResumePayload:
        if isinstance(resume_data, ResumePayload):
            payload = resume_data
        else:
            if not isinstance(resume_data, dict):
                raise ValidationError("Resume must be a JSON object")
            try:
                payload = ResumePayload.model_validate(resume_data)
            except SchemaError as e:
                fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in e.errors())
                raise ValidationError(f"Invalid resume fields: {fields}") from e

        if payload.personal_info is None or not payload.summary or not payload.summary.strip():
            raise ValidationError("Personal info and summary are required")
        return payload
