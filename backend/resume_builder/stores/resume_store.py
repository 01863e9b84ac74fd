from typing import List, Optional
import logging
from pydantic import TypeAdapter, ValidationError as SchemaError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql import func
from resume_builder.core.exceptions import InternalError
from resume_builder.models.resume import Resume
from resume_builder.schemas.resume import (
    PersonalInfo,
    EducationEntry,
    ExperienceEntry,
    ResumePayload,
    ResumeResponse,
)
from resume_builder.stores.base import BaseStore

logger = logging.getLogger(__name__)

education_adapter = TypeAdapter(List[EducationEntry])
experience_adapter = TypeAdapter(List[ExperienceEntry])
skills_adapter = TypeAdapter(List[str])


def _dump(adapter: TypeAdapter, value) -> str:
    return adapter.dump_json(value, by_alias=True, exclude_none=True).decode("utf-8")


def serialize_resume(payload: ResumePayload) -> dict:
    """Column values for a validated payload"""
    return {
        "personal_info": payload.personal_info.model_dump_json(by_alias=True, exclude_none=True),
        "summary": payload.summary,
        "education": _dump(education_adapter, payload.education),
        "experience": _dump(experience_adapter, payload.experience),
        "skills": _dump(skills_adapter, payload.skills),
    }


def deserialize_resume(resume: Resume) -> ResumeResponse:
    """Row to response, re-validating the stored JSON through the same schemas"""
    try:
        return ResumeResponse(
            id=resume.id,
            user_id=resume.user_id,
            personal_info=PersonalInfo.model_validate_json(resume.personal_info),
            summary=resume.summary,
            education=education_adapter.validate_json(resume.education or "[]"),
            experience=experience_adapter.validate_json(resume.experience or "[]"),
            skills=skills_adapter.validate_json(resume.skills or "[]"),
            created_at=resume.created_at,
            updated_at=resume.updated_at,
        )
    except SchemaError as e:
        logger.error(f"Stored resume {resume.id} of user {resume.user_id} is corrupt: {e}")
        raise InternalError() from e


class ResumeStore(BaseStore):
    """One resume row per user, nested sections as JSON text"""

    def get(self, user_id: int) -> Optional[ResumeResponse]:
        with self.session("loading resume") as db:
            resume = db.query(Resume).filter(Resume.user_id == user_id).first()
        if resume is None:
            return None
        return deserialize_resume(resume)

    def upsert(self, user_id: int, payload: ResumePayload) -> ResumeResponse:
        """Replaces the user's resume wholesale or creates it"""
        values = serialize_resume(payload)
        try:
            return self._write(user_id, values)
        except IntegrityError:
            # another request inserted the row first, UNIQUE(user_id) held
            logger.info(f"Concurrent resume insert for user {user_id}, retrying as update")
        try:
            return self._write(user_id, values)
        except IntegrityError as e:
            logger.error(f"Resume upsert for user {user_id} failed: {e.orig}")
            raise InternalError() from e

    def _write(self, user_id: int, values: dict) -> ResumeResponse:
        with self.session("saving resume") as db:
            resume = db.query(Resume).filter(Resume.user_id == user_id).first()
            if resume is None:
                resume = Resume(user_id=user_id, **values)
                db.add(resume)
            else:
                for field, value in values.items():
                    setattr(resume, field, value)
                resume.updated_at = func.now()
            db.flush()
            db.refresh(resume)
        return deserialize_resume(resume)

    def delete(self, user_id: int) -> int:
        """Number of rows removed"""
        with self.session("deleting resume") as db:
            return db.query(Resume).filter(Resume.user_id == user_id).delete(synchronize_session=False)

    def count_for_user(self, user_id: int) -> int:
        with self.session("counting resumes") as db:
            return db.query(Resume).filter(Resume.user_id == user_id).count()
