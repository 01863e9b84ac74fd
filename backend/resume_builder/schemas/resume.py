from pydantic import Field
from typing import Optional, List
from datetime import datetime
from resume_builder.schemas.base import CamelModel


class SectionModel(CamelModel):
    """Nested resume sections; years and dates are kept as the client sent them"""

    class Config:
        coerce_numbers_to_str = True


class PersonalInfo(SectionModel):
    full_name: str
    email: str = ""
    phone: str = ""
    address: str = ""
    profile_photo: Optional[str] = None


class EducationEntry(SectionModel):
    institution: str
    degree: str
    field: str = ""
    start_year: str = ""
    end_year: str = ""
    gpa: Optional[str] = None


class ExperienceEntry(SectionModel):
    company: str
    position: str
    start_date: str = ""
    end_date: str = ""
    description: str = ""


class ResumePayload(CamelModel):
    """Body of POST/PUT /api/resume. Missing sections mean empty sections."""
    personal_info: Optional[PersonalInfo] = None
    summary: Optional[str] = None
    education: List[EducationEntry] = Field(default_factory=list)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)


class ResumeResponse(CamelModel):
    id: int
    user_id: int
    personal_info: PersonalInfo
    summary: str
    education: List[EducationEntry] = Field(default_factory=list)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ResumeEnvelope(CamelModel):
    resume: ResumeResponse


class ResumeSavedResponse(CamelModel):
    message: str
    resume: ResumeResponse
