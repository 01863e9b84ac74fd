from fastapi import APIRouter, Body, Depends
from typing import Any
from resume_builder.api.dependencies import get_current_user, get_resume_service
from resume_builder.schemas.resume import ResumeEnvelope, ResumeSavedResponse
from resume_builder.schemas.user import MessageResponse, UserResponse
from resume_builder.services.resume_service import ResumeService

router = APIRouter()


@router.get("", response_model=ResumeEnvelope, response_model_exclude_none=True)
def get_resume(
    current_user: UserResponse = Depends(get_current_user),
    resume_service: ResumeService = Depends(get_resume_service),
):
    """Current user's resume"""
    return ResumeEnvelope(resume=resume_service.get(current_user.id))


@router.post("", response_model=ResumeSavedResponse, response_model_exclude_none=True)
def save_resume(
    resume_data: Any = Body(...),
    current_user: UserResponse = Depends(get_current_user),
    resume_service: ResumeService = Depends(get_resume_service),
):
    """Creates or replaces the current user's resume"""
    resume = resume_service.save(current_user.id, resume_data)
    return ResumeSavedResponse(message="Resume saved successfully", resume=resume)


@router.put("", response_model=ResumeSavedResponse, response_model_exclude_none=True)
def update_resume(
    resume_data: Any = Body(...),
    current_user: UserResponse = Depends(get_current_user),
    resume_service: ResumeService = Depends(get_resume_service),
):
    """Same upsert as POST, a first save through PUT creates the resume"""
    resume = resume_service.save(current_user.id, resume_data)
    return ResumeSavedResponse(message="Resume updated successfully", resume=resume)


@router.delete("", response_model=MessageResponse)
def delete_resume(
    current_user: UserResponse = Depends(get_current_user),
    resume_service: ResumeService = Depends(get_resume_service),
):
    """Deletes the current user's resume"""
    resume_service.delete(current_user.id)
    return MessageResponse(message="Resume deleted successfully")
