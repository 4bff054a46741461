"""
Subjects endpoint.
"""
from fastapi import APIRouter, Depends, status, Response
from sqlmodel import Session

from heptareview.core.database import get_session
from heptareview.schemas.subject import (
    SubjectResponse,
    CreateSubjectRequest,
    SubjectsResponse
)
from heptareview.services import card_service

router = APIRouter(prefix="/subjects", tags=["subjects"])


@router.get("", response_model=SubjectsResponse)
async def get_subjects(session: Session = Depends(get_session)):
    """Get all subjects."""
    subjects = card_service.list_subjects(session)
    return SubjectsResponse(
        subjects=[SubjectResponse.model_validate(subject) for subject in subjects]
    )


@router.post("", response_model=SubjectResponse, status_code=status.HTTP_201_CREATED)
async def create_subject(
    request: CreateSubjectRequest,
    session: Session = Depends(get_session)
):
    """Create a new subject or return the existing one with the same name (case-insensitive)."""
    subject = card_service.create_subject(session, request.name)
    return SubjectResponse.model_validate(subject)


@router.delete("/{subject_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_subject(
    subject_id: int,
    session: Session = Depends(get_session)
):
    """Delete a subject. Cards filed under it keep their subject label."""
    card_service.delete_subject(session, subject_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
