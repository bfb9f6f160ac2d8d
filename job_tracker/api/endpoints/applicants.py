import logging
from typing import Optional
from fastapi import APIRouter, Depends

from job_tracker.schemas.applicant import (
    ApplicantCreate,
    ApplicantListResponse,
    ApplicantResponse,
    ApplicantUpdate,
    MessageResponse,
)
from job_tracker.services.applicant_service import ApplicantService, get_applicant_service

router = APIRouter(prefix="/applicants", tags=["Applicants"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=ApplicantResponse, response_model_exclude_none=True)
def create_applicant(
    request: ApplicantCreate,
    service: ApplicantService = Depends(get_applicant_service)
):
    """
    Create a new applicant.

    Name, email and position are required. Email is stored lowercased and must
    not belong to another active applicant. Status defaults to pending.
    """
    return service.create(request)


@router.get("", response_model=ApplicantListResponse, response_model_exclude_none=True)
def list_applicants(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: ApplicantService = Depends(get_applicant_service)
):
    """
    List applicants with pagination.

    Args:
        page: 1-based page number (default: 1)
        limit: Page size (default: 10)

    Pages are cached for a few minutes, so recently changed records may take
    that long to show up on pages other than the first.
    """
    return service.list(page=page, limit=limit)


@router.get("/{applicant_id}", response_model=ApplicantResponse, response_model_exclude_none=True)
def get_applicant(applicant_id: str, service: ApplicantService = Depends(get_applicant_service)):
    """Retrieve an applicant by ID."""
    return service.get(applicant_id)


@router.put("/{applicant_id}", response_model=ApplicantResponse, response_model_exclude_none=True)
def update_applicant(
    applicant_id: str,
    request: ApplicantUpdate,
    service: ApplicantService = Depends(get_applicant_service)
):
    """Update the supplied fields of an applicant. Omitted fields keep their values."""
    return service.update(applicant_id, request)


@router.delete("/{applicant_id}", response_model=MessageResponse)
def delete_applicant(applicant_id: str, service: ApplicantService = Depends(get_applicant_service)):
    """
    Soft-delete an applicant.

    The record is hidden from every read but retained in storage.
    """
    return service.delete(applicant_id)
