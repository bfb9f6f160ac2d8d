"""
Pydantic schemas for Applicant API requests/responses.

Request models accept loosely typed strings; sanitizing and field validation
happen in the service so that failures answer 400 with a specific message.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class ApplicantCreate(BaseModel):
    """Body of POST /applicants."""
    name: Optional[str] = None
    email: Optional[str] = None
    position: Optional[str] = None
    status: Optional[str] = Field(None, description="Defaults to pending")
    phone: Optional[str] = None
    resume: Optional[str] = Field(None, description="Resume text")
    notes: Optional[str] = None


class ApplicantUpdate(BaseModel):
    """Body of PUT /applicants/{id}. Only supplied, non-empty fields are merged."""
    name: Optional[str] = None
    email: Optional[str] = None
    position: Optional[str] = None
    status: Optional[str] = None
    phone: Optional[str] = None
    resume: Optional[str] = None
    notes: Optional[str] = None


class ApplicantResponse(BaseModel):
    """Persisted applicant record."""
    id: int
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None
    name: str
    email: str
    position: str
    status: str
    phone: Optional[str] = None
    resume: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class ApplicantListResponse(BaseModel):
    """One page of applicants with the pagination echoed back."""
    data: List[ApplicantResponse]
    page: int
    limit: int


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
