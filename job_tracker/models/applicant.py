"""
Applicant database model.

A single table of job applicants. Rows are soft-deleted through deleted_at and
stay in storage; every normal read filters them out.
"""

import enum
from sqlalchemy import Column, Integer, String, Text, DateTime, Index, func
from job_tracker.core.database import Base

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 150
POSITION_MAX_LENGTH = 100
STATUS_MAX_LENGTH = 20
PHONE_MAX_LENGTH = 20


class ApplicantStatus(str, enum.Enum):
    """
    Hiring pipeline status:

    pending -> reviewed -> interviewed -> hired | rejected
    """
    PENDING = "pending"
    REVIEWED = "reviewed"
    INTERVIEWED = "interviewed"
    HIRED = "hired"
    REJECTED = "rejected"


class Applicant(Base):
    __tablename__ = "applicants"

    id = Column(Integer, primary_key=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    email = Column(String(EMAIL_MAX_LENGTH), nullable=False, index=True)
    position = Column(String(POSITION_MAX_LENGTH), nullable=False)
    status = Column(
        String(STATUS_MAX_LENGTH),
        default=ApplicantStatus.PENDING.value,
        server_default=ApplicantStatus.PENDING.value,
        nullable=False,
        index=True
    )
    phone = Column(String(PHONE_MAX_LENGTH), nullable=True)
    resume = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    __table_args__ = (
        # Email is unique among rows that are not soft-deleted
        Index(
            "uq_applicants_email_active",
            "email",
            unique=True,
            postgresql_where=deleted_at.is_(None),
            sqlite_where=deleted_at.is_(None),
        ),
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def __repr__(self):
        return f"<Applicant(id={self.id}, email='{self.email}', status={self.status})>"
