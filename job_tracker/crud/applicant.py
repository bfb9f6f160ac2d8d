"""
CRUD operations for the Applicant model.

Every read here only sees rows that are not soft-deleted. Functions commit
their own writes and let SQLAlchemy errors propagate to the caller.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from job_tracker.models.applicant import Applicant


def _active(db: Session):
    return db.query(Applicant).filter(Applicant.deleted_at.is_(None))


def create(db: Session, fields: Dict[str, Any]) -> Applicant:
    """
    Insert a new applicant.

    Args:
        db: Database session
        fields: Sanitized and validated column values

    Returns:
        Created Applicant with id and timestamps loaded
    """
    db_applicant = Applicant(**fields)

    db.add(db_applicant)
    db.commit()
    db.refresh(db_applicant)

    return db_applicant


def get_by_id(db: Session, applicant_id: int) -> Optional[Applicant]:
    return _active(db).filter(Applicant.id == applicant_id).first()


def get_by_email(db: Session, email: str) -> Optional[Applicant]:
    return _active(db).filter(Applicant.email == email).first()


def get_multi(db: Session, skip: int = 0, limit: int = 10) -> List[Applicant]:
    """
    Retrieve one page of applicants ordered by id.

    Args:
        db: Database session
        skip: Number of records to skip (offset)
        limit: Maximum number of records to return
    """
    return _active(db).order_by(Applicant.id).offset(skip).limit(limit).all()


def update(db: Session, applicant: Applicant, changes: Dict[str, Any]) -> Applicant:
    """
    Merge changes into an existing applicant and persist them.

    Args:
        db: Database session
        applicant: Applicant loaded in this session
        changes: Column values to overwrite; other columns are untouched
    """
    for field, value in changes.items():
        setattr(applicant, field, value)

    db.commit()
    db.refresh(applicant)

    return applicant


def soft_delete(db: Session, applicant: Applicant) -> Applicant:
    """Mark an applicant as deleted. The row is kept."""
    applicant.deleted_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(applicant)

    return applicant
