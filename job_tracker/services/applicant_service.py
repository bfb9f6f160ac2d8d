"""
Applicant service.

Sequences validation, the store and the listing cache for the five applicant
operations. The session and cache are passed in at construction so tests can
substitute either one.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Union

from fastapi import Depends
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from job_tracker.core.cache import ApplicantCache, get_cache, page_key
from job_tracker.core.database import get_db
from job_tracker.core.exceptions import (
    ApplicantValidationError,
    CacheError,
    ConflictError,
    InternalError,
    NotFoundError,
)
from job_tracker.core.validation import sanitize, validate_email, validate_phone, validate_status
from job_tracker.crud import applicant as applicant_crud
from job_tracker.models.applicant import (
    Applicant,
    ApplicantStatus,
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    POSITION_MAX_LENGTH,
)
from job_tracker.schemas.applicant import (
    ApplicantCreate,
    ApplicantListResponse,
    ApplicantResponse,
    ApplicantUpdate,
    MessageResponse,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

UPDATABLE_FIELDS = ("name", "email", "position", "status", "phone", "resume", "notes")
INTEGER_REGEX = re.compile(r"[+-]?\d+", re.ASCII)


def _to_int(value: Optional[Union[str, int]]) -> Optional[int]:
    """Plain ASCII decimal integers only; "1_000" and non-ASCII digits are rejected."""
    if value is None:
        return None
    text = str(value).strip()
    if not INTEGER_REGEX.fullmatch(text):
        return None
    try:
        return int(text)
    except ValueError:
        # Longer than the interpreter's int conversion limit
        return None


def parse_positive_int(value: Optional[Union[str, int]], default: int) -> int:
    """Parse a pagination parameter; absent, non-numeric or < 1 falls back to default."""
    parsed = _to_int(value)
    if parsed is None or parsed < 1:
        return default
    return parsed


def _parse_id(applicant_id: Union[str, int]) -> Optional[int]:
    parsed = _to_int(applicant_id)
    if parsed is None or parsed < 1:
        return None
    return parsed


def _optional(value: str) -> Optional[str]:
    return value or None


class ApplicantService:
    """Applicant CRUD with a cache-aside listing."""

    def __init__(self, db: Session, cache: ApplicantCache):
        self.db = db
        self.cache = cache

    def create(self, payload: ApplicantCreate) -> ApplicantResponse:
        """
        Validate and insert a new applicant.

        Raises:
            ApplicantValidationError: Missing or malformed fields
            ConflictError: An active applicant already uses the email
            InternalError: The store failed
        """
        name = sanitize(payload.name)
        email = sanitize(payload.email).lower()
        position = sanitize(payload.position)
        phone = sanitize(payload.phone)
        notes = sanitize(payload.notes)

        if not name or not email or not position:
            raise ApplicantValidationError("Name, email, and position are required")

        if len(name) > NAME_MAX_LENGTH:
            raise ApplicantValidationError(f"Name must be at most {NAME_MAX_LENGTH} characters")
        if len(email) > EMAIL_MAX_LENGTH:
            raise ApplicantValidationError(f"Email must be at most {EMAIL_MAX_LENGTH} characters")
        if len(position) > POSITION_MAX_LENGTH:
            raise ApplicantValidationError(f"Position must be at most {POSITION_MAX_LENGTH} characters")

        if not validate_email(email):
            raise ApplicantValidationError("Invalid email format")

        if phone and not validate_phone(phone):
            raise ApplicantValidationError("Invalid phone number format")

        status = payload.status or ApplicantStatus.PENDING.value
        if not validate_status(status):
            raise ApplicantValidationError("Invalid status value")

        try:
            if applicant_crud.get_by_email(self.db, email) is not None:
                raise ConflictError("Email already exists")

            applicant = applicant_crud.create(self.db, {
                "name": name,
                "email": email,
                "position": position,
                "status": status,
                "phone": _optional(phone),
                "resume": _optional(payload.resume or ""),
                "notes": _optional(notes),
            })
        except IntegrityError as e:
            # Lost a race with a concurrent create for the same email
            self.db.rollback()
            logger.info(f"Duplicate email rejected by unique index: {email} ({e.orig})")
            raise ConflictError("Email already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error creating applicant: {e}")
            raise InternalError("Failed to create applicant") from e

        self._invalidate_listing()
        logger.info(f"Created new applicant with ID: {applicant.id}")

        return ApplicantResponse.model_validate(applicant)

    def list(self, page: Optional[Union[str, int]] = None, limit: Optional[Union[str, int]] = None) -> ApplicantListResponse:
        """
        Return one page of applicants, served from the cache when possible.

        A cache hit never touches the store. If the cache is unreachable the
        page is read from the store and nothing is written back.
        """
        page_num = parse_positive_int(page, DEFAULT_PAGE)
        limit_num = parse_positive_int(limit, DEFAULT_LIMIT)
        cache_key = page_key(page_num, limit_num)

        try:
            cached = self.cache.get_page(cache_key)
        except CacheError as e:
            logger.warning(f"Cache read failed, serving {cache_key} from database: {e}")
            records = self._fetch_page(page_num, limit_num)
            return ApplicantListResponse(data=records, page=page_num, limit=limit_num)

        if cached is not None:
            try:
                records = [ApplicantResponse.model_validate(item) for item in cached]
            except ValidationError as e:
                # Entry written by an older record layout; rebuild it below
                logger.warning(f"Discarding stale cache entry {cache_key}: {e.error_count()} invalid fields")
            else:
                logger.info(f"Cache hit - returned {len(records)} applicants for {cache_key}")
                return ApplicantListResponse(data=records, page=page_num, limit=limit_num)

        records = self._fetch_page(page_num, limit_num)

        try:
            self.cache.set_page(cache_key, [record.model_dump(mode="json") for record in records])
        except CacheError as e:
            logger.warning(f"Failed to cache {cache_key}: {e}")

        logger.info(f"Cache miss - fetched {len(records)} applicants from database")
        return ApplicantListResponse(data=records, page=page_num, limit=limit_num)

    def get(self, applicant_id: Union[str, int]) -> ApplicantResponse:
        """Fetch an active applicant by id, or raise NotFoundError."""
        return ApplicantResponse.model_validate(self._load(applicant_id))

    def update(self, applicant_id: Union[str, int], payload: ApplicantUpdate) -> ApplicantResponse:
        """
        Merge the supplied fields into an existing applicant.

        Fields that are absent, null or blank after trimming are left as they
        are. Values are trimmed and email lowercased, but formats are not
        re-validated here.
        """
        applicant = self._load(applicant_id)
        changes = self._merge_changes(payload)

        try:
            applicant = applicant_crud.update(self.db, applicant, changes)
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("Email already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error updating applicant {applicant_id}: {e}")
            raise InternalError("Failed to update applicant") from e

        self._invalidate_listing()
        logger.info(f"Updated applicant {applicant.id}: {sorted(changes)}")

        return ApplicantResponse.model_validate(applicant)

    def delete(self, applicant_id: Union[str, int]) -> MessageResponse:
        """Soft-delete an applicant; the row stays in storage."""
        applicant = self._load(applicant_id)

        try:
            applicant_crud.soft_delete(self.db, applicant)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error deleting applicant {applicant_id}: {e}")
            raise InternalError("Failed to delete applicant") from e

        self._invalidate_listing()
        logger.info(f"Soft deleted applicant {applicant.id}")

        return MessageResponse(message="Applicant deleted successfully")

    def _load(self, applicant_id: Union[str, int]) -> Applicant:
        parsed = _parse_id(applicant_id)
        if parsed is None:
            raise NotFoundError("Applicant not found")

        try:
            applicant = applicant_crud.get_by_id(self.db, parsed)
        except SQLAlchemyError as e:
            logger.error(f"Database error loading applicant {applicant_id}: {e}")
            raise InternalError("Failed to fetch applicant") from e

        if applicant is None:
            raise NotFoundError("Applicant not found")
        return applicant

    def _fetch_page(self, page: int, limit: int) -> List[ApplicantResponse]:
        try:
            rows = applicant_crud.get_multi(self.db, skip=(page - 1) * limit, limit=limit)
        except SQLAlchemyError as e:
            logger.error(f"Database error: {e}")
            raise InternalError("Failed to fetch applicants") from e
        return [ApplicantResponse.model_validate(row) for row in rows]

    @staticmethod
    def _merge_changes(payload: ApplicantUpdate) -> Dict[str, Any]:
        supplied = payload.model_dump(exclude_unset=True)
        changes = {}
        for field in UPDATABLE_FIELDS:
            value = supplied.get(field)
            if value is None:
                continue
            value = value if field == "resume" else sanitize(value)
            if value == "":
                continue
            changes[field] = value.lower() if field == "email" else value
        return changes

    def _invalidate_listing(self) -> None:
        try:
            removed = self.cache.invalidate()
            logger.debug(f"Invalidated {removed} cached listing pages")
        except CacheError as e:
            logger.warning(f"Cache invalidation skipped: {e}")


def get_applicant_service(
    db: Session = Depends(get_db),
    cache: ApplicantCache = Depends(get_cache),
) -> ApplicantService:
    """Dependency wiring a request-scoped ApplicantService."""
    return ApplicantService(db, cache)
