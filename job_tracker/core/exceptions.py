"""
Error taxonomy for the applicant service.

Each ServiceError carries the HTTP status the boundary should answer with.
CacheError never leaves the service layer.
"""


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ApplicantValidationError(ServiceError):
    """Malformed or missing input."""
    status_code = 400


class ConflictError(ServiceError):
    """Duplicate email among active applicants."""
    status_code = 409


class NotFoundError(ServiceError):
    """No active applicant with the requested id."""
    status_code = 404


class InternalError(ServiceError):
    """Store or unexpected failure."""
    status_code = 500


class CacheError(Exception):
    """Cache backend unreachable or returned unusable data."""
    pass
