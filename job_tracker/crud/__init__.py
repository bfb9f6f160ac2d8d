"""
CRUD operations (Create, Read, Update, Delete) for database models.

This layer keeps SQL out of the service and API layers,
following the Repository pattern.
"""

from job_tracker.crud import applicant

__all__ = ["applicant"]
