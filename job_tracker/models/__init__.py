"""
Database models package.
"""

from job_tracker.models.applicant import Applicant, ApplicantStatus

__all__ = ["Applicant", "ApplicantStatus"]
