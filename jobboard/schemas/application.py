from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from jobboard.models.application import ApplicationStatus
from jobboard.schemas.job import JobSummary
from jobboard.schemas.resume import ResumeSummary


class ApplicationCreate(BaseModel):
    job_id: int = Field(..., gt=0)
    resume_id: int = Field(..., gt=0)
    cover_letter: Optional[str] = Field(None, max_length=2000)


class ApplicationUpdate(BaseModel):
    cover_letter: Optional[str] = Field(None, max_length=2000)


class ApplicationStatusUpdate(BaseModel):
    # Checked against ApplicationStatus after ownership, so a non-owner
    # gets 403 whatever value they send
    status: str
    notes: Optional[str] = None


class ApplicantSummary(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    profile_image: Optional[str] = None

    class Config:
        from_attributes = True


class Application(BaseModel):
    id: int
    job_id: int
    applicant_id: int
    resume_id: int
    cover_letter: Optional[str] = None
    status: ApplicationStatus
    notes: Optional[str] = None
    applied_at: datetime
    updated_at: Optional[datetime] = None
    job: Optional[JobSummary] = None
    resume: Optional[ResumeSummary] = None

    class Config:
        from_attributes = True


class JobApplication(Application):
    """An application as seen by the employer reviewing it."""

    applicant: Optional[ApplicantSummary] = None


class ApplicationStats(BaseModel):
    total: int = 0
    pending: int = 0
    reviewed: int = 0
    shortlisted: int = 0
    rejected: int = 0
    hired: int = 0
