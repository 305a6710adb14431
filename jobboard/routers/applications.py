from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from collections import Counter
from datetime import date
from typing import Optional
import logging

from ..database import get_db
from ..dependencies.security import get_current_user
from ..dependencies.permissions import Action, require_permission, is_admin
from ..models.user import User, UserRole
from ..models.application import ApplicationStatus
from ..schemas.common import Pagination
from ..schemas.application import (
    Application,
    ApplicationCreate,
    ApplicationUpdate,
    ApplicationStatusUpdate,
    ApplicationStats,
    JobApplication,
)
from ..crud import application as application_crud
from ..crud.job import get_active_job, get_managed_job
from ..crud.resume import get_resume

logger = logging.getLogger(__name__)

applicant = require_permission(Action.APPLY_TO_JOBS)
reviewer = require_permission(Action.REVIEW_APPLICATIONS)

router = APIRouter(
    prefix="/applications",
    tags=["Applications"],
    dependencies=[Depends(get_current_user)]
)


def _status_or_none(value: Optional[str]) -> Optional[ApplicationStatus]:
    if value in (None, "", "all"):
        return None
    try:
        return ApplicationStatus(value)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid status filter")


def _tally(statuses) -> ApplicationStats:
    counts = Counter(ApplicationStatus(s) for s in statuses)
    return ApplicationStats(
        total=sum(counts.values()),
        **{s.value: counts.get(s, 0) for s in ApplicationStatus},
    )


def _pending_application_or_error(db: Session, application_id: int, user: User, action: str):
    application = application_crud.get_applicant_application(db, application_id, user.id)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    if application.status != ApplicationStatus.PENDING:
        raise HTTPException(status_code=400, detail=f"Cannot {action} application after it has been reviewed")
    return application


@router.get("")
def list_my_applications(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status_filter: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rows, total = application_crud.get_applications_by_applicant(
        db, current_user.id, page, limit, _status_or_none(status_filter)
    )
    return {
        "success": True,
        "data": [Application.model_validate(row) for row in rows],
        "pagination": Pagination.build(page, limit, total),
    }


@router.get("/stats/overview")
def application_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if current_user.role == UserRole.APPLICANT:
        statuses = application_crud.get_statuses_for_applicant(db, current_user.id)
    elif current_user.role == UserRole.EMPLOYER:
        statuses = application_crud.get_statuses_for_employer(db, current_user.id)
    else:
        statuses = application_crud.get_all_statuses(db)
    return {"success": True, "data": _tally(statuses)}


@router.get("/job/{job_id}")
def list_job_applications(
    job_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status_filter: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(reviewer),
):
    job = get_managed_job(db, job_id, current_user.id, admin=is_admin(current_user))
    if not job:
        raise HTTPException(status_code=404, detail="Job not found or access denied")

    rows, total = application_crud.get_applications_by_job(db, job.id, page, limit, _status_or_none(status_filter))
    return {
        "success": True,
        "data": [JobApplication.model_validate(row) for row in rows],
        "pagination": Pagination.build(page, limit, total),
        "job": {"id": job.id, "title": job.title},
    }


@router.get("/{application_id}")
def get_application(
    application_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    application = application_crud.get_application(db, application_id)
    visible = application is not None and (
        application.applicant_id == current_user.id
        or application.job.employer_id == current_user.id
        or is_admin(current_user)
    )
    if not visible:
        raise HTTPException(status_code=404, detail="Application not found")
    return {"success": True, "data": JobApplication.model_validate(application)}


@router.post("", status_code=status.HTTP_201_CREATED)
def submit_application(
    payload: ApplicationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(applicant),
):
    job = get_active_job(db, payload.job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found or no longer active")

    if job.application_deadline and date.today() > job.application_deadline:
        raise HTTPException(status_code=400, detail="Application deadline has passed")

    if not get_resume(db, payload.resume_id, current_user.id):
        raise HTTPException(status_code=404, detail="Resume not found")

    duplicate = HTTPException(status_code=400, detail="You have already applied to this job")
    if application_crud.find_application(db, job.id, current_user.id):
        raise duplicate

    try:
        db_application = application_crud.create_application(
            db, job.id, current_user.id, payload.resume_id, payload.cover_letter
        )
    except application_crud.DuplicateApplicationError:
        raise duplicate

    application = application_crud.get_application(db, db_application.id)
    return {
        "success": True,
        "data": Application.model_validate(application),
        "message": "Application submitted successfully",
    }


@router.put("/{application_id}/status")
def update_application_status(
    application_id: int,
    payload: ApplicationStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(reviewer),
):
    application = application_crud.get_application(db, application_id)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    if application.job.employer_id != current_user.id and not is_admin(current_user):
        raise HTTPException(status_code=403, detail="Access denied. You do not own this job.")

    try:
        new_status = ApplicationStatus(payload.status)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid status")

    application = application_crud.update_status(db, application, new_status, payload.notes)
    return {
        "success": True,
        "data": JobApplication.model_validate(application),
        "message": "Application status updated successfully",
    }


@router.put("/{application_id}")
def update_application(
    application_id: int,
    payload: ApplicationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    application = _pending_application_or_error(db, application_id, current_user, "update")
    application = application_crud.update_cover_letter(db, application, payload.cover_letter)
    return {
        "success": True,
        "data": Application.model_validate(application),
        "message": "Application updated successfully",
    }


@router.delete("/{application_id}")
def withdraw_application(
    application_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    application = _pending_application_or_error(db, application_id, current_user, "withdraw")
    application_crud.delete_application(db, application)
    return {"success": True, "message": "Application withdrawn successfully"}
