from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import Literal, Optional
import logging

from ..database import get_db
from ..dependencies.security import get_optional_user
from ..dependencies.permissions import Action, require_permission, is_admin
from ..models.user import User
from ..models.job import EmploymentType, ExperienceLevel
from ..schemas.common import Pagination
from ..schemas.job import JobCreate, JobUpdate, Job, JobDetail, EmployerJob, SearchSuggestions, check_salary_range
from ..crud import job as job_crud
from ..crud.application import find_application

logger = logging.getLogger(__name__)

job_manager = require_permission(Action.MANAGE_JOBS)

router = APIRouter(
    prefix="/jobs",
    tags=["Jobs"],
)

SortField = Literal["created_at", "updated_at", "title", "salary_min", "salary_max", "application_deadline"]


def _managed_job_or_404(db: Session, job_id: int, user: User):
    job = job_crud.get_managed_job(db, job_id, user.id, admin=is_admin(user))
    if not job:
        raise HTTPException(status_code=404, detail="Job not found or access denied")
    return job


@router.get("")
def list_jobs(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    location: Optional[str] = Query(None, description="Substring match on location"),
    employment_type: Optional[EmploymentType] = None,
    experience_level: Optional[ExperienceLevel] = None,
    salary_min: Optional[float] = Query(None, ge=0),
    salary_max: Optional[float] = Query(None, ge=0),
    search: Optional[str] = Query(None, description="Free text over title, description and requirements"),
    sort: SortField = "created_at",
    order: Literal["asc", "desc", "ASC", "DESC"] = "desc",
    db: Session = Depends(get_db),
):
    jobs, total = job_crud.search_jobs(
        db,
        page=page,
        limit=limit,
        location=location,
        employment_type=employment_type,
        experience_level=experience_level,
        salary_min=salary_min,
        salary_max=salary_max,
        search=search,
        sort=sort,
        order=order.lower(),
    )
    return {
        "success": True,
        "data": [Job.model_validate(job) for job in jobs],
        "pagination": Pagination.build(page, limit, total),
    }


@router.get("/employer/my-jobs")
def list_my_jobs(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status_filter: Literal["all", "active", "inactive"] = Query("all", alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(job_manager),
):
    jobs, total = job_crud.get_jobs_by_employer(db, current_user.id, page, limit, status_filter)
    counts = job_crud.count_applications(db, [job.id for job in jobs])

    data = [
        EmployerJob.model_validate(job).model_copy(update=counts[job.id])
        for job in jobs
    ]
    return {"success": True, "data": data, "pagination": Pagination.build(page, limit, total)}


@router.get("/search/suggestions")
def search_suggestions(
    q: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    if not q or len(q.strip()) < 2:
        return {"success": True, "data": SearchSuggestions()}
    return {"success": True, "data": SearchSuggestions(**job_crud.suggest(db, q.strip()))}


@router.get("/{job_id}")
def get_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    job = job_crud.get_active_job(db, job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    has_applied = False
    if current_user is not None:
        has_applied = find_application(db, job.id, current_user.id) is not None

    counts = job_crud.count_applications(db, [job.id])[job.id]
    detail = JobDetail.model_validate(job).model_copy(
        update={"has_applied": has_applied, "applications_count": counts["applications_count"]}
    )
    return {"success": True, "data": detail}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_new_job(
    job: JobCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(job_manager),
):
    db_job = job_crud.create_job(db, job, current_user.id)
    return {"success": True, "data": Job.model_validate(db_job), "message": "Job created successfully"}


@router.put("/{job_id}")
def update_existing_job(
    job_id: int,
    job: JobUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(job_manager),
):
    db_job = _managed_job_or_404(db, job_id, current_user)

    # A partial update may set only one bound; check it against the stored one
    fields = job.model_dump(exclude_unset=True)
    try:
        check_salary_range(
            fields.get("salary_min", db_job.salary_min),
            fields.get("salary_max", db_job.salary_max),
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    db_job = job_crud.update_job(db, db_job, job)
    return {"success": True, "data": Job.model_validate(db_job), "message": "Job updated successfully"}


@router.delete("/{job_id}")
def delete_existing_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(job_manager),
):
    db_job = _managed_job_or_404(db, job_id, current_user)
    job_crud.delete_job(db, db_job)
    return {"success": True, "message": "Job deleted successfully"}


@router.post("/{job_id}/toggle-status")
def toggle_job_status(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(job_manager),
):
    db_job = job_crud.toggle_job(db, _managed_job_or_404(db, job_id, current_user))
    state = "activated" if db_job.is_active else "deactivated"
    return {"success": True, "data": Job.model_validate(db_job), "message": f"Job {state} successfully"}
