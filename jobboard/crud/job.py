from sqlalchemy.orm import Session, joinedload
from sqlalchemy import or_, func
from typing import Dict, List, Optional, Tuple
import logging

from jobboard.models.job import Job
from jobboard.models.user import User
from jobboard.models.application import Application, ApplicationStatus
from jobboard.schemas.job import JobCreate, JobUpdate

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "created_at": Job.created_at,
    "updated_at": Job.updated_at,
    "title": Job.title,
    "salary_min": Job.salary_min,
    "salary_max": Job.salary_max,
    "application_deadline": Job.application_deadline,
}


def create_job(db: Session, job: JobCreate, employer_id: int) -> Job:
    try:
        db_job = Job(employer_id=employer_id, **job.model_dump())
        db.add(db_job)
        db.commit()
        db.refresh(db_job)
        logger.info(f"Job {db_job.id} created by employer {employer_id}")
        return db_job
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating job: {str(e)}")
        raise


def get_job(db: Session, job_id: int) -> Optional[Job]:
    return db.query(Job).options(joinedload(Job.employer)).filter(Job.id == job_id).first()


def get_active_job(db: Session, job_id: int) -> Optional[Job]:
    return (
        db.query(Job)
        .options(joinedload(Job.employer))
        .filter(Job.id == job_id, Job.is_active.is_(True))
        .first()
    )


def get_managed_job(db: Session, job_id: int, user_id: int, admin: bool = False) -> Optional[Job]:
    """A job the caller may change: their own, or any job for an admin."""
    query = db.query(Job).filter(Job.id == job_id)
    if not admin:
        query = query.filter(Job.employer_id == user_id)
    return query.first()


def search_jobs(
    db: Session,
    page: int,
    limit: int,
    location: Optional[str] = None,
    employment_type: Optional[str] = None,
    experience_level: Optional[str] = None,
    salary_min: Optional[float] = None,
    salary_max: Optional[float] = None,
    search: Optional[str] = None,
    sort: str = "created_at",
    order: str = "desc",
) -> Tuple[List[Job], int]:
    query = db.query(Job).filter(Job.is_active.is_(True))

    if location:
        query = query.filter(Job.location.ilike(f"%{location}%"))
    if employment_type:
        query = query.filter(Job.employment_type == employment_type)
    if experience_level:
        query = query.filter(Job.experience_level == experience_level)
    if salary_min is not None:
        query = query.filter(Job.salary_min >= salary_min)
    if salary_max is not None:
        query = query.filter(Job.salary_max <= salary_max)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(
                Job.title.ilike(pattern),
                Job.description.ilike(pattern),
                Job.requirements.ilike(pattern),
            )
        )

    total = query.count()

    column = SORTABLE_FIELDS[sort]
    ordering = column.asc() if order == "asc" else column.desc()
    jobs = (
        query.options(joinedload(Job.employer))
        .order_by(ordering, Job.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return jobs, total


def get_jobs_by_employer(
    db: Session, employer_id: int, page: int, limit: int, status: str = "all"
) -> Tuple[List[Job], int]:
    query = db.query(Job).filter(Job.employer_id == employer_id)
    if status != "all":
        query = query.filter(Job.is_active.is_(status == "active"))

    total = query.count()
    jobs = query.order_by(Job.created_at.desc(), Job.id.desc()).offset((page - 1) * limit).limit(limit).all()
    return jobs, total


def count_applications(db: Session, job_ids: List[int]) -> Dict[int, Dict[str, int]]:
    """Per job: total applications and how many are still pending."""
    counts = {job_id: {"applications_count": 0, "pending_applications": 0} for job_id in job_ids}
    if not job_ids:
        return counts

    rows = (
        db.query(Application.job_id, Application.status, func.count(Application.id))
        .filter(Application.job_id.in_(job_ids))
        .group_by(Application.job_id, Application.status)
        .all()
    )
    for job_id, status, count in rows:
        counts[job_id]["applications_count"] += count
        if status == ApplicationStatus.PENDING:
            counts[job_id]["pending_applications"] += count
    return counts


def update_job(db: Session, db_job: Job, job: JobUpdate) -> Job:
    job_id = db_job.id
    try:
        for field, value in job.model_dump(exclude_unset=True).items():
            setattr(db_job, field, value)
        db.commit()
        db.refresh(db_job)
        return db_job
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating job {job_id}: {str(e)}")
        raise


def toggle_job(db: Session, db_job: Job) -> Job:
    db_job.is_active = not db_job.is_active
    db.commit()
    db.refresh(db_job)
    logger.info(f"Job {db_job.id} {'activated' if db_job.is_active else 'deactivated'}")
    return db_job


def delete_job(db: Session, db_job: Job):
    db.delete(db_job)
    db.commit()


def suggest(db: Session, q: str, limit: int = 5) -> Dict[str, List[str]]:
    pattern = f"%{q}%"
    active = Job.is_active.is_(True)

    titles = [
        row[0]
        for row in db.query(Job.title).filter(active, Job.title.ilike(pattern)).distinct().order_by(Job.title).limit(limit)
    ]
    locations = [
        row[0]
        for row in db.query(Job.location)
        .filter(active, Job.location.isnot(None), Job.location.ilike(pattern))
        .distinct()
        .order_by(Job.location)
        .limit(limit)
    ]
    employers = (
        db.query(User.first_name, User.last_name)
        .join(Job, Job.employer_id == User.id)
        .filter(active, or_(User.first_name.ilike(pattern), User.last_name.ilike(pattern)))
        .distinct()
        .order_by(User.first_name, User.last_name)
        .limit(limit)
        .all()
    )
    companies = [f"{first} {last}" for first, last in employers]

    return {"titles": titles, "locations": locations, "companies": companies}
