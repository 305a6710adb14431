from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError
from typing import List, Optional, Tuple
import logging

from jobboard.models.application import Application, ApplicationStatus
from jobboard.models.job import Job

logger = logging.getLogger(__name__)


class DuplicateApplicationError(Exception):
    """The (job, applicant) pair already has an application."""


def _with_relations(query):
    return query.options(
        joinedload(Application.job).joinedload(Job.employer),
        joinedload(Application.resume),
        joinedload(Application.applicant),
    )


def get_application(db: Session, application_id: int) -> Optional[Application]:
    return _with_relations(db.query(Application)).filter(Application.id == application_id).first()


def get_applicant_application(db: Session, application_id: int, applicant_id: int) -> Optional[Application]:
    return (
        _with_relations(db.query(Application))
        .filter(Application.id == application_id, Application.applicant_id == applicant_id)
        .first()
    )


def find_application(db: Session, job_id: int, applicant_id: int) -> Optional[Application]:
    return (
        db.query(Application)
        .filter(Application.job_id == job_id, Application.applicant_id == applicant_id)
        .first()
    )


def _paginate(query, page: int, limit: int, status: Optional[ApplicationStatus]) -> Tuple[List[Application], int]:
    if status is not None:
        query = query.filter(Application.status == status)
    total = query.count()
    rows = (
        _with_relations(query)
        .order_by(Application.applied_at.desc(), Application.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return rows, total


def get_applications_by_applicant(
    db: Session, applicant_id: int, page: int, limit: int, status: Optional[ApplicationStatus] = None
) -> Tuple[List[Application], int]:
    return _paginate(db.query(Application).filter(Application.applicant_id == applicant_id), page, limit, status)


def get_applications_by_job(
    db: Session, job_id: int, page: int, limit: int, status: Optional[ApplicationStatus] = None
) -> Tuple[List[Application], int]:
    return _paginate(db.query(Application).filter(Application.job_id == job_id), page, limit, status)


def create_application(
    db: Session, job_id: int, applicant_id: int, resume_id: int, cover_letter: Optional[str] = None
) -> Application:
    """Insert a pending application.

    The caller checks for an existing row first, but two concurrent requests can both
    pass that check; the unique constraint settles it and the loser gets
    DuplicateApplicationError.
    """
    db_application = Application(
        job_id=job_id,
        applicant_id=applicant_id,
        resume_id=resume_id,
        cover_letter=cover_letter,
        status=ApplicationStatus.PENDING,
    )
    db.add(db_application)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Duplicate application for job {job_id} by user {applicant_id}: {e.orig}")
        raise DuplicateApplicationError() from e
    db.refresh(db_application)
    logger.info(f"Application {db_application.id} submitted to job {job_id}")
    return db_application


def update_cover_letter(db: Session, application: Application, cover_letter: Optional[str]) -> Application:
    application.cover_letter = cover_letter
    db.commit()
    db.refresh(application)
    return application


def update_status(db: Session, application: Application, status: ApplicationStatus, notes: Optional[str] = None):
    application.status = status
    if notes is not None:
        application.notes = notes
    db.commit()
    db.refresh(application)
    logger.info(f"Application {application.id} moved to {status.value}")
    return application


def delete_application(db: Session, application: Application):
    db.delete(application)
    db.commit()


def get_statuses_for_applicant(db: Session, applicant_id: int) -> List[str]:
    return [row[0] for row in db.query(Application.status).filter(Application.applicant_id == applicant_id).all()]


def get_statuses_for_employer(db: Session, employer_id: int) -> List[str]:
    return [
        row[0]
        for row in db.query(Application.status)
        .join(Job, Job.id == Application.job_id)
        .filter(Job.employer_id == employer_id)
        .all()
    ]


def get_all_statuses(db: Session) -> List[str]:
    return [row[0] for row in db.query(Application.status).all()]
