from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from jobboard.models.resume import Resume, WorkExperience, Education
from jobboard.models.skill import ResumeSkill
from jobboard.schemas.resume import ResumeCreate, ResumeUpdate, ResumeSkillIn
from jobboard.crud.skill import get_or_create_skill

logger = logging.getLogger(__name__)

NESTED_FIELDS = {"skills", "work_experience", "education"}


def get_resumes_by_user(db: Session, user_id: int) -> List[Resume]:
    return (
        db.query(Resume)
        .filter(Resume.user_id == user_id)
        .order_by(Resume.updated_at.desc(), Resume.id.desc())
        .all()
    )


def get_resume(db: Session, resume_id: int, user_id: int) -> Optional[Resume]:
    return db.query(Resume).filter(Resume.id == resume_id, Resume.user_id == user_id).first()


def _replace_skills(db: Session, resume: Resume, skills: List[ResumeSkillIn]):
    # Old links must be gone before new ones are inserted: (resume_id, skill_id) is unique
    resume.skills = []
    db.flush()

    # Same name twice in one request: last entry wins
    by_name = {}
    for skill_data in skills:
        by_name[skill_data.name.strip()] = skill_data

    for name, skill_data in by_name.items():
        skill = get_or_create_skill(db, name, skill_data.category)
        resume.skills.append(
            ResumeSkill(
                skill=skill,
                proficiency_level=skill_data.proficiency_level,
                years_experience=skill_data.years_experience,
            )
        )


def _replace_nested(db: Session, resume: Resume, data):
    if data.skills is not None:
        _replace_skills(db, resume, data.skills)
    if data.work_experience is not None:
        resume.work_experience = [WorkExperience(**exp.model_dump()) for exp in data.work_experience]
    if data.education is not None:
        resume.education = [Education(**edu.model_dump()) for edu in data.education]


def create_resume(db: Session, user_id: int, resume: ResumeCreate, resume_file_url: Optional[str] = None) -> Resume:
    """Create a resume with its skills, experience and education in one transaction."""
    try:
        fields = resume.model_dump(exclude=NESTED_FIELDS, exclude_none=True)
        db_resume = Resume(user_id=user_id, resume_file_url=resume_file_url, **fields)
        db.add(db_resume)
        db.flush()

        _replace_nested(db, db_resume, resume)

        db.commit()
        db.refresh(db_resume)
        logger.info(f"Created resume {db_resume.id} for user {user_id}")
        return db_resume
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating resume: {str(e)}")
        raise


def update_resume(db: Session, db_resume: Resume, resume: ResumeUpdate, resume_file_url: Optional[str] = None) -> Resume:
    """Apply a partial update. Supplied nested lists replace the stored ones, omitted lists are kept."""
    resume_id = db_resume.id
    try:
        for field, value in resume.model_dump(exclude=NESTED_FIELDS, exclude_unset=True).items():
            setattr(db_resume, field, value)
        if resume_file_url:
            db_resume.resume_file_url = resume_file_url

        _replace_nested(db, db_resume, resume)

        db.commit()
        db.refresh(db_resume)
        return db_resume
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating resume {resume_id}: {str(e)}")
        raise


def delete_resume(db: Session, resume_id: int, user_id: int) -> bool:
    resume = get_resume(db, resume_id, user_id)
    if resume:
        db.delete(resume)
        db.commit()
        return True
    return False
