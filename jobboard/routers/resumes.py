from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Form, status
from sqlalchemy.orm import Session
from pydantic import ValidationError
from typing import Any, Dict, Optional
import json
import logging

from ..database import get_db
from ..models.user import User
from ..dependencies.permissions import Action, require_permission
from ..schemas.resume import Resume, ResumeCreate, ResumeUpdate
from ..crud.resume import get_resumes_by_user, get_resume, create_resume, update_resume, delete_resume
from ..utils.errors import validation_exception
from ..utils.files import read_resume_file

logger = logging.getLogger(__name__)

resume_owner = require_permission(Action.MANAGE_RESUMES)

router = APIRouter(
    prefix="/resumes",
    tags=["Resumes"],
    dependencies=[Depends(resume_owner)]
)

LIST_FIELDS = ("skills", "work_experience", "education")


def resume_form(
    title: Optional[str] = Form(None),
    summary: Optional[str] = Form(None),
    experience_years: Optional[str] = Form(None),
    current_position: Optional[str] = Form(None),
    current_company: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    salary_expectation: Optional[str] = Form(None),
    is_public: Optional[str] = Form(None),
    skills: Optional[str] = Form(None, description="JSON array of skill objects"),
    work_experience: Optional[str] = Form(None, description="JSON array of work experience objects"),
    education: Optional[str] = Form(None, description="JSON array of education objects"),
) -> Dict[str, Any]:
    """Collect the multipart fields that were actually sent; nested lists arrive JSON-encoded."""
    raw = {
        "title": title,
        "summary": summary,
        "experience_years": experience_years,
        "current_position": current_position,
        "current_company": current_company,
        "location": location,
        "salary_expectation": salary_expectation,
        "is_public": is_public,
        "skills": skills,
        "work_experience": work_experience,
        "education": education,
    }
    data = {key: value for key, value in raw.items() if value is not None and value != ""}

    for field in LIST_FIELDS:
        if field in data:
            try:
                data[field] = json.loads(data[field])
            except json.JSONDecodeError:
                raise HTTPException(status_code=400, detail=f"{field}: must be a JSON array")
    return data


@router.get("")
def list_resumes(
    db: Session = Depends(get_db),
    current_user: User = Depends(resume_owner),
):
    resumes = [Resume.model_validate(r) for r in get_resumes_by_user(db, current_user.id)]
    return {"success": True, "data": resumes, "count": len(resumes)}


@router.get("/{resume_id}")
def get_resume_by_id(
    resume_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(resume_owner),
):
    resume = get_resume(db, resume_id, current_user.id)
    if not resume:
        raise HTTPException(status_code=404, detail="Resume not found")
    return {"success": True, "data": Resume.model_validate(resume)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_new_resume(
    form: Dict[str, Any] = Depends(resume_form),
    resume_file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(resume_owner),
):
    try:
        resume_in = ResumeCreate.model_validate(form)
    except ValidationError as e:
        raise validation_exception(e)

    upload = await read_resume_file(resume_file)
    file_url = upload.save() if upload else None
    try:
        resume = create_resume(db, current_user.id, resume_in, file_url)
    except Exception:
        if upload:
            upload.discard()
        raise

    return {"success": True, "data": Resume.model_validate(resume), "message": "Resume created successfully"}


@router.put("/{resume_id}")
async def update_existing_resume(
    resume_id: int,
    form: Dict[str, Any] = Depends(resume_form),
    resume_file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(resume_owner),
):
    db_resume = get_resume(db, resume_id, current_user.id)
    if not db_resume:
        raise HTTPException(status_code=404, detail="Resume not found")

    try:
        resume_in = ResumeUpdate.model_validate(form)
    except ValidationError as e:
        raise validation_exception(e)

    upload = await read_resume_file(resume_file)
    file_url = upload.save() if upload else None
    try:
        resume = update_resume(db, db_resume, resume_in, file_url)
    except Exception:
        if upload:
            upload.discard()
        raise

    return {"success": True, "data": Resume.model_validate(resume), "message": "Resume updated successfully"}


@router.delete("/{resume_id}")
def delete_resume_by_id(
    resume_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(resume_owner),
):
    if not delete_resume(db, resume_id, current_user.id):
        raise HTTPException(status_code=404, detail="Resume not found")
    return {"success": True, "message": "Resume deleted successfully"}
