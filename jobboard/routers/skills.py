from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from ..database import get_db
from ..models.user import User
from ..dependencies.permissions import Action, require_permission
from ..schemas.skill import Skill, SkillCreate
from ..crud.skill import list_skills, search_skills, get_skill_by_name, create_skill

router = APIRouter(prefix="/skills", tags=["Skills"])


@router.get("")
def get_skills(category: Optional[str] = None, db: Session = Depends(get_db)):
    return {"success": True, "data": [Skill.model_validate(s) for s in list_skills(db, category)]}


@router.get("/search")
def find_skills(q: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return {"success": True, "data": [Skill.model_validate(s) for s in search_skills(db, q)]}


@router.post("", status_code=status.HTTP_201_CREATED)
def add_skill(
    skill: SkillCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(Action.MANAGE_SKILLS)),
):
    if get_skill_by_name(db, skill.name):
        raise HTTPException(status_code=400, detail="Skill already exists")
    return {"success": True, "data": Skill.model_validate(create_skill(db, skill)), "message": "Skill created successfully"}
