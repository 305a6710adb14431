from sqlalchemy.orm import Session
from typing import List, Optional

from jobboard.models.skill import Skill
from jobboard.schemas.skill import SkillCreate

DEFAULT_CATEGORY = "General"


def get_skill_by_name(db: Session, name: str) -> Optional[Skill]:
    return db.query(Skill).filter(Skill.name == name).first()


def get_or_create_skill(db: Session, name: str, category: Optional[str] = None) -> Skill:
    """Resolve a skill name against the shared taxonomy, adding it if absent.

    The new row is only flushed; the caller owns the transaction.
    """
    skill = get_skill_by_name(db, name)
    if skill is None:
        skill = Skill(name=name, category=category or DEFAULT_CATEGORY)
        db.add(skill)
        db.flush()
    return skill


def list_skills(db: Session, category: Optional[str] = None) -> List[Skill]:
    query = db.query(Skill)
    if category:
        query = query.filter(Skill.category == category)
    return query.order_by(Skill.name).all()


def search_skills(db: Session, q: str, limit: int = 10) -> List[Skill]:
    return db.query(Skill).filter(Skill.name.ilike(f"%{q}%")).order_by(Skill.name).limit(limit).all()


def create_skill(db: Session, skill: SkillCreate) -> Skill:
    db_skill = Skill(**skill.model_dump())
    db.add(db_skill)
    db.commit()
    db.refresh(db_skill)
    return db_skill
