from pydantic import BaseModel, Field
from typing import Optional


class SkillCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    category: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = None


class Skill(SkillCreate):
    id: int

    class Config:
        from_attributes = True
