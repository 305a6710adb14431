from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime

from jobboard.models.skill import ProficiencyLevel


class ResumeSkillIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    proficiency_level: ProficiencyLevel = ProficiencyLevel.INTERMEDIATE
    years_experience: int = Field(0, ge=0)
    category: Optional[str] = Field(None, max_length=50)


class ResumeSkill(BaseModel):
    skill_id: int
    name: str
    category: Optional[str] = None
    proficiency_level: ProficiencyLevel
    years_experience: int = 0

    class Config:
        from_attributes = True


class WorkExperienceBase(BaseModel):
    company_name: str = Field(..., min_length=1, max_length=200)
    position: str = Field(..., min_length=1, max_length=200)
    start_date: date
    end_date: Optional[date] = None
    is_current: bool = False
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=200)


class WorkExperience(WorkExperienceBase):
    id: int

    class Config:
        from_attributes = True


class EducationBase(BaseModel):
    institution: str = Field(..., min_length=1, max_length=200)
    degree: str = Field(..., min_length=1, max_length=200)
    field_of_study: Optional[str] = Field(None, max_length=200)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    grade: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = None


class Education(EducationBase):
    id: int

    class Config:
        from_attributes = True


class ResumeFields(BaseModel):
    summary: Optional[str] = Field(None, max_length=1000)
    experience_years: Optional[int] = Field(None, ge=0, le=50)
    current_position: Optional[str] = Field(None, max_length=200)
    current_company: Optional[str] = Field(None, max_length=200)
    location: Optional[str] = Field(None, max_length=200)
    salary_expectation: Optional[float] = Field(None, gt=0)
    is_public: Optional[bool] = None

    # None means "not supplied"; an empty list clears the collection
    skills: Optional[List[ResumeSkillIn]] = None
    work_experience: Optional[List[WorkExperienceBase]] = None
    education: Optional[List[EducationBase]] = None


class ResumeCreate(ResumeFields):
    title: str = Field(..., min_length=5, max_length=200)


class ResumeUpdate(ResumeFields):
    title: Optional[str] = Field(None, min_length=5, max_length=200)


class ResumeSummary(BaseModel):
    id: int
    title: str

    class Config:
        from_attributes = True


class Resume(BaseModel):
    id: int
    user_id: int
    title: str
    summary: Optional[str] = None
    experience_years: Optional[int] = 0
    current_position: Optional[str] = None
    current_company: Optional[str] = None
    location: Optional[str] = None
    salary_expectation: Optional[float] = None
    resume_file_url: Optional[str] = None
    is_public: bool = False
    skills: List[ResumeSkill] = []
    work_experience: List[WorkExperience] = []
    education: List[Education] = []
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
