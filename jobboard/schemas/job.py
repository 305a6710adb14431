from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List
from datetime import date, datetime

from jobboard.models.job import EmploymentType, ExperienceLevel
from jobboard.schemas.user import EmployerSummary

SALARY_RANGE_ERROR = "Minimum salary cannot be greater than maximum salary"
DEADLINE_ERROR = "Application deadline must be in the future"
NOT_NULL_ERROR = "may not be null"


def check_salary_range(salary_min, salary_max):
    if salary_min is not None and salary_max is not None and salary_min > salary_max:
        raise ValueError(SALARY_RANGE_ERROR)


class JobFields(BaseModel):
    requirements: Optional[str] = None
    location: Optional[str] = Field(None, max_length=200)
    salary_min: Optional[float] = Field(None, gt=0)
    salary_max: Optional[float] = Field(None, gt=0)
    application_deadline: Optional[date] = None

    @field_validator("application_deadline")
    @classmethod
    def deadline_in_future(cls, value):
        if value is not None and value <= date.today():
            raise ValueError(DEADLINE_ERROR)
        return value

    @model_validator(mode="after")
    def salary_range(self):
        check_salary_range(self.salary_min, self.salary_max)
        return self


class JobCreate(JobFields):
    title: str = Field(..., min_length=5, max_length=200)
    description: str = Field(..., min_length=50)
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    experience_level: ExperienceLevel = ExperienceLevel.MID


class JobUpdate(JobFields):
    title: Optional[str] = Field(None, min_length=5, max_length=200)
    description: Optional[str] = Field(None, min_length=50)
    employment_type: Optional[EmploymentType] = None
    experience_level: Optional[ExperienceLevel] = None
    is_active: Optional[bool] = None

    # Omitted means "keep"; an explicit null would hit a NOT NULL column
    @field_validator("title", "description", "employment_type", "experience_level", "is_active", mode="before")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError(NOT_NULL_ERROR)
        return value


class Job(BaseModel):
    id: int
    employer_id: int
    title: str
    description: str
    requirements: Optional[str] = None
    location: Optional[str] = None
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    employment_type: EmploymentType
    experience_level: ExperienceLevel
    is_active: bool
    application_deadline: Optional[date] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    employer: Optional[EmployerSummary] = None

    class Config:
        from_attributes = True


class JobDetail(Job):
    applications_count: int = 0
    has_applied: bool = False


class EmployerJob(Job):
    applications_count: int = 0
    pending_applications: int = 0


class JobSummary(BaseModel):
    id: int
    title: str
    location: Optional[str] = None
    employment_type: EmploymentType
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    employer: Optional[EmployerSummary] = None

    class Config:
        from_attributes = True


class SearchSuggestions(BaseModel):
    titles: List[str] = []
    locations: List[str] = []
    companies: List[str] = []
