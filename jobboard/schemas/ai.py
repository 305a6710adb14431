from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any, Literal
from datetime import datetime

from jobboard.models.ai_analysis import AnalysisType
from jobboard.schemas.resume import ResumeSummary


# Requests

class ResumeAnalysisRequest(BaseModel):
    resume_id: int = Field(..., gt=0)


class JobMatchRequest(BaseModel):
    resume_id: int = Field(..., gt=0)
    limit: int = Field(10, ge=1, le=50)


class SkillGapRequest(BaseModel):
    resume_id: int = Field(..., gt=0)
    target_role: str = Field(..., min_length=2, max_length=200)
    target_industry: Optional[str] = Field(None, max_length=200)


class ResumeImprovementRequest(BaseModel):
    resume_id: int = Field(..., gt=0)
    target_role: Optional[str] = Field(None, max_length=200)


# Shapes expected back from the model

class ResumeScore(BaseModel):
    score: float = Field(..., ge=0, le=100)
    strengths: List[str] = []
    improvements: List[str] = []
    suggested_skills: List[str] = []
    industry_recommendations: List[str] = []
    ats_tips: List[str] = []


class JobMatchItem(BaseModel):
    job_index: int
    match_score: float = Field(..., ge=0, le=100)
    matching_skills: List[str] = []
    missing_skills: List[str] = []
    reasoning: str = ""


class LearningStep(BaseModel):
    skill: str
    priority: Literal["high", "medium", "low"] = "medium"
    estimated_time: str = ""
    resources: List[str] = []


class SkillGap(BaseModel):
    required_skills: List[str] = []
    existing_skills: List[str] = []
    critical_gaps: List[str] = []
    nice_to_have: List[str] = []
    learning_path: List[LearningStep] = []
    certifications: List[str] = []
    overall_readiness: float = Field(..., ge=0, le=100)


class ExperienceImprovement(BaseModel):
    original: str = ""
    improved: str
    reasoning: str = ""


class ResumeImprovements(BaseModel):
    title_suggestions: List[str] = []
    summary_improvement: str = ""
    experience_improvements: List[ExperienceImprovement] = []
    skills_to_add: List[str] = []
    skills_to_remove: List[str] = []
    ats_keywords: List[str] = []
    format_tips: List[str] = []


# Stored analyses

class AIAnalysis(BaseModel):
    id: int
    resume_id: Optional[int] = None
    job_id: Optional[int] = None
    analysis_type: AnalysisType
    score: Optional[float] = None
    insights: Optional[Dict[str, Any]] = None
    created_at: datetime
    resume: Optional[ResumeSummary] = None

    class Config:
        from_attributes = True
