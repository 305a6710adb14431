from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional
import logging

from ..database import get_db
from ..models.user import User
from ..models.job import Job
from ..models.ai_analysis import AnalysisType
from ..dependencies.permissions import Action, require_permission
from ..schemas.ai import (
    AIAnalysis,
    ResumeAnalysisRequest,
    JobMatchRequest,
    SkillGapRequest,
    ResumeImprovementRequest,
)
from ..schemas.job import JobSummary
from ..crud.resume import get_resume
from ..crud.analysis import build_analysis, save_analyses, get_history
from ..services.ai_service import CareerAIService, AIServiceError, ModelOutputError, get_ai_service

logger = logging.getLogger(__name__)

ai_user = require_permission(Action.USE_AI)

router = APIRouter(
    prefix="/ai",
    tags=["AI"],
    dependencies=[Depends(ai_user)]
)

CANDIDATE_JOBS = 50
STORED_MATCHES = 5


def _owned_resume(db: Session, resume_id: int, user: User):
    resume = get_resume(db, resume_id, user.id)
    if not resume:
        raise HTTPException(status_code=404, detail="Resume not found")
    return resume


def _run(operation: str, call, *args, **kwargs):
    """Invoke the AI service and turn its failures into HTTP errors."""
    try:
        return call(*args, **kwargs)
    except ModelOutputError as e:
        logger.error(f"{operation}: unusable model output: {str(e)}")
        raise HTTPException(status_code=502, detail="AI service returned unparseable output")
    except AIServiceError as e:
        logger.error(f"{operation}: AI service failure: {str(e)}")
        raise HTTPException(status_code=503, detail="AI service is unavailable")


@router.post("/analyze-resume")
def analyze_resume(
    request: ResumeAnalysisRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(ai_user),
    ai: CareerAIService = Depends(get_ai_service),
):
    resume = _owned_resume(db, request.resume_id, current_user)
    result = _run("Resume analysis", ai.score_resume, resume)

    insights = result.model_dump()
    analysis, = save_analyses(db, [build_analysis(resume.id, AnalysisType.RESUME_SCORE, result.score, insights)])
    logger.info(f"Stored resume score {analysis.id} for resume {resume.id}")

    return {"success": True, "data": {"analysis_id": analysis.id, **insights}}


@router.post("/match-jobs")
def match_jobs(
    request: JobMatchRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(ai_user),
    ai: CareerAIService = Depends(get_ai_service),
):
    resume = _owned_resume(db, request.resume_id, current_user)
    jobs = (
        db.query(Job)
        .filter(Job.is_active.is_(True))
        .order_by(Job.created_at.desc(), Job.id.desc())
        .limit(CANDIDATE_JOBS)
        .all()
    )

    matches = _run("Job matching", ai.match_jobs, resume, jobs, request.limit)

    save_analyses(db, [
        build_analysis(
            resume.id,
            AnalysisType.JOB_MATCH,
            item.match_score,
            {
                "matching_skills": item.matching_skills,
                "missing_skills": item.missing_skills,
                "reasoning": item.reasoning,
            },
            job_id=job.id,
        )
        for job, item in matches[:STORED_MATCHES]
    ])

    data = [
        {
            "job": JobSummary.model_validate(job),
            "match_score": item.match_score,
            "matching_skills": item.matching_skills,
            "missing_skills": item.missing_skills,
            "reasoning": item.reasoning,
        }
        for job, item in matches
    ]
    return {"success": True, "data": {"matches": data, "total_jobs_analyzed": len(jobs)}}


@router.post("/skill-gap-analysis")
def skill_gap_analysis(
    request: SkillGapRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(ai_user),
    ai: CareerAIService = Depends(get_ai_service),
):
    resume = _owned_resume(db, request.resume_id, current_user)
    result = _run("Skill gap analysis", ai.analyze_skill_gap, resume, request.target_role, request.target_industry)

    insights = {
        "target_role": request.target_role,
        "target_industry": request.target_industry,
        **result.model_dump(),
    }
    analysis, = save_analyses(
        db, [build_analysis(resume.id, AnalysisType.SKILL_GAP, result.overall_readiness, insights)]
    )

    return {"success": True, "data": {"analysis_id": analysis.id, **insights}}


@router.post("/improve-resume")
def improve_resume(
    request: ResumeImprovementRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(ai_user),
    ai: CareerAIService = Depends(get_ai_service),
):
    resume = _owned_resume(db, request.resume_id, current_user)
    result = _run("Resume improvement", ai.suggest_improvements, resume, request.target_role)
    return {"success": True, "data": result}


@router.get("/analysis-history")
def analysis_history(
    resume_id: Optional[int] = Query(None, gt=0),
    analysis_type: Optional[AnalysisType] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(ai_user),
):
    analyses = get_history(db, current_user.id, resume_id, analysis_type)
    return {"success": True, "data": [AIAnalysis.model_validate(a) for a in analyses]}
