from sqlalchemy.orm import Session, joinedload
from typing import Any, Dict, List, Optional

from jobboard.models.ai_analysis import AIAnalysis, AnalysisType
from jobboard.models.resume import Resume

HISTORY_LIMIT = 50


def build_analysis(
    resume_id: int,
    analysis_type: AnalysisType,
    score: Optional[float],
    insights: Dict[str, Any],
    job_id: Optional[int] = None,
) -> AIAnalysis:
    return AIAnalysis(
        resume_id=resume_id,
        job_id=job_id,
        analysis_type=analysis_type,
        score=score,
        insights=insights,
    )


def save_analyses(db: Session, analyses: List[AIAnalysis]) -> List[AIAnalysis]:
    """Store a batch of analyses in a single commit."""
    try:
        db.add_all(analyses)
        db.commit()
    except Exception:
        db.rollback()
        raise
    for analysis in analyses:
        db.refresh(analysis)
    return analyses


def get_history(
    db: Session,
    user_id: int,
    resume_id: Optional[int] = None,
    analysis_type: Optional[AnalysisType] = None,
) -> List[AIAnalysis]:
    query = (
        db.query(AIAnalysis)
        .join(Resume, Resume.id == AIAnalysis.resume_id)
        .options(joinedload(AIAnalysis.resume))
        .filter(Resume.user_id == user_id)
    )
    if resume_id is not None:
        query = query.filter(AIAnalysis.resume_id == resume_id)
    if analysis_type is not None:
        query = query.filter(AIAnalysis.analysis_type == analysis_type)
    return query.order_by(AIAnalysis.created_at.desc(), AIAnalysis.id.desc()).limit(HISTORY_LIMIT).all()
