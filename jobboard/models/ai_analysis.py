import enum
from datetime import datetime

from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from jobboard.database import Base
from jobboard.models.user import enum_column


class AnalysisType(str, enum.Enum):
    RESUME_SCORE = "resume_score"
    JOB_MATCH = "job_match"
    SKILL_GAP = "skill_gap"


class AIAnalysis(Base):
    """Stored model output. Rows are written once and never updated."""

    __tablename__ = "ai_analysis"

    id = Column(Integer, primary_key=True, index=True)
    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), nullable=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=True, index=True)
    analysis_type = Column(enum_column(AnalysisType, "analysis_type"), nullable=False, index=True)
    score = Column(Numeric(5, 2), nullable=True)
    insights = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    resume = relationship("Resume", back_populates="analyses")
    job = relationship("Job", back_populates="analyses")
