import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship

from jobboard.database import Base
from jobboard.models.user import enum_column


class ProficiencyLevel(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class Skill(Base):
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, index=True, nullable=False)
    category = Column(String(50), nullable=True, index=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    resume_links = relationship("ResumeSkill", back_populates="skill", passive_deletes=True)


class ResumeSkill(Base):
    __tablename__ = "resume_skills"
    __table_args__ = (UniqueConstraint("resume_id", "skill_id", name="unique_resume_skill"),)

    id = Column(Integer, primary_key=True, index=True)
    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False, index=True)
    proficiency_level = Column(
        enum_column(ProficiencyLevel, "proficiency_level"),
        default=ProficiencyLevel.INTERMEDIATE,
        nullable=False,
    )
    years_experience = Column(Integer, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)

    resume = relationship("Resume", back_populates="skills")
    skill = relationship("Skill", back_populates="resume_links", lazy="joined")

    # Flattened for the resume payload
    @property
    def name(self):
        return self.skill.name

    @property
    def category(self):
        return self.skill.category
