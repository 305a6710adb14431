from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import relationship

from jobboard.database import Base


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    summary = Column(Text, nullable=True)
    experience_years = Column(Integer, default=0)
    current_position = Column(String(200), nullable=True)
    current_company = Column(String(200), nullable=True)
    location = Column(String(200), nullable=True, index=True)
    salary_expectation = Column(Numeric(10, 2), nullable=True)
    resume_file_url = Column(String(500), nullable=True)
    is_public = Column(Boolean, default=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="resumes")
    skills = relationship(
        "ResumeSkill",
        back_populates="resume",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ResumeSkill.id",
    )
    work_experience = relationship(
        "WorkExperience",
        back_populates="resume",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="WorkExperience.start_date.desc()",
    )
    education = relationship("Education", back_populates="resume", cascade="all, delete-orphan", passive_deletes=True)
    applications = relationship("Application", back_populates="resume", cascade="all", passive_deletes=True)
    analyses = relationship("AIAnalysis", back_populates="resume", cascade="all", passive_deletes=True)


class WorkExperience(Base):
    __tablename__ = "work_experience"

    id = Column(Integer, primary_key=True, index=True)
    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False, index=True)
    company_name = Column(String(200), nullable=False, index=True)
    position = Column(String(200), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    is_current = Column(Boolean, default=False)
    description = Column(Text, nullable=True)
    location = Column(String(200), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    resume = relationship("Resume", back_populates="work_experience")


class Education(Base):
    __tablename__ = "education"

    id = Column(Integer, primary_key=True, index=True)
    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False, index=True)
    institution = Column(String(200), nullable=False)
    degree = Column(String(200), nullable=False)
    field_of_study = Column(String(200), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    grade = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    resume = relationship("Resume", back_populates="education")
