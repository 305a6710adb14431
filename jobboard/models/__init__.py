from .user import User, UserRole
from .skill import Skill, ResumeSkill, ProficiencyLevel
from .resume import Resume, WorkExperience, Education
from .job import Job, EmploymentType, ExperienceLevel
from .application import Application, ApplicationStatus
from .ai_analysis import AIAnalysis, AnalysisType

__all__ = [
    'User',
    'UserRole',
    'Skill',
    'ResumeSkill',
    'ProficiencyLevel',
    'Resume',
    'WorkExperience',
    'Education',
    'Job',
    'EmploymentType',
    'ExperienceLevel',
    'Application',
    'ApplicationStatus',
    'AIAnalysis',
    'AnalysisType'
]
