"""Create job board schema

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2025-06-02 10:14:37.512804

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum('applicant', 'employer', 'admin', name='user_role')
proficiency_level = sa.Enum('beginner', 'intermediate', 'advanced', 'expert', name='proficiency_level')
employment_type = sa.Enum('full-time', 'part-time', 'contract', 'internship', name='employment_type')
experience_level = sa.Enum('entry', 'mid', 'senior', 'executive', name='experience_level')
application_status = sa.Enum('pending', 'reviewed', 'shortlisted', 'rejected', 'hired', name='application_status')
analysis_type = sa.Enum('resume_score', 'job_match', 'skill_gap', name='analysis_type')

SAMPLE_SKILLS = [
    ('JavaScript', 'Programming'),
    ('React', 'Frontend'),
    ('Node.js', 'Backend'),
    ('MySQL', 'Database'),
    ('Python', 'Programming'),
    ('Java', 'Programming'),
    ('HTML/CSS', 'Frontend'),
    ('AWS', 'Cloud'),
    ('Docker', 'DevOps'),
    ('Git', 'Version Control'),
    ('Project Management', 'Soft Skills'),
    ('Communication', 'Soft Skills'),
    ('Leadership', 'Soft Skills'),
    ('Problem Solving', 'Soft Skills'),
    ('Machine Learning', 'AI/ML'),
]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('role', user_role, nullable=False, server_default='applicant'),
        sa.Column('profile_image', sa.String(500), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])

    skills = op.create_table(
        'skills',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('category', sa.String(50), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_skills_name', 'skills', ['name'], unique=True)
    op.create_index('ix_skills_category', 'skills', ['category'])

    op.create_table(
        'resumes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('summary', sa.Text(), nullable=True),
        sa.Column('experience_years', sa.Integer(), server_default='0'),
        sa.Column('current_position', sa.String(200), nullable=True),
        sa.Column('current_company', sa.String(200), nullable=True),
        sa.Column('location', sa.String(200), nullable=True),
        sa.Column('salary_expectation', sa.Numeric(10, 2), nullable=True),
        sa.Column('resume_file_url', sa.String(500), nullable=True),
        sa.Column('is_public', sa.Boolean(), server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_resumes_user_id', 'resumes', ['user_id'])
    op.create_index('ix_resumes_location', 'resumes', ['location'])
    op.create_index('ix_resumes_is_public', 'resumes', ['is_public'])

    op.create_table(
        'resume_skills',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('resume_id', sa.Integer(), sa.ForeignKey('resumes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('skill_id', sa.Integer(), sa.ForeignKey('skills.id', ondelete='CASCADE'), nullable=False),
        sa.Column('proficiency_level', proficiency_level, nullable=False, server_default='intermediate'),
        sa.Column('years_experience', sa.Integer(), server_default='0'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.UniqueConstraint('resume_id', 'skill_id', name='unique_resume_skill'),
    )
    op.create_index('ix_resume_skills_resume_id', 'resume_skills', ['resume_id'])
    op.create_index('ix_resume_skills_skill_id', 'resume_skills', ['skill_id'])

    op.create_table(
        'work_experience',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('resume_id', sa.Integer(), sa.ForeignKey('resumes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('company_name', sa.String(200), nullable=False),
        sa.Column('position', sa.String(200), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('is_current', sa.Boolean(), server_default=sa.false()),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('location', sa.String(200), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_work_experience_resume_id', 'work_experience', ['resume_id'])
    op.create_index('ix_work_experience_company_name', 'work_experience', ['company_name'])

    op.create_table(
        'education',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('resume_id', sa.Integer(), sa.ForeignKey('resumes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('institution', sa.String(200), nullable=False),
        sa.Column('degree', sa.String(200), nullable=False),
        sa.Column('field_of_study', sa.String(200), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('grade', sa.String(50), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_education_resume_id', 'education', ['resume_id'])

    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('employer_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('requirements', sa.Text(), nullable=True),
        sa.Column('location', sa.String(200), nullable=True),
        sa.Column('salary_min', sa.Numeric(10, 2), nullable=True),
        sa.Column('salary_max', sa.Numeric(10, 2), nullable=True),
        sa.Column('employment_type', employment_type, server_default='full-time'),
        sa.Column('experience_level', experience_level, server_default='mid'),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('application_deadline', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_jobs_employer_id', 'jobs', ['employer_id'])
    op.create_index('ix_jobs_location', 'jobs', ['location'])
    op.create_index('ix_jobs_employment_type', 'jobs', ['employment_type'])
    op.create_index('ix_jobs_is_active', 'jobs', ['is_active'])

    op.create_table(
        'applications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('job_id', sa.Integer(), sa.ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('applicant_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('resume_id', sa.Integer(), sa.ForeignKey('resumes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('cover_letter', sa.Text(), nullable=True),
        sa.Column('status', application_status, nullable=False, server_default='pending'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('applied_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
        sa.UniqueConstraint('job_id', 'applicant_id', name='unique_application'),
    )
    op.create_index('ix_applications_job_id', 'applications', ['job_id'])
    op.create_index('ix_applications_applicant_id', 'applications', ['applicant_id'])
    op.create_index('ix_applications_status', 'applications', ['status'])

    op.create_table(
        'ai_analysis',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('resume_id', sa.Integer(), sa.ForeignKey('resumes.id', ondelete='CASCADE'), nullable=True),
        sa.Column('job_id', sa.Integer(), sa.ForeignKey('jobs.id', ondelete='CASCADE'), nullable=True),
        sa.Column('analysis_type', analysis_type, nullable=False),
        sa.Column('score', sa.Numeric(5, 2), nullable=True),
        sa.Column('insights', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_ai_analysis_resume_id', 'ai_analysis', ['resume_id'])
    op.create_index('ix_ai_analysis_job_id', 'ai_analysis', ['job_id'])
    op.create_index('ix_ai_analysis_analysis_type', 'ai_analysis', ['analysis_type'])

    op.bulk_insert(skills, [{'name': name, 'category': category} for name, category in SAMPLE_SKILLS])


def downgrade() -> None:
    for table in ('ai_analysis', 'applications', 'jobs', 'education', 'work_experience',
                  'resume_skills', 'resumes', 'skills', 'users'):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_type in (analysis_type, application_status, experience_level, employment_type,
                      proficiency_level, user_role):
        enum_type.drop(bind, checkfirst=True)
