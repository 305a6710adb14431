"""Plain-text renderings of resumes and jobs, and the instruction templates sent with them.

Everything here is deterministic: the same rows always produce the same prompt.
"""
from typing import List, Optional

from jobboard.models.resume import Resume
from jobboard.models.job import Job

JOB_DESCRIPTION_PREVIEW = 200

RESUME_ANALYST_ROLE = (
    "You are an expert HR professional and resume analyst. "
    "Provide detailed, actionable feedback on resumes."
)
JOB_MATCHER_ROLE = (
    "You are an expert job matching AI. "
    "Analyze resumes against job requirements and provide accurate match scores."
)
CAREER_COACH_ROLE = "You are a career development expert specializing in skill gap analysis and career transitions."
RESUME_WRITER_ROLE = (
    "You are a professional resume writer and career coach. "
    "Provide specific, actionable improvements."
)

RESUME_SCORE_INSTRUCTIONS = """Analyze the following resume and provide insights:

{resume}

Please provide:
1. Overall resume score (0-100)
2. Strengths (top 3)
3. Areas for improvement (top 3)
4. Suggested skills to add
5. Industry recommendations
6. ATS optimization tips

Respond with ONLY a JSON object of this shape:
{{
  "score": number,
  "strengths": [string],
  "improvements": [string],
  "suggested_skills": [string],
  "industry_recommendations": [string],
  "ats_tips": [string]
}}"""

JOB_MATCH_INSTRUCTIONS = """Resume Profile:
{resume}

Available Jobs:
{jobs}

Analyze the resume against these jobs and return the top {limit} matches.
For each match, provide:
1. Job index (1-based, as numbered above)
2. Match score (0-100)
3. Matching skills
4. Missing skills
5. Match reasoning

Respond with ONLY a JSON array, best match first:
[
  {{
    "job_index": number,
    "match_score": number,
    "matching_skills": [string],
    "missing_skills": [string],
    "reasoning": string
  }}
]"""

SKILL_GAP_INSTRUCTIONS = """Current Profile:
{resume}

Target Role: {target_role}
Target Industry: {target_industry}

Analyze the skill gap between current profile and target role.
Provide:
1. Required skills for target role
2. Skills the candidate already has
3. Missing critical skills
4. Nice-to-have skills
5. Learning path recommendations, highest priority first
6. Estimated time to bridge gaps
7. Certification recommendations
8. Overall readiness for the target role (0-100)

Respond with ONLY a JSON object of this shape:
{{
  "required_skills": [string],
  "existing_skills": [string],
  "critical_gaps": [string],
  "nice_to_have": [string],
  "learning_path": [
    {{
      "skill": string,
      "priority": "high|medium|low",
      "estimated_time": string,
      "resources": [string]
    }}
  ],
  "certifications": [string],
  "overall_readiness": number
}}"""

IMPROVEMENT_INSTRUCTIONS = """Current Resume:
{resume}

Target Role: {target_role}

Provide specific improvement suggestions:
1. Better resume title options
2. Improved professional summary
3. Enhanced work experience descriptions
4. Skills to add/remove
5. Keywords for ATS optimization
6. Format and structure improvements

Respond with ONLY a JSON object of this shape:
{{
  "title_suggestions": [string],
  "summary_improvement": string,
  "experience_improvements": [
    {{
      "original": string,
      "improved": string,
      "reasoning": string
    }}
  ],
  "skills_to_add": [string],
  "skills_to_remove": [string],
  "ats_keywords": [string],
  "format_tips": [string]
}}"""


def _value(value, default="Not specified"):
    if value is None or value == "":
        return default
    return value


def _date_range(start, end, is_current=False) -> str:
    start_text = start.isoformat() if start else "?"
    if is_current or end is None:
        return f"{start_text} - Present"
    return f"{start_text} - {end.isoformat()}"


def skill_names(resume: Resume) -> List[str]:
    return [link.name for link in resume.skills]


def describe_resume(resume: Resume, include_education: bool = True) -> str:
    lines = [
        f"Title: {resume.title}",
        f"Summary: {_value(resume.summary)}",
        f"Experience: {resume.experience_years or 0} years",
        f"Current Position: {_value(resume.current_position)}",
        f"Current Company: {_value(resume.current_company)}",
        f"Location: {_value(resume.location)}",
        "",
        "Skills: " + (
            ", ".join(
                f"{link.name} ({link.proficiency_level.value}, {link.years_experience or 0} yrs)"
                for link in resume.skills
            )
            or "None listed"
        ),
        "",
        "Work Experience:",
    ]

    if resume.work_experience:
        for exp in resume.work_experience:
            lines.append(
                f"- {exp.position} at {exp.company_name} "
                f"({_date_range(exp.start_date, exp.end_date, exp.is_current)})"
            )
            if exp.description:
                lines.append(f"  {exp.description}")
    else:
        lines.append("- None listed")

    if include_education:
        lines.append("")
        lines.append("Education:")
        if resume.education:
            for edu in resume.education:
                field = f" in {edu.field_of_study}" if edu.field_of_study else ""
                lines.append(f"- {edu.degree}{field} from {edu.institution}")
        else:
            lines.append("- None listed")

    return "\n".join(lines)


def describe_job(index: int, job: Job) -> str:
    description = job.description or ""
    if len(description) > JOB_DESCRIPTION_PREVIEW:
        description = description[:JOB_DESCRIPTION_PREVIEW] + "..."
    return (
        f"{index}. {job.title} ({job.employment_type.value}, {job.experience_level.value}) "
        f"at {_value(job.location)}\n"
        f"   Requirements: {_value(job.requirements)}\n"
        f"   Description: {description}"
    )


def resume_score_prompt(resume: Resume) -> str:
    return RESUME_SCORE_INSTRUCTIONS.format(resume=describe_resume(resume))


def job_match_prompt(resume: Resume, jobs: List[Job], limit: int) -> str:
    rendered_jobs = "\n".join(describe_job(i, job) for i, job in enumerate(jobs, start=1))
    return JOB_MATCH_INSTRUCTIONS.format(
        resume=describe_resume(resume, include_education=False),
        jobs=rendered_jobs,
        limit=limit,
    )


def skill_gap_prompt(resume: Resume, target_role: str, target_industry: Optional[str]) -> str:
    return SKILL_GAP_INSTRUCTIONS.format(
        resume=describe_resume(resume, include_education=False),
        target_role=target_role,
        target_industry=_value(target_industry),
    )


def improvement_prompt(resume: Resume, target_role: Optional[str]) -> str:
    return IMPROVEMENT_INSTRUCTIONS.format(
        resume=describe_resume(resume),
        target_role=target_role or "General improvement",
    )
