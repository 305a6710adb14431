import json
import os

from jobboard.models.skill import ResumeSkill, Skill
from jobboard.utils.config import Config

SKILLS = [
    {"name": "Python", "proficiency_level": "expert", "years_experience": 8},
    {"name": "SQL", "proficiency_level": "advanced", "years_experience": 5, "category": "Data"},
    {"name": "Docker", "proficiency_level": "beginner"},
]


def skill_levels(resume):
    return {s["name"]: s["proficiency_level"] for s in resume["skills"]}


def test_create_resume_with_nested_sections(client, applicant_headers, make_resume):
    resume = make_resume(
        applicant_headers,
        experience_years="8",
        is_public="true",
        skills=json.dumps(SKILLS),
        work_experience=json.dumps([
            {"company_name": "Acme", "position": "Engineer", "start_date": "2018-01-01", "is_current": True},
        ]),
        education=json.dumps([{"institution": "State University", "degree": "BSc"}]),
    )
    assert resume["experience_years"] == 8
    assert resume["is_public"] is True
    assert skill_levels(resume) == {"Python": "expert", "SQL": "advanced", "Docker": "beginner"}
    assert resume["work_experience"][0]["company_name"] == "Acme"
    assert resume["education"][0]["degree"] == "BSc"


def test_resume_skills_round_trip(client, applicant_headers, make_resume):
    created = make_resume(applicant_headers, skills=json.dumps(SKILLS))
    fetched = client.get(f"/api/resumes/{created['id']}", headers=applicant_headers).json()["data"]
    assert skill_levels(fetched) == skill_levels(created)
    assert len(fetched["skills"]) == 3


def test_update_replaces_skill_set(client, applicant_headers, make_resume, db_session):
    resume = make_resume(applicant_headers, skills=json.dumps(SKILLS))
    response = client.put(
        f"/api/resumes/{resume['id']}",
        data={"skills": json.dumps([
            {"name": "Python", "proficiency_level": "advanced"},
            {"name": "Go", "proficiency_level": "beginner"},
        ])},
        headers=applicant_headers,
    )
    assert response.status_code == 200
    assert skill_levels(response.json()["data"]) == {"Python": "advanced", "Go": "beginner"}
    assert db_session.query(ResumeSkill).filter(ResumeSkill.resume_id == resume["id"]).count() == 2
    # The shared taxonomy keeps every skill ever referenced
    assert db_session.query(Skill).filter(Skill.name == "Docker").count() == 1


def test_update_without_skills_keeps_them(client, applicant_headers, make_resume):
    resume = make_resume(applicant_headers, skills=json.dumps(SKILLS))
    response = client.put(
        f"/api/resumes/{resume['id']}", data={"title": "Staff Python Developer"}, headers=applicant_headers
    )
    data = response.json()["data"]
    assert data["title"] == "Staff Python Developer"
    assert len(data["skills"]) == 3


def test_duplicate_skill_names_collapse(client, applicant_headers, make_resume):
    resume = make_resume(applicant_headers, skills=json.dumps([
        {"name": "Python", "proficiency_level": "beginner"},
        {"name": "Python", "proficiency_level": "expert"},
    ]))
    assert skill_levels(resume) == {"Python": "expert"}


def test_resume_validation(client, applicant_headers):
    response = client.post("/api/resumes", data={"title": "CV"}, headers=applicant_headers)
    assert response.status_code == 400
    assert response.json()["error"].startswith("title:")

    response = client.post(
        "/api/resumes", data={"title": "Valid title", "skills": "not json"}, headers=applicant_headers
    )
    assert response.status_code == 400
    assert response.json()["error"] == "skills: must be a JSON array"

    response = client.post(
        "/api/resumes", data={"title": "Valid title", "experience_years": "60"}, headers=applicant_headers
    )
    assert response.status_code == 400


def test_resume_file_upload(client, applicant_headers):
    response = client.post(
        "/api/resumes",
        data={"title": "Resume with file"},
        files={"resume_file": ("cv.pdf", b"%PDF-1.4 test", "application/pdf")},
        headers=applicant_headers,
    )
    assert response.status_code == 201
    url = response.json()["data"]["resume_file_url"]
    assert url.startswith("/uploads/resumes/resume-") and url.endswith(".pdf")
    assert os.path.exists(os.path.join(Config.UPLOAD_DIR, os.path.basename(url)))


def test_resume_file_type_rejected(client, applicant_headers):
    response = client.post(
        "/api/resumes",
        data={"title": "Resume with file"},
        files={"resume_file": ("cv.txt", b"plain text", "text/plain")},
        headers=applicant_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Only PDF, DOC, and DOCX files are allowed"


def test_resume_file_too_large(client, applicant_headers):
    content = b"0" * (Config.MAX_UPLOAD_SIZE_MB * 1024 * 1024 + 1)
    response = client.post(
        "/api/resumes",
        data={"title": "Resume with file"},
        files={"resume_file": ("cv.pdf", content, "application/pdf")},
        headers=applicant_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "File too large. Maximum size is 5MB"


def test_resumes_are_owner_scoped(client, register, applicant_headers, make_resume):
    resume = make_resume(applicant_headers)
    other = register("other@example.com")

    assert client.get(f"/api/resumes/{resume['id']}", headers=other).status_code == 404
    assert client.delete(f"/api/resumes/{resume['id']}", headers=other).status_code == 404

    listing = client.get("/api/resumes", headers=applicant_headers).json()
    assert listing["count"] == 1


def test_employer_cannot_manage_resumes(client, employer_headers):
    response = client.get("/api/resumes", headers=employer_headers)
    assert response.status_code == 403
    assert response.json()["error"] == "Access denied. Insufficient permissions."


def test_delete_resume_cascades(client, applicant_headers, make_resume, db_session):
    resume = make_resume(applicant_headers, skills=json.dumps(SKILLS))
    response = client.delete(f"/api/resumes/{resume['id']}", headers=applicant_headers)
    assert response.status_code == 200
    assert db_session.query(ResumeSkill).count() == 0
    assert client.get(f"/api/resumes/{resume['id']}", headers=applicant_headers).status_code == 404
