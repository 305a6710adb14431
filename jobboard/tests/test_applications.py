from datetime import date, timedelta

import pytest

from jobboard.models.job import Job


@pytest.fixture
def posting(employer_headers, make_job):
    return make_job(employer_headers)


@pytest.fixture
def resume(applicant_headers, make_resume):
    return make_resume(applicant_headers)


def test_apply_then_duplicate_rejected(client, applicant_headers, posting, resume, apply):
    first = apply(applicant_headers, posting["id"], resume["id"], cover_letter="Keen to join")
    assert first.status_code == 201
    data = first.json()["data"]
    assert data["status"] == "pending"
    assert data["job"]["title"] == posting["title"]
    assert data["resume"]["id"] == resume["id"]

    second = apply(applicant_headers, posting["id"], resume["id"])
    assert second.status_code == 400
    assert second.json()["error"] == "You have already applied to this job"


def test_cannot_apply_to_inactive_job(client, employer_headers, applicant_headers, posting, resume, apply):
    client.post(f"/api/jobs/{posting['id']}/toggle-status", headers=employer_headers)
    response = apply(applicant_headers, posting["id"], resume["id"])
    assert response.status_code == 404
    assert response.json()["error"] == "Job not found or no longer active"


def test_deadline_day_is_still_open(client, applicant_headers, posting, resume, apply, db_session):
    job = db_session.get(Job, posting["id"])
    job.application_deadline = date.today()
    db_session.commit()

    assert apply(applicant_headers, posting["id"], resume["id"]).status_code == 201


def test_past_deadline_rejected(client, applicant_headers, posting, resume, apply, db_session):
    job = db_session.get(Job, posting["id"])
    job.application_deadline = date.today() - timedelta(days=1)
    db_session.commit()

    response = apply(applicant_headers, posting["id"], resume["id"])
    assert response.status_code == 400
    assert response.json()["error"] == "Application deadline has passed"


def test_cannot_apply_with_someone_elses_resume(client, register, posting, resume, apply):
    other = register("other@example.com")
    response = apply(other, posting["id"], resume["id"])
    assert response.status_code == 404
    assert response.json()["error"] == "Resume not found"


def test_employer_cannot_apply(client, employer_headers, posting, apply):
    assert apply(employer_headers, posting["id"], 1).status_code == 403


def test_status_update_by_owner(client, employer_headers, applicant_headers, posting, resume, apply):
    application = apply(applicant_headers, posting["id"], resume["id"]).json()["data"]
    response = client.put(
        f"/api/applications/{application['id']}/status",
        json={"status": "shortlisted", "notes": "Strong profile"},
        headers=employer_headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "shortlisted"
    assert data["notes"] == "Strong profile"
    assert data["applicant"]["email"] == "applicant@example.com"

    response = client.put(
        f"/api/applications/{application['id']}/status", json={"status": "hired"}, headers=employer_headers
    )
    assert response.json()["data"]["notes"] == "Strong profile"


@pytest.mark.parametrize("requested", ["reviewed", "hired", "rejected", "bogus"])
def test_status_update_by_other_employer_forbidden(
    client, register, applicant_headers, posting, resume, apply, requested
):
    application = apply(applicant_headers, posting["id"], resume["id"]).json()["data"]
    rival = register("rival@example.com", "employer")
    response = client.put(
        f"/api/applications/{application['id']}/status", json={"status": requested}, headers=rival
    )
    assert response.status_code == 403
    assert response.json()["error"] == "Access denied. You do not own this job."


def test_invalid_status_value(client, employer_headers, applicant_headers, posting, resume, apply):
    application = apply(applicant_headers, posting["id"], resume["id"]).json()["data"]
    response = client.put(
        f"/api/applications/{application['id']}/status", json={"status": "bogus"}, headers=employer_headers
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid status"


def test_admin_may_update_any_status(client, admin_headers, applicant_headers, posting, resume, apply):
    application = apply(applicant_headers, posting["id"], resume["id"]).json()["data"]
    response = client.put(
        f"/api/applications/{application['id']}/status", json={"status": "rejected"}, headers=admin_headers
    )
    assert response.status_code == 200


def test_withdraw_after_review_rejected(client, employer_headers, applicant_headers, posting, resume, apply):
    application = apply(applicant_headers, posting["id"], resume["id"]).json()["data"]
    client.put(f"/api/applications/{application['id']}/status", json={"status": "reviewed"}, headers=employer_headers)

    response = client.delete(f"/api/applications/{application['id']}", headers=applicant_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Cannot withdraw application after it has been reviewed"

    response = client.put(
        f"/api/applications/{application['id']}", json={"cover_letter": "Too late"}, headers=applicant_headers
    )
    assert response.status_code == 400


def test_withdraw_and_edit_pending(client, applicant_headers, posting, resume, apply):
    application = apply(applicant_headers, posting["id"], resume["id"]).json()["data"]

    response = client.put(
        f"/api/applications/{application['id']}", json={"cover_letter": "Updated letter"}, headers=applicant_headers
    )
    assert response.json()["data"]["cover_letter"] == "Updated letter"

    response = client.delete(f"/api/applications/{application['id']}", headers=applicant_headers)
    assert response.status_code == 200
    assert apply(applicant_headers, posting["id"], resume["id"]).status_code == 201


def test_listings_and_visibility(client, register, employer_headers, applicant_headers, posting, resume, apply):
    application = apply(applicant_headers, posting["id"], resume["id"]).json()["data"]

    mine = client.get("/api/applications", headers=applicant_headers).json()
    assert mine["pagination"]["total_items"] == 1
    assert client.get("/api/applications?status=hired", headers=applicant_headers).json()["data"] == []
    assert client.get("/api/applications?status=nope", headers=applicant_headers).status_code == 400

    for_job = client.get(f"/api/applications/job/{posting['id']}", headers=employer_headers).json()
    assert for_job["job"] == {"id": posting["id"], "title": posting["title"]}
    assert for_job["data"][0]["applicant"]["first_name"] == "Alex"

    assert client.get(f"/api/applications/{application['id']}", headers=employer_headers).status_code == 200
    stranger = register("stranger@example.com")
    assert client.get(f"/api/applications/{application['id']}", headers=stranger).status_code == 404

    rival = register("rival@example.com", "employer")
    assert client.get(f"/api/applications/job/{posting['id']}", headers=rival).status_code == 404


def test_stats_overview(client, register, employer_headers, applicant_headers, admin_headers, posting, resume,
                        make_resume, apply):
    first = apply(applicant_headers, posting["id"], resume["id"]).json()["data"]
    client.put(f"/api/applications/{first['id']}/status", json={"status": "hired"}, headers=employer_headers)

    second_applicant = register("second@example.com")
    second_resume = make_resume(second_applicant)
    apply(second_applicant, posting["id"], second_resume["id"])

    stats = client.get("/api/applications/stats/overview", headers=applicant_headers).json()["data"]
    assert stats == {"total": 1, "pending": 0, "reviewed": 0, "shortlisted": 0, "rejected": 0, "hired": 1}

    stats = client.get("/api/applications/stats/overview", headers=employer_headers).json()["data"]
    assert stats["total"] == 2
    assert stats["pending"] == 1

    stats = client.get("/api/applications/stats/overview", headers=admin_headers).json()["data"]
    assert stats["total"] == 2


def test_empty_notes_clear_stored_notes(client, employer_headers, applicant_headers, posting, resume, apply):
    application = apply(applicant_headers, posting["id"], resume["id"]).json()["data"]
    url = f"/api/applications/{application['id']}/status"
    client.put(url, json={"status": "reviewed", "notes": "Call back"}, headers=employer_headers)

    response = client.put(url, json={"status": "shortlisted"}, headers=employer_headers)
    assert response.json()["data"]["notes"] == "Call back"

    response = client.put(url, json={"status": "shortlisted", "notes": ""}, headers=employer_headers)
    assert response.json()["data"]["notes"] == ""
