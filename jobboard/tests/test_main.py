def test_home_page(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Job Board API"}


def test_invalid_route(client):
    response = client.get("/api/invalid")
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_api_routes_are_mounted(client):
    paths = client.app.openapi()["paths"]
    for path in (
        "/api/auth/register",
        "/api/resumes",
        "/api/jobs",
        "/api/jobs/employer/my-jobs",
        "/api/applications/stats/overview",
        "/api/skills",
        "/api/ai/match-jobs",
        "/api/ai/analysis-history",
    ):
        assert path in paths


def test_protected_route_requires_token(client):
    response = client.get("/api/resumes")
    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Not authenticated"}
    assert response.headers["www-authenticate"] == "Bearer"


def test_garbage_token_is_rejected(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token."
