from datetime import timedelta

from jobboard.dependencies.security import create_access_token
from jobboard.models.user import User

from conftest import PASSWORD, auth_headers


def test_register_returns_token_and_user(client):
    response = client.post(
        "/api/auth/register",
        json={
            "email": "New.Person@Example.com",
            "password": PASSWORD,
            "first_name": "New",
            "last_name": "Person",
            "role": "employer",
        },
    )
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["token_type"] == "bearer"
    assert body["data"]["user"]["email"] == "new.person@example.com"
    assert body["data"]["user"]["role"] == "employer"
    assert "hashed_password" not in body["data"]["user"]


def test_register_defaults_to_applicant(client):
    response = client.post(
        "/api/auth/register",
        json={"email": "a@example.com", "password": PASSWORD, "first_name": "Ann", "last_name": "Lee"},
    )
    assert response.json()["data"]["user"]["role"] == "applicant"


def test_register_duplicate_email(client, register):
    register("dup@example.com")
    response = client.post(
        "/api/auth/register",
        json={"email": "dup@example.com", "password": PASSWORD, "first_name": "Dup", "last_name": "User"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Email already registered"


def test_register_cannot_claim_admin(client):
    response = client.post(
        "/api/auth/register",
        json={"email": "x@example.com", "password": PASSWORD, "first_name": "Xav", "last_name": "Ier", "role": "admin"},
    )
    assert response.status_code == 400


def test_register_short_password(client):
    response = client.post(
        "/api/auth/register",
        json={"email": "x@example.com", "password": "123", "first_name": "Xav", "last_name": "Ier"},
    )
    assert response.status_code == 400
    assert response.json()["error"].startswith("password:")


def test_login(client, register):
    register("login@example.com")
    response = client.post("/api/auth/login", json={"email": "login@example.com", "password": PASSWORD})
    assert response.status_code == 200
    assert response.json()["data"]["access_token"]


def test_login_wrong_password(client, register):
    register("login@example.com")
    response = client.post("/api/auth/login", json={"email": "login@example.com", "password": "wrong-one"})
    assert response.status_code == 401
    assert response.json()["error"] == "Incorrect email or password"


def test_deactivated_account(client, register, db_session):
    headers = register("gone@example.com")
    user = db_session.query(User).filter(User.email == "gone@example.com").first()
    user.is_active = False
    db_session.commit()

    assert client.get("/api/auth/me", headers=headers).json()["error"] == "Account is deactivated."
    response = client.post("/api/auth/login", json={"email": "gone@example.com", "password": PASSWORD})
    assert response.status_code == 401


def test_expired_token(client, register):
    register("late@example.com")
    token = create_access_token({"sub": "late@example.com"}, expires_delta=timedelta(minutes=-1))
    response = client.get("/api/auth/me", headers=auth_headers(token))
    assert response.status_code == 401


def test_token_for_unknown_user(client):
    token = create_access_token({"sub": "nobody@example.com"})
    response = client.get("/api/auth/me", headers=auth_headers(token))
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token. User not found."


def test_me_and_profile_update(client, applicant_headers):
    me = client.get("/api/auth/me", headers=applicant_headers).json()["data"]
    assert me["first_name"] == "Alex"

    response = client.put(
        "/api/auth/profile",
        json={"first_name": "Alexis", "phone": "+1 555 123 4567"},
        headers=applicant_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["first_name"] == "Alexis"
    assert response.json()["data"]["last_name"] == "Applicant"


def test_change_password(client, applicant_headers):
    response = client.post(
        "/api/auth/change-password",
        json={"current_password": "not-mine", "new_password": "another1"},
        headers=applicant_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Current password is incorrect"

    response = client.post(
        "/api/auth/change-password",
        json={"current_password": PASSWORD, "new_password": "another1"},
        headers=applicant_headers,
    )
    assert response.status_code == 200
    login = client.post("/api/auth/login", json={"email": "applicant@example.com", "password": "another1"})
    assert login.status_code == 200


def test_profile_rejects_null_name(client, applicant_headers):
    response = client.put("/api/auth/profile", json={"first_name": None}, headers=applicant_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "first_name: may not be null"
    assert client.get("/api/auth/me", headers=applicant_headers).json()["data"]["first_name"] == "Alex"
