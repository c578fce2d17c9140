from fastapi.testclient import TestClient

from app.core.security import verify_token
from tests.conftest import TEST_PASSWORD


def register(client, email="new@example.com", password="secret123", **extra):
    return client.post("/auth/register", json={"email": email, "password": password, **extra})


def test_register_defaults_to_student(client: TestClient):
    response = register(client, name="Nora")
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User registered successfully"
    assert body["user"]["email"] == "new@example.com"
    assert body["user"]["name"] == "Nora"
    assert body["user"]["role"] == "STUDENT"
    assert "hashed_password" not in body["user"]
    assert "password" not in body["user"]


def test_register_with_role(client: TestClient):
    response = register(client, role="INSTRUCTOR")
    assert response.status_code == 201
    assert response.json()["user"]["role"] == "INSTRUCTOR"


def test_register_duplicate_email(client: TestClient, student):
    response = register(client, email="student@example.com")
    assert response.status_code == 400
    assert response.json() == {"error": "User with this email already exists"}


def test_register_short_password(client: TestClient):
    response = register(client, password="123")
    assert response.status_code == 400
    assert response.json()["error"].startswith("password")


def test_register_invalid_email(client: TestClient):
    response = register(client, email="not-an-email")
    assert response.status_code == 400
    assert "error" in response.json()


def test_register_unknown_role(client: TestClient):
    response = register(client, role="OWNER")
    assert response.status_code == 400


def test_login_success(client: TestClient, instructor):
    response = client.post(
        "/auth/login",
        json={"email": "teacher@example.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["user"]["role"] == "INSTRUCTOR"

    identity = verify_token(body["token"])
    assert identity.id == body["user"]["id"]
    assert identity.role.value == "INSTRUCTOR"
    assert identity.name == "Ivy Instructor"


def test_login_failures_are_indistinguishable(client: TestClient, student):
    wrong_password = client.post(
        "/auth/login",
        json={"email": "student@example.com", "password": "wrong-password"},
    )
    unknown_email = client.post(
        "/auth/login",
        json={"email": "ghost@example.com", "password": TEST_PASSWORD},
    )
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid email or password"}


def test_registered_user_can_log_in(client: TestClient):
    register(client, email="fresh@example.com", password="hunter22")
    response = client.post("/auth/login", json={"email": "fresh@example.com", "password": "hunter22"})
    assert response.status_code == 200
    assert response.json()["token"]


def test_me_returns_identity(client: TestClient, student, student_headers):
    response = client.get("/auth/me", headers=student_headers)
    assert response.status_code == 200
    assert response.json() == {"id": student.id, "role": "STUDENT", "name": "Sam Student"}


def test_me_without_token(client: TestClient):
    response = client.get("/auth/me")
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized: Invalid or missing token"}


def test_me_with_bad_token(client: TestClient):
    response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized: Invalid or missing token"}


def test_me_with_wrong_scheme(client: TestClient, student_headers):
    token = student_headers["Authorization"].split(" ", 1)[1]
    response = client.get("/auth/me", headers={"Authorization": f"Basic {token}"})
    assert response.status_code == 401


def test_register_overlong_name(client: TestClient):
    response = register(client, name="n" * 256)
    assert response.status_code == 400
    assert response.json()["error"].startswith("name")


def test_register_name_at_column_limit(client: TestClient):
    response = register(client, name="n" * 255)
    assert response.status_code == 201
