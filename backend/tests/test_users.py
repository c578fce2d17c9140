from fastapi.testclient import TestClient

from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.user import User


def test_admin_lists_users(client: TestClient, admin_headers, instructor, course, student):
    response = client.get("/users", headers=admin_headers)
    assert response.status_code == 200
    users = {u["email"]: u for u in response.json()["users"]}
    assert set(users) == {"admin@example.com", "teacher@example.com", "student@example.com"}
    assert users["teacher@example.com"]["course_count"] == 1
    assert users["student@example.com"]["enrollment_count"] == 0
    assert all("hashed_password" not in u for u in users.values())


def test_list_users_requires_admin(client: TestClient, instructor_headers):
    response = client.get("/users", headers=instructor_headers)
    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden: Admin access required"}


def test_user_reads_self(client: TestClient, course, student, student_headers):
    client.post(f"/enrollments/enroll/{course.id}", headers=student_headers)

    response = client.get(f"/users/{student.id}", headers=student_headers)
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["email"] == "student@example.com"
    assert user["created_courses"] == []
    assert [e["course"]["title"] for e in user["enrollments"]] == ["Intro to Python"]


def test_user_cannot_read_others(client: TestClient, other_student, student_headers):
    response = client.get(f"/users/{other_student.id}", headers=student_headers)
    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden: Access denied"}


def test_admin_reads_missing_user(client: TestClient, admin_headers):
    response = client.get("/users/9999", headers=admin_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_invalid_user_id(client: TestClient, admin_headers):
    response = client.get("/users/abc", headers=admin_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid user ID"}


def test_user_updates_self(client: TestClient, student, student_headers):
    response = client.put(
        f"/users/{student.id}",
        json={"name": "Samantha", "email": "sam@example.com"},
        headers=student_headers,
    )
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["name"] == "Samantha"
    assert user["email"] == "sam@example.com"
    assert user["role"] == "STUDENT"


def test_update_requires_a_field(client: TestClient, student, student_headers):
    response = client.put(f"/users/{student.id}", json={}, headers=student_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "At least one field (name or email) must be provided"}


def test_update_to_taken_email(client: TestClient, student, other_student, student_headers):
    response = client.put(
        f"/users/{student.id}",
        json={"email": "student2@example.com"},
        headers=student_headers,
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Email already exists"}


def test_update_other_user_forbidden(client: TestClient, other_student, student_headers):
    response = client.put(f"/users/{other_student.id}", json={"name": "X"}, headers=student_headers)
    assert response.status_code == 403


def test_admin_updates_any_user(client: TestClient, student, admin_headers):
    response = client.put(f"/users/{student.id}", json={"name": "Renamed"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["user"]["name"] == "Renamed"


def test_admin_cannot_delete_self(client: TestClient, admin, admin_headers):
    response = client.delete(f"/users/{admin.id}", headers=admin_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "Cannot delete your own account"}


def test_delete_requires_admin(client: TestClient, other_student, student_headers):
    response = client.delete(f"/users/{other_student.id}", headers=student_headers)
    assert response.status_code == 403


def test_delete_missing_user(client: TestClient, admin_headers):
    response = client.delete("/users/9999", headers=admin_headers)
    assert response.status_code == 404


def test_delete_instructor_cascades(
    client: TestClient, database, instructor, course, student, student_headers, admin_headers
):
    instructor_id, course_id, student_id = instructor.id, course.id, student.id
    client.post(f"/enrollments/enroll/{course_id}", headers=student_headers)

    response = client.delete(f"/users/{instructor_id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "User deleted successfully"}

    with database.session() as session:
        assert session.get(User, instructor_id) is None
        assert session.get(Course, course_id) is None
        assert session.query(Enrollment).count() == 0
        assert session.get(User, student_id) is not None


def test_delete_student_cascades_enrollments(
    client: TestClient, database, course, student, student_headers, admin_headers
):
    course_id, student_id = course.id, student.id
    client.post(f"/enrollments/enroll/{course_id}", headers=student_headers)

    assert client.delete(f"/users/{student_id}", headers=admin_headers).status_code == 200

    with database.session() as session:
        assert session.query(Enrollment).count() == 0
        assert session.get(Course, course_id) is not None


def test_my_stats(client: TestClient, course, instructor_headers, student_headers):
    client.post(f"/enrollments/enroll/{course.id}", headers=student_headers)

    instructor_stats = client.get("/users/me/stats", headers=instructor_headers)
    assert instructor_stats.status_code == 200
    assert instructor_stats.json() == {
        "message": "User statistics retrieved successfully",
        "stats": {"course_count": 1, "enrollment_count": 0},
    }

    student_stats = client.get("/users/me/stats", headers=student_headers).json()["stats"]
    assert student_stats == {"course_count": 0, "enrollment_count": 1}


def test_stats_for_deleted_account(client: TestClient, student, student_headers, admin_headers):
    client.delete(f"/users/{student.id}", headers=admin_headers)
    response = client.get("/users/me/stats", headers=student_headers)
    assert response.status_code == 404


def test_update_with_overlong_name(client: TestClient, student, student_headers):
    response = client.put(f"/users/{student.id}", json={"name": "n" * 256}, headers=student_headers)
    assert response.status_code == 400
    assert response.json()["error"].startswith("name")
