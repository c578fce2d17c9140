import os

# Settings are read at import time
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.core.database import Database
from app.core.security import create_access_token, identity_from_user
from app.main import create_app
from app.models.user import User, UserRole
from app.services.courses import CourseRegistry
from app.services.users import CredentialStore


TEST_PASSWORD = "secret123"


@pytest.fixture(scope="function")
def database() -> Generator[Database, None, None]:
    database = Database("sqlite://")
    database.create_all_tables()
    yield database
    database.drop_all_tables()
    database.dispose()


@pytest.fixture(scope="function")
def db(database) -> Generator[Session, None, None]:
    session = database.session()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(database) -> Generator[TestClient, None, None]:
    app = create_app(database=database)
    with TestClient(app) as c:
        yield c


def make_user(db: Session, email: str, role: UserRole, name: str = None) -> User:
    return CredentialStore(db).register(
        email=email,
        password=TEST_PASSWORD,
        name=name or email.split("@")[0],
        role=role,
    )


def auth_headers(user: User) -> dict:
    token = create_access_token(identity_from_user(user))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def admin(db):
    return make_user(db, "admin@example.com", UserRole.ADMIN, "Ada Admin")


@pytest.fixture(scope="function")
def instructor(db):
    return make_user(db, "teacher@example.com", UserRole.INSTRUCTOR, "Ivy Instructor")


@pytest.fixture(scope="function")
def other_instructor(db):
    return make_user(db, "teacher2@example.com", UserRole.INSTRUCTOR, "Oscar Instructor")


@pytest.fixture(scope="function")
def student(db):
    return make_user(db, "student@example.com", UserRole.STUDENT, "Sam Student")


@pytest.fixture(scope="function")
def other_student(db):
    return make_user(db, "student2@example.com", UserRole.STUDENT, "Sky Student")


@pytest.fixture(scope="function")
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture(scope="function")
def instructor_headers(instructor):
    return auth_headers(instructor)


@pytest.fixture(scope="function")
def other_instructor_headers(other_instructor):
    return auth_headers(other_instructor)


@pytest.fixture(scope="function")
def student_headers(student):
    return auth_headers(student)


@pytest.fixture(scope="function")
def other_student_headers(other_student):
    return auth_headers(other_student)


@pytest.fixture(scope="function")
def course(db, instructor):
    return CourseRegistry(db).create(
        identity_from_user(instructor),
        title="Intro to Python",
        price=49.99,
        description="Variables, loops and functions",
    )
