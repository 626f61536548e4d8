import os

os.environ.setdefault("DATABASE", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker

from kc_api.database import Base, get_db
from kc_api.main import app
from kc_api.services.file_storage import get_storage_dir

DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(DATABASE_URL,
                       connect_args={
                           "check_same_thread": False,
                       },
                       poolclass=StaticPool)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

SECRET_KEY = "kc-secret"


def override_get_db():
    database = TestingSessionLocal()
    try:
        yield database
    finally:
        database.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture(autouse=True)
def setup_and_teardown():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def storage_dir(tmp_path):
    uploads = tmp_path / "uploads"
    app.dependency_overrides[get_storage_dir] = lambda: str(uploads)
    yield uploads
    app.dependency_overrides.pop(get_storage_dir, None)


@pytest.fixture
def db_session():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def forge_token(sub, email=None, role=None, secret=SECRET_KEY):
    claims = {"sub": str(sub)}
    if email is not None:
        claims["email"] = email
    if role is not None:
        claims["role"] = role
    return jwt.encode(claims, secret, algorithm="HS256")


@pytest.fixture
def register_user(client):
    def register(email, username, password="pw"):
        response = client.post("/auth/register", json={"email": email, "username": username, "password": password})
        assert response.status_code == 201, response.text
        return response.json()

    return register


@pytest.fixture
def admin_token(register_user):
    admin = register_user("admin@example.com", "admin")
    return forge_token(admin["userId"], "admin@example.com", "admin")


@pytest.fixture
def upload_file(client):
    def upload(token, filename="notes.txt", content=b"hello", content_type="text/plain", description=None):
        data = {"description": description} if description is not None else {}
        response = client.post(
            "/files",
            files={"file": (filename, content, content_type)},
            data=data,
            headers=auth_header(token),
        )
        assert response.status_code == 201, response.text
        return response.json()

    return upload
