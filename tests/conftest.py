import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.core.database import Base, SessionLocal, engine, get_db
from app.main import app
from app.models.section import Section
from app.models.subject import Subject
from app.services.auth import AuthService

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    # Requests share the test session; StaticPool has a single connection
    def override_get_db():
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client, db):
    AuthService(db).create_admin(ADMIN_USERNAME, ADMIN_PASSWORD)
    db.commit()
    response = client.post(
        "/api/v1/auth/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def scientific(db):
    """Section "علمي" with رياضيات (300/150) and فيزياء (200/100)."""
    section = Section(name="علمي")
    db.add(section)
    db.flush()
    math = Subject(name="رياضيات", section_id=section.id, max_grade=Decimal("300"), min_grade=Decimal("150"))
    physics = Subject(name="فيزياء", section_id=section.id, max_grade=Decimal("200"), min_grade=Decimal("100"))
    db.add_all([math, physics])
    db.commit()
    return section, math, physics
