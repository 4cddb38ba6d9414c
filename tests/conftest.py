"""
Pytest configuration and fixtures
- 메모리 SQLite + StaticPool: 테스트 하나가 같은 연결/스키마를 공유
- PDF 변환(weasyprint)은 네이티브 라이브러리가 필요하므로 가짜 바이트로 대체
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from database.db import Database
from dependencies.services import get_db
from main import app
from services.pdf_service import PDFService
from services.store import EntityStore
from tests.factories import FAKE_PDF, make_course, make_student


@pytest.fixture
def database():
    db = Database(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    with database.session() as db:
        yield db


@pytest.fixture
def store(session):
    return EntityStore(session)


@pytest.fixture(autouse=True)
def fake_pdf(monkeypatch):
    """HTML 렌더링은 실제로 수행, PDF 변환만 대체. 렌더링된 HTML은 rendered 에 보관"""
    rendered = []

    def _html_to_pdf(self, html_content):
        rendered.append(html_content)
        return FAKE_PDF

    monkeypatch.setattr(PDFService, "_html_to_pdf", _html_to_pdf)
    return rendered


@pytest.fixture
def client(database):
    def _get_db():
        with database.session() as db:
            yield db

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def student(store):
    return make_student(store)


@pytest.fixture
def course(store):
    return make_course(store)
