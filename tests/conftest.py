import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from fastapi.testclient import TestClient

from cms_api.core.config import Settings
from cms_api.core.database import Base, build_engine, build_session_factory
from cms_api.main import create_app

TEST_TOKEN = "test-token"

# Engine SQLite pour les tests, passé explicitement à create_app
test_settings = Settings()
test_settings.API_BEARER_TOKEN = TEST_TOKEN
test_settings.LOG_LEVEL = "WARNING"
test_engine = build_engine(test_settings, url="sqlite:///./test.db")
TestingSessionLocal = build_session_factory(test_engine)

app = create_app(test_settings, engine=test_engine)


@pytest.fixture(autouse=True)
def setup_teardown():
    """Crée et nettoie la DB avant/après chaque test"""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client():
    """Client de test FastAPI"""
    return TestClient(app)


@pytest.fixture
def db():
    """Session DB pour les tests"""
    db = TestingSessionLocal()
    yield db
    db.close()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {TEST_TOKEN}"}


@pytest.fixture
def create_page(client, auth_headers):
    """Crée une page via l'API et retourne le JSON"""
    def _create(**overrides):
        payload = {
            "storeId": 1,
            "title": "About us",
            "urlKey": "about-us",
            "content": "<p>Hello</p>",
        }
        payload.update(overrides)
        response = client.post("/api/cms-pages", json=payload, headers=auth_headers)
        assert response.status_code == 201, response.json()
        return response.json()
    return _create
