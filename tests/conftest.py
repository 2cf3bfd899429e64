import mongomock
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.utils.database import ReportRepository
from main import create_app


@pytest.fixture
def collection():
    return mongomock.MongoClient()["crime_reports"]["reports"]


@pytest.fixture
def repository(collection):
    return ReportRepository(collection)


@pytest.fixture
def client(repository):
    app = create_app(settings=Settings(), repository=repository)
    with TestClient(app) as test_client:
        yield test_client
