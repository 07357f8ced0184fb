"""Pytest fixtures for Helpdesk integration tests.

These tests require a MongoDB server (default `mongodb://localhost:27018`, override with MONGO_URI).
They are skipped when no server answers on the configured URI.
"""

import os

import pytest
from fastapi.testclient import TestClient
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from helpdesk import HelpdeskService, HelpdeskSettings
from helpdesk.db import ACCOUNTS, PROBLEMS, REVIEWS

# MongoDB connection settings
MONGO_URL = os.environ.get("MONGO_URI", "mongodb://localhost:27018")
MONGO_DB = "helpdesk_test"


@pytest.fixture(scope="session")
def mongo_client():
    """Synchronous client used to inspect and wipe the test database."""
    client = MongoClient(MONGO_URL, serverSelectionTimeoutMS=2000)
    try:
        client.admin.command("ping")
    except PyMongoError as e:
        client.close()
        pytest.skip(f"MongoDB not available at {MONGO_URL}: {e}")
    yield client
    client.drop_database(MONGO_DB)
    client.close()


@pytest.fixture
def test_db(mongo_client):
    """The test database, emptied before and after each test."""
    db = mongo_client[MONGO_DB]
    for name in (ACCOUNTS, PROBLEMS, REVIEWS):
        db[name].delete_many({})
    yield db
    for name in (ACCOUNTS, PROBLEMS, REVIEWS):
        db[name].delete_many({})


@pytest.fixture
def settings() -> HelpdeskSettings:
    return HelpdeskSettings(
        _env_file=None,
        JWT_SECRET="integration-secret",
        MONGO_URI=MONGO_URL,
        MONGO_DB=MONGO_DB,
        BCRYPT_ROUNDS=4,
        LOG_JSON=False,
    )


@pytest.fixture
def client(settings, test_db):
    """A TestClient whose lifespan connects to MongoDB and creates indexes."""
    service = HelpdeskService(settings)
    with TestClient(service.app) as client:
        yield client
