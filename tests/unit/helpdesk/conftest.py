"""Pytest fixtures for Helpdesk unit tests."""

import itertools
from datetime import UTC, datetime, timedelta
from typing import List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog
from bson import ObjectId
from fastapi.testclient import TestClient

from helpdesk.core import HelpdeskSettings, PasswordHasher, TokenIssuer
from helpdesk.core.exceptions import DuplicateIdentityError
from helpdesk.models import Account, ProblemReport, Review
from helpdesk.service import HelpdeskService
from helpdesk.services import AuthService

TEST_SECRET = "test-secret-key"

# ---------------------------------------------------------------------------
# Fake repositories (pure in-memory, no Mongo)
# ---------------------------------------------------------------------------


class FakeAccountRepository:
    """In-memory fake account repository for unit testing."""

    def __init__(self) -> None:
        self.accounts: dict[str, Account] = {}

    async def get_by_email(self, email: str) -> Optional[Account]:
        return next((a for a in self.accounts.values() if a.email == email), None)

    async def get_by_id(self, account_id: str) -> Optional[Account]:
        return self.accounts.get(account_id)

    async def create(self, email: str, name: str, password_hash: str) -> Account:
        if await self.get_by_email(email):
            raise DuplicateIdentityError()
        account = Account(id=str(ObjectId()), email=email, name=name, password_hash=password_hash)
        self.accounts[account.id] = account
        return account


class _Ticker:
    """Deterministic, strictly increasing timestamps."""

    def __init__(self) -> None:
        self._base = datetime(2026, 1, 1, tzinfo=UTC)
        self._count = itertools.count()

    def __call__(self) -> datetime:
        return self._base + timedelta(minutes=next(self._count))


class FakeProblemRepository:
    def __init__(self) -> None:
        self.problems: List[ProblemReport] = []
        self._now = _Ticker()

    async def create(self, payload, urgency) -> ProblemReport:
        problem = ProblemReport(
            id=str(ObjectId()),
            title=payload.title,
            description=payload.description,
            category=payload.category,
            urgency=urgency,
            created_at=self._now(),
        )
        self.problems.append(problem)
        return problem


class FakeReviewRepository:
    def __init__(self) -> None:
        self.reviews: List[Review] = []
        self._now = _Ticker()

    async def create(self, payload) -> Review:
        review = Review(id=str(ObjectId()), date=self._now(), **payload.model_dump())
        self.reviews.append(review)
        return review

    async def list_sorted(self) -> List[Review]:
        return sorted(self.reviews, key=lambda r: r.date, reverse=True)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> HelpdeskSettings:
    return HelpdeskSettings(
        _env_file=None,
        JWT_SECRET=TEST_SECRET,
        MONGO_URI="mongodb://localhost:27017",
        MONGO_DB="helpdesk_test",
        BCRYPT_ROUNDS=4,
        LOG_JSON=False,
    )


@pytest.fixture
def quiet_logger():
    return structlog.get_logger("helpdesk.tests")


@pytest.fixture
def account_repo() -> FakeAccountRepository:
    return FakeAccountRepository()


@pytest.fixture
def problem_repo() -> FakeProblemRepository:
    return FakeProblemRepository()


@pytest.fixture
def review_repo() -> FakeReviewRepository:
    return FakeReviewRepository()


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens() -> TokenIssuer:
    return TokenIssuer(TEST_SECRET)


@pytest.fixture
def auth_service(account_repo, hasher, tokens) -> AuthService:
    return AuthService(account_repo, hasher, tokens)


@pytest.fixture
def make_service(settings, account_repo, problem_repo, review_repo, quiet_logger):
    """Build a HelpdeskService wired to the fake repositories."""

    def _make(**kwargs) -> HelpdeskService:
        kwargs.setdefault("account_repo", account_repo)
        kwargs.setdefault("problem_repo", problem_repo)
        kwargs.setdefault("review_repo", review_repo)
        kwargs.setdefault("logger", quiet_logger)
        return HelpdeskService(settings, enable_db=False, **kwargs)

    return _make


@pytest.fixture
def service(make_service) -> HelpdeskService:
    return make_service()


@pytest.fixture
def client(service) -> TestClient:
    return TestClient(service.app)


@pytest.fixture
def mock_collection():
    """A Motor collection double with awaitable CRUD methods."""
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=ObjectId()))
    collection.create_index = AsyncMock()
    return collection


@pytest.fixture
def mock_db(mock_collection):
    """A HelpdeskDB double handing out `mock_collection` for every name."""
    db = MagicMock()
    db.collection = MagicMock(return_value=mock_collection)
    return db
