"""Helpdesk Service - accounts, session tokens, problem reports and reviews."""

from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Callable, Optional

import uvicorn
from fastapi import Depends, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import HTTPAuthorizationCredentials

from helpdesk.core import HelpdeskSettings, PasswordHasher, TokenIssuer, bearer_scheme, setup_logger
from helpdesk.core.handlers import register_exception_handlers
from helpdesk.core.middleware import RequestLoggingMiddleware
from helpdesk.db import HelpdeskDB
from helpdesk.models import (
    AccountResponse,
    LoginPayload,
    LoginResponse,
    MessageResponse,
    ProblemCreateRequest,
    ProblemResponse,
    RegisterPayload,
    ReviewCreateRequest,
    ReviewListResponse,
    ReviewResponse,
    VerifyResponse,
)
from helpdesk.repositories import (
    AccountRepository,
    MongoAccountRepository,
    MongoProblemRepository,
    MongoReviewRepository,
    ProblemRepository,
    ReviewRepository,
)
from helpdesk.services import AuthService, ProblemService, ReviewService


class HelpdeskService:
    """HTTP service exposing registration, login, token verification and record endpoints.

    The settings object is the only source of configuration. Repositories default
    to MongoDB-backed ones built lazily on the service's `HelpdeskDB`; pass your
    own to run without a database.

    Example:
        ```python
        settings = load_settings()
        HelpdeskService(settings).launch()

        # In tests
        service = HelpdeskService(settings, account_repo=FakeAccountRepository(), enable_db=False)
        client = TestClient(service.app)
        ```
    """

    def __init__(
        self,
        settings: HelpdeskSettings,
        *,
        enable_db: bool = True,
        account_repo: Optional[AccountRepository] = None,
        problem_repo: Optional[ProblemRepository] = None,
        review_repo: Optional[ReviewRepository] = None,
        clock: Optional[Callable[[], datetime]] = None,
        logger=None,
    ):
        self.settings = settings
        self.logger = logger or setup_logger(
            "helpdesk",
            level=settings.LOG_LEVEL,
            log_dir=settings.LOG_DIR,
            json=settings.LOG_JSON,
        )

        self.db: Optional[HelpdeskDB] = None
        if enable_db:
            self.db = HelpdeskDB(uri=settings.MONGO_URI, db_name=settings.MONGO_DB)

        self._account_repo = account_repo
        self._problem_repo = problem_repo
        self._review_repo = review_repo

        self.hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
        self.tokens = TokenIssuer(
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            expires_in=settings.JWT_EXPIRES_IN,
            clock=clock,
        )

        self.app = FastAPI(
            title="Helpdesk API",
            summary="Accounts, problem reports and reviews",
            lifespan=self._lifespan,
        )

        # CORS
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.CORS_ORIGINS),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["*"],
        )

        # Request logging
        self.app.add_middleware(RequestLoggingMiddleware, logger=self.logger)

        register_exception_handlers(self.app)

        self._register_auth_endpoints()
        self._register_record_endpoints()

    # -------------------------------------------------------------------------
    # Lazy repo accessors
    # -------------------------------------------------------------------------

    def _require_db(self) -> HelpdeskDB:
        if self.db is None:
            raise RuntimeError("Database disabled and no repository was provided.")
        return self.db

    @property
    def account_repo(self) -> AccountRepository:
        if self._account_repo is None:
            self._account_repo = MongoAccountRepository(self._require_db())
        return self._account_repo

    @property
    def problem_repo(self) -> ProblemRepository:
        if self._problem_repo is None:
            self._problem_repo = MongoProblemRepository(self._require_db())
        return self._problem_repo

    @property
    def review_repo(self) -> ReviewRepository:
        if self._review_repo is None:
            self._review_repo = MongoReviewRepository(self._require_db())
        return self._review_repo

    @property
    def auth(self) -> AuthService:
        return AuthService(self.account_repo, self.hasher, self.tokens)

    @property
    def problems(self) -> ProblemService:
        return ProblemService(self.problem_repo)

    @property
    def reviews(self) -> ReviewService:
        return ReviewService(self.review_repo)

    # -------------------------------------------------------------------------
    # Endpoint registration
    # -------------------------------------------------------------------------

    def add_endpoint(self, path: str, func, *, methods: list[str], status_code: int = 200, response_model=None):
        path = self.settings.API_PREFIX.rstrip("/") + "/" + path.removeprefix("/")
        self.app.add_api_route(
            path,
            endpoint=func,
            methods=methods,
            status_code=status_code,
            response_model=response_model,
        )

    def _register_auth_endpoints(self) -> None:
        self.add_endpoint(
            "/register",
            self.register,
            methods=["POST"],
            status_code=status.HTTP_201_CREATED,
            response_model=MessageResponse,
        )
        self.add_endpoint("/login", self.login, methods=["POST"], response_model=LoginResponse)
        self.add_endpoint("/verify", self.verify, methods=["GET"], response_model=VerifyResponse)
        self.add_endpoint("/health", self.health, methods=["GET"])

    def _register_record_endpoints(self) -> None:
        self.add_endpoint(
            "/problems",
            self.create_problem,
            methods=["POST"],
            status_code=status.HTTP_201_CREATED,
            response_model=ProblemResponse,
        )
        self.add_endpoint(
            "/reviews",
            self.create_review,
            methods=["POST"],
            status_code=status.HTTP_201_CREATED,
            response_model=ReviewResponse,
        )
        self.add_endpoint("/reviews", self.list_reviews, methods=["GET"], response_model=ReviewListResponse)

    # -------------------------------------------------------------------------
    # Auth handlers
    # -------------------------------------------------------------------------

    async def register(self, payload: RegisterPayload) -> MessageResponse:
        """Create an account. 400 if the email is already registered."""
        account = await self.auth.register(payload)
        self.logger.info("account_registered", account_id=account.id)
        return MessageResponse(message="User registered successfully")

    async def login(self, payload: LoginPayload) -> LoginResponse:
        """Exchange email and password for a session token."""
        token, account = await self.auth.login(payload)
        self.logger.info("login_succeeded", account_id=account.id)
        return LoginResponse(
            message="Login successful",
            token=token,
            user=AccountResponse.from_account(account),
        )

    async def verify(
        self,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    ) -> VerifyResponse:
        """Return the account behind a Bearer token."""
        token = credentials.credentials if credentials else None
        account = await self.auth.current_account(token)
        return VerifyResponse(user=AccountResponse.from_account(account))

    async def health(self) -> dict:
        return {
            "success": True,
            "message": "Server running",
            "timestamp": datetime.now(UTC).isoformat(),
        }

    # -------------------------------------------------------------------------
    # Record handlers
    # -------------------------------------------------------------------------

    async def create_problem(self, payload: ProblemCreateRequest) -> ProblemResponse:
        problem = await self.problems.create_problem(payload)
        self.logger.info("problem_created", problem_id=problem.id, urgency=problem.urgency.value)
        return ProblemResponse(message="Problem saved successfully", problem=problem)

    async def create_review(self, payload: ReviewCreateRequest) -> ReviewResponse:
        review = await self.reviews.create_review(payload)
        self.logger.info("review_created", review_id=review.id, rating=review.rating)
        return ReviewResponse(message="Review created successfully", review=review)

    async def list_reviews(self) -> ReviewListResponse:
        return ReviewListResponse(reviews=await self.reviews.list_reviews())

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        if self.db is not None:
            await self.db.connect()
            await self.db.ensure_indexes()
            self.logger.info("database_connected", db_name=self.settings.MONGO_DB)
        try:
            yield
        finally:
            await self.shutdown_cleanup()

    async def shutdown_cleanup(self) -> None:
        """Close the database connection on shutdown."""
        if self.db is not None:
            await self.db.disconnect()
            self.logger.info("database_disconnected")

    def launch(self) -> None:
        """Serve the app with uvicorn on the configured host and port (blocking)."""
        self.logger.info("service_starting", url=self.settings.url)
        uvicorn.run(self.app, host=self.settings.HOST, port=self.settings.PORT, log_config=None)
