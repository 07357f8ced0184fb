from typing import Optional

from starlette.concurrency import run_in_threadpool

from helpdesk.core.exceptions import (
    DuplicateIdentityError,
    InvalidCredentialsError,
    NotFoundError,
)
from helpdesk.core.security import PasswordHasher, TokenData, TokenIssuer
from helpdesk.models import Account, LoginPayload, RegisterPayload
from helpdesk.repositories import AccountRepository


class AuthService:
    """Account registration, credential checks and session tokens.

    bcrypt work is pushed to the threadpool so that hashing does not stall the
    event loop for other requests.
    """

    def __init__(self, account_repo: AccountRepository, hasher: PasswordHasher, tokens: TokenIssuer):
        self.account_repo = account_repo
        self.hasher = hasher
        self.tokens = tokens

    async def register(self, payload: RegisterPayload) -> Account:
        existing = await self.account_repo.get_by_email(payload.email)
        if existing:
            raise DuplicateIdentityError()

        password_hash = await run_in_threadpool(self.hasher.hash, payload.password)
        return await self.account_repo.create(
            email=payload.email,
            name=payload.name,
            password_hash=password_hash,
        )

    async def authenticate(self, payload: LoginPayload) -> Account:
        account = await self.account_repo.get_by_email(payload.email)
        if not account:
            raise InvalidCredentialsError()

        matches = await run_in_threadpool(self.hasher.verify, payload.password, account.password_hash)
        if not matches:
            raise InvalidCredentialsError()
        return account

    async def login(self, payload: LoginPayload) -> tuple[str, Account]:
        """Check credentials and mint a session token for the account."""
        account = await self.authenticate(payload)
        return self.tokens.issue(account_id=account.id, email=account.email), account

    async def current_account(self, token: Optional[str]) -> Account:
        """Resolve a presented session token to the account it was issued for."""
        data: TokenData = self.tokens.verify(token)
        account = await self.account_repo.get_by_id(data.account_id)
        if not account:
            raise NotFoundError("User not found")
        return account
