from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

import jwt
from fastapi.security import HTTPBearer
from passlib.context import CryptContext
from pydantic import BaseModel

from .exceptions import TokenExpiredError, TokenInvalidError, TokenMissingError

bearer_scheme = HTTPBearer(auto_error=False)


class TokenData(BaseModel):
    """Decoded JWT payload."""

    sub: str
    email: str
    iat: int
    exp: int

    @property
    def account_id(self) -> str:
        return self.sub


class PasswordHasher:
    """bcrypt password hashing with a fixed cost factor."""

    def __init__(self, rounds: int = 10):
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__default_rounds=rounds)

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a plain password against a stored hash. Malformed hashes never match."""
        if not password or not password_hash:
            return False
        try:
            return self._context.verify(password, password_hash)
        except ValueError:
            return False


class TokenIssuer:
    """Issues and verifies signed, time-limited session tokens.

    Tokens are JWTs carrying the account id (`sub`), the account email and the
    `iat`/`exp` timestamps. The signature is always checked before expiry, so a
    tampered token is reported as invalid even when it is also expired.
    """

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        expires_in: int = 86400,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._expires_in = expires_in
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def issue(self, account_id: str, email: str) -> str:
        """Create a signed JWT for the given account."""
        now = self._clock()
        payload: Dict[str, Any] = {
            "sub": account_id,
            "email": email,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=self._expires_in)).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: Optional[str]) -> TokenData:
        """Decode and validate a JWT, returning a typed payload.

        Raises:
            TokenMissingError: If no token was presented.
            TokenExpiredError: If the signature is valid but the token has expired.
            TokenInvalidError: For a bad signature, malformed token or missing claims.
        """
        if not token:
            raise TokenMissingError()
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                # expiry is judged below on the injected clock
                options={"require": ["sub", "iat", "exp"], "verify_exp": False, "verify_iat": False},
            )
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError() from e

        try:
            data = TokenData(**payload)
        except ValueError as e:
            raise TokenInvalidError() from e

        if data.exp <= int(self._clock().timestamp()):
            raise TokenExpiredError()
        return data
