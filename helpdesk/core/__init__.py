from .config import HelpdeskSettings, load_settings
from .exceptions import (
    ConfigurationError,
    DuplicateIdentityError,
    HelpdeskError,
    InvalidCredentialsError,
    NotFoundError,
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
    TokenMissingError,
    ValidationError,
)
from .logger import setup_logger
from .security import PasswordHasher, TokenData, TokenIssuer, bearer_scheme

__all__ = [
    "HelpdeskSettings",
    "load_settings",
    "setup_logger",
    "ConfigurationError",
    "DuplicateIdentityError",
    "HelpdeskError",
    "InvalidCredentialsError",
    "NotFoundError",
    "TokenError",
    "TokenExpiredError",
    "TokenInvalidError",
    "TokenMissingError",
    "ValidationError",
    "PasswordHasher",
    "TokenData",
    "TokenIssuer",
    "bearer_scheme",
]
