"""Helpdesk exceptions."""


class HelpdeskError(Exception):
    """Base exception for Helpdesk errors."""

    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ConfigurationError(HelpdeskError):
    """Raised at startup when required configuration is missing or invalid."""

    default_message = "Invalid configuration"


class ValidationError(HelpdeskError):
    """Raised when request input is missing or malformed."""

    default_message = "Invalid input"


class DuplicateIdentityError(HelpdeskError):
    """Raised when registering an email that already has an account."""

    default_message = "User already exists"


class InvalidCredentialsError(HelpdeskError):
    """Raised for an unknown email or a wrong password, indistinguishably."""

    default_message = "Invalid credentials"


class TokenError(HelpdeskError):
    """Base exception for session token failures."""

    default_message = "Invalid token"


class TokenMissingError(TokenError):
    default_message = "Token required"


class TokenInvalidError(TokenError):
    default_message = "Invalid token"


class TokenExpiredError(TokenError):
    default_message = "Token has expired"


class NotFoundError(HelpdeskError):
    default_message = "Resource not found"
