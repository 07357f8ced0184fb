from .account import Account
from .auth import (
    AccountResponse,
    LoginPayload,
    LoginResponse,
    MessageResponse,
    RegisterPayload,
    VerifyResponse,
)
from .problem import ProblemCreateRequest, ProblemReport, ProblemResponse, Urgency
from .review import Review, ReviewCreateRequest, ReviewListResponse, ReviewResponse

__all__ = [
    "Account",
    "AccountResponse",
    "LoginPayload",
    "LoginResponse",
    "MessageResponse",
    "RegisterPayload",
    "VerifyResponse",
    "ProblemCreateRequest",
    "ProblemReport",
    "ProblemResponse",
    "Urgency",
    "Review",
    "ReviewCreateRequest",
    "ReviewListResponse",
    "ReviewResponse",
]
