from .auth_service import AuthService
from .problem_service import ProblemService
from .review_service import ReviewService

__all__ = ["AuthService", "ProblemService", "ReviewService"]
