from .account_repository import MongoAccountRepository
from .base_repository import AccountRepository, ProblemRepository, ReviewRepository
from .problem_repository import MongoProblemRepository
from .review_repository import MongoReviewRepository

__all__ = [
    "AccountRepository",
    "ProblemRepository",
    "ReviewRepository",
    "MongoAccountRepository",
    "MongoProblemRepository",
    "MongoReviewRepository",
]
