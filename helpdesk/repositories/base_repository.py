"""Storage contracts the services depend on.

The Mongo repositories in this package implement them; tests substitute
in-memory fakes with the same methods.
"""

from typing import List, Optional, Protocol

from helpdesk.models import Account, ProblemCreateRequest, ProblemReport, Review, ReviewCreateRequest, Urgency


class AccountRepository(Protocol):
    async def get_by_email(self, email: str) -> Optional[Account]:
        """Return the account registered under `email`, if any."""

    async def get_by_id(self, account_id: str) -> Optional[Account]:
        """Return the account with this id, or None for unknown or malformed ids."""

    async def create(self, email: str, name: str, password_hash: str) -> Account:
        """Persist a new account. Raises DuplicateIdentityError if the email is taken."""


class ProblemRepository(Protocol):
    async def create(self, payload: ProblemCreateRequest, urgency: Urgency) -> ProblemReport:
        """Persist a problem report with its normalized urgency and a server timestamp."""


class ReviewRepository(Protocol):
    async def create(self, payload: ReviewCreateRequest) -> Review:
        """Persist a review with a server timestamp."""

    async def list_sorted(self) -> List[Review]:
        """Return every review, newest first."""
