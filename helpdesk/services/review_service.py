from typing import List

from helpdesk.models import Review, ReviewCreateRequest
from helpdesk.repositories import ReviewRepository


class ReviewService:
    def __init__(self, review_repo: ReviewRepository):
        self.review_repo = review_repo

    async def create_review(self, payload: ReviewCreateRequest) -> Review:
        return await self.review_repo.create(payload)

    async def list_reviews(self) -> List[Review]:
        return await self.review_repo.list_sorted()
