from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from helpdesk.models import ReviewCreateRequest
from helpdesk.services import ReviewService


def _review(**overrides) -> ReviewCreateRequest:
    data = {
        "userId": "65f000000000000000000001",
        "userName": "Ana",
        "problemDate": "2026-02-10T09:30:00Z",
        "problemDescription": "VPN drops every hour",
        "toolsUsed": "Remote desktop",
        "rating": 5,
        "comment": "Fixed quickly",
    }
    data.update(overrides)
    return ReviewCreateRequest(**data)


class TestReviewPayload:
    def test_accepts_camel_case_keys(self):
        review = _review()

        assert review.user_name == "Ana"
        assert review.tools_used == "Remote desktop"
        assert review.problem_date == datetime(2026, 2, 10, 9, 30, tzinfo=UTC)

    def test_user_id_is_optional(self):
        review = _review(userId=None)
        assert review.user_id is None

    @pytest.mark.parametrize("rating", [1, 3, 5])
    def test_rating_in_range(self, rating):
        assert _review(rating=rating).rating == rating

    @pytest.mark.parametrize("rating", [0, 6, -1])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError):
            _review(rating=rating)

    def test_missing_field_is_rejected(self):
        data = _review().model_dump(by_alias=True)
        del data["comment"]

        with pytest.raises(ValidationError):
            ReviewCreateRequest(**data)


class TestReviewService:
    @pytest.mark.asyncio
    async def test_create_review_assigns_id_and_date(self, review_repo):
        service = ReviewService(review_repo)

        review = await service.create_review(_review())

        assert review.id
        assert review.date is not None
        assert review.rating == 5
        assert review_repo.reviews == [review]

    @pytest.mark.asyncio
    async def test_list_reviews_newest_first(self, review_repo):
        service = ReviewService(review_repo)
        first = await service.create_review(_review(comment="first"))
        second = await service.create_review(_review(comment="second"))
        third = await service.create_review(_review(comment="third"))

        listed = await service.list_reviews()

        assert [r.id for r in listed] == [third.id, second.id, first.id]

    @pytest.mark.asyncio
    async def test_list_reviews_empty(self, review_repo):
        assert await ReviewService(review_repo).list_reviews() == []
