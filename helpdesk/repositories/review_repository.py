from datetime import UTC, datetime
from typing import List

from pymongo import DESCENDING

from helpdesk.db import REVIEWS, HelpdeskDB
from helpdesk.models import Review, ReviewCreateRequest


class MongoReviewRepository:
    def __init__(self, db: HelpdeskDB) -> None:
        self._db = db

    def _collection(self):
        return self._db.collection(REVIEWS)

    @staticmethod
    def _to_model(doc: dict) -> Review:
        data = {k: v for k, v in doc.items() if k != "_id"}
        return Review(id=str(doc["_id"]), **data)

    async def create(self, payload: ReviewCreateRequest) -> Review:
        data = payload.model_dump()
        data["date"] = datetime.now(UTC)
        result = await self._collection().insert_one(data)
        data["_id"] = result.inserted_id
        return self._to_model(data)

    async def list_sorted(self) -> List[Review]:
        # _id breaks ties between reviews stored within the same millisecond
        cursor = self._collection().find({}).sort([("date", DESCENDING), ("_id", DESCENDING)])
        return [self._to_model(doc) async for doc in cursor]
