from datetime import UTC, datetime

from helpdesk.db import PROBLEMS, HelpdeskDB
from helpdesk.models import ProblemCreateRequest, ProblemReport, Urgency


class MongoProblemRepository:
    def __init__(self, db: HelpdeskDB) -> None:
        self._db = db

    def _collection(self):
        return self._db.collection(PROBLEMS)

    async def create(self, payload: ProblemCreateRequest, urgency: Urgency) -> ProblemReport:
        data = {
            "title": payload.title,
            "description": payload.description,
            "category": payload.category,
            "urgency": urgency.value,
            "created_at": datetime.now(UTC),
        }
        result = await self._collection().insert_one(data)
        return ProblemReport(id=str(result.inserted_id), **data)
