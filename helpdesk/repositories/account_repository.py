from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import DuplicateKeyError

from helpdesk.core.exceptions import DuplicateIdentityError
from helpdesk.db import ACCOUNTS, HelpdeskDB
from helpdesk.models import Account


class MongoAccountRepository:
    def __init__(self, db: HelpdeskDB) -> None:
        self._db = db

    def _collection(self):
        return self._db.collection(ACCOUNTS)

    @staticmethod
    def _to_model(doc: dict) -> Account:
        return Account(
            id=str(doc["_id"]),
            email=doc["email"],
            name=doc.get("name", ""),
            password_hash=doc["password_hash"],
        )

    async def get_by_email(self, email: str) -> Optional[Account]:
        doc = await self._collection().find_one({"email": email})
        if not doc:
            return None
        return self._to_model(doc)

    async def get_by_id(self, account_id: str) -> Optional[Account]:
        # ObjectId(None) would mint a fresh id
        if not account_id:
            return None
        try:
            oid = ObjectId(account_id)
        except (InvalidId, TypeError):
            return None

        doc = await self._collection().find_one({"_id": oid})
        if not doc:
            return None
        return self._to_model(doc)

    async def create(self, email: str, name: str, password_hash: str) -> Account:
        data = {
            "email": email,
            "name": name,
            "password_hash": password_hash,
        }
        try:
            result = await self._collection().insert_one(data)
        except DuplicateKeyError as e:
            # unique index on email lost a race with a concurrent registration
            raise DuplicateIdentityError() from e
        data["_id"] = result.inserted_id
        return self._to_model(data)
