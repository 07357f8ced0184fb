"""Async MongoDB connection handling for the Helpdesk service.

Uses motor (async pymongo driver) directly. Repositories receive a `HelpdeskDB`
and ask it for collections; they never create clients themselves.
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

ACCOUNTS = "accounts"
PROBLEMS = "problems"
REVIEWS = "reviews"


class HelpdeskDB:
    """Owns the Motor client for one database.

    Example:
        ```python
        async with HelpdeskDB(uri="mongodb://localhost:27017", db_name="helpdesk") as db:
            await db.ensure_indexes()
            accounts = db.collection("accounts")
        ```
    """

    def __init__(self, uri: str, db_name: str = "helpdesk"):
        """Store connection parameters. No connection is made until connect()."""
        self._uri = uri
        self._db_name = db_name
        self._client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None

    @property
    def client(self) -> Optional[AsyncIOMotorClient]:
        return self._client

    @property
    def db(self) -> Optional[AsyncIOMotorDatabase]:
        return self._db

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def collection(self, name: str) -> AsyncIOMotorCollection:
        """Get a collection by name."""
        if self._db is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._db[name]

    async def connect(self) -> "HelpdeskDB":
        """Create the Motor client. Idempotent; returns self for chaining."""
        if self._client is not None:
            return self
        self._client = AsyncIOMotorClient(self._uri, tz_aware=True)
        self._db = self._client[self._db_name]
        return self

    async def disconnect(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            self._db = None

    async def ensure_indexes(self) -> None:
        """Create the indexes the repositories rely on.

        The unique index on `accounts.email` is what makes identity uniqueness
        hold under concurrent registrations.
        """
        await self.collection(ACCOUNTS).create_index("email", unique=True)
        await self.collection(REVIEWS).create_index([("date", DESCENDING), ("_id", DESCENDING)])
        await self.collection(PROBLEMS).create_index([("created_at", ASCENDING)])

    async def __aenter__(self) -> "HelpdeskDB":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()
