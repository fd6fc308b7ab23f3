"""Database configuration for async MongoDB connection using Motor."""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from typing import Optional

from config.settings import settings


TRIPS = "trips"
NOTES = "notes"
USER_PREFERENCES = "user_preferences"
GENERATED_PLANS = "generated_plans"
USERS = "users"


class Database:
    """MongoDB database connection manager."""

    client: Optional[AsyncIOMotorClient] = None
    db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> None:
        """Establish connection to MongoDB."""
        self.client = AsyncIOMotorClient(
            settings.MONGODB_URL,
            maxPoolSize=10,
            minPoolSize=1
        )
        self.db = self.client[settings.DATABASE_NAME]

    def use(self, client, database_name: str) -> None:
        """Bind an already constructed client (used by tests and scripts)."""
        self.client = client
        self.db = client[database_name]

    async def disconnect(self) -> None:
        """Close MongoDB connection."""
        if self.client:
            self.client.close()
        self.client = None
        self.db = None

    async def health_check(self) -> bool:
        """Check if database connection is healthy."""
        try:
            await self.client.admin.command("ping")
            return True
        except Exception:
            return False

    def get_database(self) -> AsyncIOMotorDatabase:
        """Get database instance."""
        return self.db

    def get_collection(self, collection_name: str):
        """Get a specific collection from the database."""
        return self.db[collection_name]


database = Database()


async def create_indexes() -> None:
    """Create the indexes every collection relies on for ownership-scoped lookups."""
    await database.get_collection(USERS).create_index("email", unique=True)

    trips = database.get_collection(TRIPS)
    await trips.create_index([("user_id", 1), ("start_date", 1)])
    await trips.create_index([("user_id", 1), ("destination", 1)])

    await database.get_collection(NOTES).create_index([("trip_id", 1), ("created_at", 1)])
    await database.get_collection(USER_PREFERENCES).create_index("user_id", unique=True)

    plans = database.get_collection(GENERATED_PLANS)
    await plans.create_index([("trip_id", 1), ("created_at", -1)])
    await plans.create_index([("status", 1), ("updated_at", 1)])