from pymongo import MongoClient, ASCENDING

from ..utils.errors import translate_store_errors
from ..utils.logger import Log


class MongoDB:
    def __init__(self):
        self.client = None
        self.db = None

    def init_app(self, app, client=None):
        """
        Connect to MongoDB using MONGODB_URI.

        `client` lets callers hand in an already built driver-compatible client
        (tests pass a mongomock client). Every call made through the default
        client is bounded by MONGO_TIMEOUT_MS.
        """
        db_name = app.config.get("DB_NAME", "reride")

        if client is None:
            timeout_ms = app.config.get("MONGO_TIMEOUT_MS", 10000)
            client = MongoClient(
                app.config["MONGODB_URI"],
                serverSelectionTimeoutMS=timeout_ms,
                connectTimeoutMS=timeout_ms,
                socketTimeoutMS=timeout_ms,
                maxPoolSize=app.config.get("MONGO_MAX_POOL_SIZE", 10),
            )

        self.client = client
        self.db = self.client[db_name]

        Log.info(f"[db.py][init_app] MongoDB client ready for database '{db_name}'")

    def create_indexes(self):
        """Indexes used by the plan and payment request lookups."""
        self.db.users.create_index([("email", ASCENDING)], unique=True)
        self.db.users.create_index([("role", ASCENDING), ("pendingPlanUpgrade.status", ASCENDING)])
        self.db.users.create_index([("pendingPlanUpgrade.id", ASCENDING)], sparse=True)
        self.db.plan_overrides.create_index([("created_at", ASCENDING)])
        self.db.vehicles.create_index([("sellerEmail", ASCENDING), ("status", ASCENDING)])

    def get_collection(self, name):
        if self.db is None:
            raise RuntimeError("MongoDB not initialized")
        return self.db[name]

    @translate_store_errors
    def ping(self):
        return self.client.admin.command("ping")


# Export the instance
db = MongoDB()
