from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient

from config.env import MONGO_URI, MONGODB_DB, MONGO_TIMEOUT_MS


def create_client() -> AsyncIOMotorClient:
    if not MONGO_URI:
        raise RuntimeError("MONGODB_URI not set")

    return AsyncIOMotorClient(
        MONGO_URI,
        serverSelectionTimeoutMS=MONGO_TIMEOUT_MS,
    )


def get_database(client: AsyncIOMotorClient):
    return client.get_default_database(default=MONGODB_DB)


def get_db(request: Request):
    return request.app.state.db
