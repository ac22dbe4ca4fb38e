import os

os.environ["JWT_SECRET"] = "test-secret"
os.environ["ADMIN_API_KEY"] = "test-admin-key"
os.environ["BCRYPT_ROUNDS"] = "4"

from datetime import datetime

import httpx
import pytest
from mongomock_motor import AsyncMongoMockClient

from database import get_db
from main import app
from models.account import Role
from utils.hash import hash_password
from utils.jwt import create_access_token

PASSWORD = "secret123"


@pytest.fixture
def db():
    return AsyncMongoMockClient()["ecoloop_test"]


@pytest.fixture
async def client(db):
    app.dependency_overrides[get_db] = lambda: db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_seller(db):
    async def _make(
        email="seller@example.com",
        status="approved",
        approval_status="approved",
        password=None,
        **extra,
    ):
        seller = {
            "name": "Wanjiku Njeri",
            "firstName": "Wanjiku",
            "lastName": "Njeri",
            "email": email,
            "password": password if password is not None else hash_password(PASSWORD),
            "businessName": "Eco Threads",
            "storeName": "Eco Threads",
            "createdAt": datetime.utcnow(),
            **extra,
        }
        if status is not None:
            seller["status"] = status
        if approval_status is not None:
            seller["approvalStatus"] = approval_status

        result = await db.sellers.insert_one(seller)
        seller["_id"] = result.inserted_id
        return seller

    return _make


@pytest.fixture
def make_user(db):
    async def _make(email="buyer@example.com", password=None, **extra):
        user = {
            "firstName": "Otieno",
            "lastName": "Odhiambo",
            "email": email,
            "password": password if password is not None else hash_password(PASSWORD),
            "type": "buyer",
            "status": "active",
            **extra,
        }
        result = await db.users.insert_one(user)
        user["_id"] = result.inserted_id
        return user

    return _make


@pytest.fixture
async def admin(db):
    account = {
        "email": "admin@ecoloop.co.ke",
        "password": hash_password(PASSWORD),
        "name": "Administrator",
        "role": "admin",
        "status": "active",
    }
    result = await db.admins.insert_one(account)
    account["_id"] = result.inserted_id
    return account


@pytest.fixture
def admin_headers(admin):
    token = create_access_token(admin, Role.ADMIN)
    return {"Authorization": f"Bearer {token}"}
