from fastapi import APIRouter, BackgroundTasks, Depends
from datetime import datetime
import logging

from pymongo.errors import DuplicateKeyError

from database import get_db
from models.account import BuyerCreate, LoginRequest, Role
from utils.errors import DuplicateAccount
from utils.hash import hash_password
from utils.jwt import create_access_token
from utils.login_service import authenticate, rehash_legacy_password
from utils.mongo import store_errors
from utils.security import get_current_user
from utils.serializers import serialize_account

router = APIRouter(tags=["Auth"])
logger = logging.getLogger(__name__)

# ======================
# Helpers
# ======================

async def insert_unique_account(store, account: dict):
    """
    Insert an account, keeping email / phone unique within the store.
    """
    query = [{"email": account["email"]}]
    if account.get("phone"):
        query.append({"phone": account["phone"]})

    with store_errors("insert_account"):
        existing = await store.find_one({"$or": query}, {"_id": 1})
        if existing:
            raise DuplicateAccount()

        try:
            result = await store.insert_one(account)
        except DuplicateKeyError:
            # lost a race against a concurrent registration
            raise DuplicateAccount()

    return result.inserted_id

# ======================
# Unified login
# ======================

@router.post("/user/login")
async def login(
    data: LoginRequest,
    background_tasks: BackgroundTasks,
    db=Depends(get_db),
):
    result = await authenticate(db, data.email, data.password, data.role)

    if result.rehash_needed:
        background_tasks.add_task(
            rehash_legacy_password,
            result.store,
            result.account["_id"],
            data.password,
        )

    label = "User" if result.role is Role.BUYER else result.role.value.capitalize()

    return {
        "success": True,
        "message": f"{label} login successful",
        "user": serialize_account(result.account, result.role),
        "access_token": create_access_token(result.account, result.role),
        "token_type": "bearer",
    }

# ======================
# Buyer registration
# ======================

@router.post("/user/register", status_code=201)
async def register_user(data: BuyerCreate, db=Depends(get_db)):
    now = datetime.utcnow()
    email = data.email.lower()

    user = {
        "firstName": data.firstName,
        "lastName": data.lastName,
        "email": email,
        "phone": data.phone,
        "password": hash_password(data.password),
        "streetAddress": data.streetAddress,
        "city": data.city,
        "state": data.state,
        "postalCode": data.postalCode,
        "country": data.country,
        "preferences": data.preferences or {
            "categories": [],
            "priceRange": None,
            "brands": [],
            "notifications": True,
        },
        "notifications": data.notifications,
        "dateOfBirth": data.dateOfBirth,
        "gender": data.gender,
        "type": "buyer",
        "status": "active",
        "createdAt": now,
        "updatedAt": now,
        "lastLogin": None,
    }

    user_id = await insert_unique_account(db.users, user)

    logger.info("USER_REGISTERED email=%s id=%s", email, user_id)

    return {
        "success": True,
        "message": "Account created successfully",
        "user": serialize_account({**user, "_id": user_id}, Role.BUYER),
    }

# ======================
# Current account
# ======================

@router.get("/auth/me")
async def me(user=Depends(get_current_user)):
    return {
        "success": True,
        "user": serialize_account(user, user["_role"]),
    }
