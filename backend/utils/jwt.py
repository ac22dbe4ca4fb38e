from datetime import datetime, timedelta
from jose import jwt

from config.env import (
    JWT_SECRET,
    JWT_ALGORITHM,
    BUYER_ACCESS_TOKEN_MINUTES,
    SELLER_ACCESS_TOKEN_MINUTES,
    ADMIN_ACCESS_TOKEN_MINUTES,
)
from models.account import Role

TOKEN_MINUTES = {
    Role.BUYER: BUYER_ACCESS_TOKEN_MINUTES,
    Role.SELLER: SELLER_ACCESS_TOKEN_MINUTES,
    Role.ADMIN: ADMIN_ACCESS_TOKEN_MINUTES,
}

def _require_jwt_secret() -> str:
    secret = (JWT_SECRET or "").strip()
    if not secret:
        raise RuntimeError("JWT_SECRET is not configured")
    return secret

def create_access_token(account: dict, role: Role) -> str:
    now = datetime.utcnow()
    payload = {
        "sub": str(account["_id"]),
        "email": account.get("email"),
        "role": role.value,
        "iat": now,
        "exp": now + timedelta(minutes=TOKEN_MINUTES[role]),
    }
    return jwt.encode(payload, _require_jwt_secret(), algorithm=JWT_ALGORITHM)

def decode_token(token: str) -> dict:
    return jwt.decode(token, _require_jwt_secret(), algorithms=[JWT_ALGORITHM])
