from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from database import get_db
from models.account import Role
from utils.approval import enforce_approval
from utils.guards import parse_object_id
from utils.jwt import decode_token
from utils.errors import InvalidRole, NotFound
from utils.mongo import store_errors
from utils.roles import resolve_role, resolve_store, is_active_account

security = HTTPBearer()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db=Depends(get_db),
):
    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise _unauthorized("Invalid or expired token")

    try:
        role = resolve_role(payload.get("role"))
        account_id = parse_object_id(payload.get("sub"), name="Account")
    except (InvalidRole, NotFound):
        raise _unauthorized("Invalid token payload")

    with store_errors("get_current_user"):
        account = await resolve_store(db, role).find_one({"_id": account_id})

    if not account or not is_active_account(account, role):
        raise _unauthorized("Account not found")

    # tokens outlive approval decisions; re-check on every request
    if role is Role.SELLER:
        enforce_approval(account)

    account["_role"] = role
    return account


def require_role(required_role: Role):
    async def checker(user=Depends(get_current_user)):
        if user["_role"] is not required_role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return user

    return checker
