from bson import ObjectId
from datetime import datetime

from models.account import Role


def serialize_object_id(value):
    return str(value) if isinstance(value, ObjectId) else value


def _isoformat(value):
    return value.isoformat() if isinstance(value, datetime) else None


def display_name(account: dict, role: Role) -> str:
    if account.get("name"):
        return account["name"]

    full = " ".join(
        part for part in (account.get("firstName"), account.get("lastName")) if part
    )
    if full:
        return full

    return "Administrator" if role is Role.ADMIN else account.get("email", "")


def serialize_account(account: dict, role: Role) -> dict:
    user = {
        "id": serialize_object_id(account["_id"]),
        "email": account.get("email"),
        "name": display_name(account, role),
        "firstName": account.get("firstName"),
        "lastName": account.get("lastName"),
        "role": role.value,
        "lastLogin": _isoformat(account.get("lastLogin")),
    }

    if role is Role.SELLER:
        user.update({
            "sellerId": serialize_object_id(account["_id"]),
            "businessName": account.get("businessName"),
            "storeName": account.get("storeName"),
            "sellerStatus": account.get("status"),
            "approvalStatus": account.get("approvalStatus"),
        })

    return user
