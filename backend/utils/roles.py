from models.account import Role, ROLE_STORES, ROLE_MARKERS
from utils.errors import InvalidRole, NotFound, WrongRoleStore
from utils.mongo import store_errors
from utils.validators import normalize_email

# -------------------------------
# Role -> store
# -------------------------------

def resolve_role(value) -> Role:
    if isinstance(value, Role):
        return value
    # exact match only: "User", " user" and friends are rejected
    if not isinstance(value, str):
        raise InvalidRole()
    try:
        return Role(value)
    except ValueError:
        raise InvalidRole()


def resolve_store(db, role):
    role = resolve_role(role)
    return db[ROLE_STORES[role]]


# -------------------------------
# Account lookup
# -------------------------------

def is_active_account(account: dict, role: Role) -> bool:
    """
    Buyers and admins carry a soft-delete status; sellers are gated
    by the approval fields instead.
    """
    if account.get("deleted"):
        return False
    if role is Role.SELLER:
        return True
    status = account.get("status")
    return status is None or status == "active"


async def find_account(store, email: str) -> dict:
    email = normalize_email(email)
    if not email:
        raise NotFound()

    with store_errors("find_account"):
        account = await store.find_one({"email": email})

    if not account:
        raise NotFound()
    return account


# -------------------------------
# Cross-role guard
# -------------------------------

def marker_role(account: dict):
    for field in ("role", "type"):
        value = account.get(field)
        if isinstance(value, str) and value.strip().lower() in ROLE_MARKERS:
            return ROLE_MARKERS[value.strip().lower()]
    return None


def assert_store_role(account: dict, role: Role) -> None:
    """
    A record's own role/type marker must not name another role than
    the store it was loaded from. Unknown markers are ignored.
    """
    marked = marker_role(account)
    if marked is None or marked is role:
        return

    if marked is Role.SELLER:
        raise WrongRoleStore(
            "This account is registered as a seller. Please use Seller Login instead."
        )
    if marked is Role.ADMIN:
        raise WrongRoleStore(
            "This account is registered as an admin. Please use Admin Login instead."
        )
    raise WrongRoleStore(
        "This account is registered as a user. Please use User Login instead."
    )
