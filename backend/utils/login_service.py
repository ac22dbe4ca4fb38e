import logging
from dataclasses import dataclass
from datetime import datetime

from pymongo.errors import ConnectionFailure, ExecutionTimeout, PyMongoError

from models.account import Role
from utils.approval import enforce_approval
from utils.errors import AuthError, InvalidCredential, NotFound, StoreUnavailable
from utils.hash import hash_password, is_legacy_plaintext, verify_credential
from utils.mongo import store_errors
from utils.roles import (
    assert_store_role,
    find_account,
    is_active_account,
    resolve_role,
    resolve_store,
)
from utils.validators import normalize_email

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    account: dict
    role: Role
    store: object
    # caller decides whether to await or schedule the plaintext upgrade
    rehash_needed: bool = False


async def authenticate(db, email: str, password: str, role) -> LoginResult:
    """
    Role-scoped login.

    Order: role -> account lookup -> credential -> cross-role guard ->
    seller approval gate. Lookup misses and bad passwords both surface
    as InvalidCredential so the response cannot be used to probe for
    registered emails.
    """
    email = normalize_email(email)

    try:
        role = resolve_role(role)
        store = resolve_store(db, role)

        try:
            account = await find_account(store, email)
        except NotFound:
            raise InvalidCredential()

        if not is_active_account(account, role):
            raise InvalidCredential()

        check = verify_credential(password, account.get("password"))
        if not check.valid:
            raise InvalidCredential()

        assert_store_role(account, role)

        if role is Role.SELLER:
            enforce_approval(account)

    except StoreUnavailable:
        raise
    except AuthError as e:
        logger.info(
            "LOGIN_DENIED reason=%s role=%s email=%s",
            e.code,
            getattr(role, "value", role),
            email,
        )
        raise

    await touch_last_login(store, account)

    logger.info("LOGIN_OK role=%s email=%s legacy_password=%s", role.value, email, check.rehash_needed)

    return LoginResult(
        account=account,
        role=role,
        store=store,
        rehash_needed=check.rehash_needed,
    )


async def touch_last_login(store, account: dict) -> None:
    now = datetime.utcnow()
    try:
        await store.update_one(
            {"_id": account["_id"]},
            {"$set": {"lastLogin": now}},
        )
    except PyMongoError:
        # login already succeeded; a stale lastLogin is acceptable
        logger.warning("LAST_LOGIN_UPDATE_FAILED account=%s", account["_id"], exc_info=True)
        return
    account["lastLogin"] = now


async def rehash_legacy_password(store, account_id, password: str) -> bool:
    """
    Best-effort replacement of a legacy plaintext credential.
    Runs after the login response; never raises.
    """
    try:
        hashed = hash_password(password)
        await store.update_one(
            {"_id": account_id},
            {"$set": {
                "password": hashed,
                "passwordMigrated": True,
                "passwordMigratedAt": datetime.utcnow(),
                "passwordMigratedBy": "login",
            }},
        )
    except Exception:
        logger.exception("PASSWORD_REHASH_ERROR account=%s", account_id)
        return False

    logger.info("PASSWORD_REHASHED account=%s", account_id)
    return True


async def migrate_plaintext_passwords(db, role, admin_email: str) -> dict:
    """
    Hash every legacy plaintext password left in one account store.
    """
    role = resolve_role(role)
    store = resolve_store(db, role)

    checked = migrated = skipped = 0
    errors = []

    with store_errors("migrate_plaintext_passwords"):
        cursor = store.find(
            {"password": {"$exists": True}},
            {"email": 1, "password": 1},
        )

        async for account in cursor:
            checked += 1
            if not is_legacy_plaintext(account.get("password")):
                skipped += 1
                continue

            try:
                await store.update_one(
                    {"_id": account["_id"]},
                    {"$set": {
                        "password": hash_password(account["password"]),
                        "passwordMigrated": True,
                        "passwordMigratedAt": datetime.utcnow(),
                        "passwordMigratedBy": admin_email,
                    }},
                )
                migrated += 1
            except (ConnectionFailure, ExecutionTimeout):
                raise
            except (ValueError, PyMongoError) as e:
                logger.exception("PASSWORD_MIGRATION_ERROR account=%s", account["_id"])
                errors.append({"email": account.get("email"), "error": type(e).__name__})

    logger.info(
        "PASSWORD_MIGRATION role=%s checked=%s migrated=%s skipped=%s errors=%s",
        role.value,
        checked,
        migrated,
        skipped,
        len(errors),
    )

    return {
        "totalChecked": checked,
        "migrated": migrated,
        "skipped": skipped,
        "errors": len(errors),
        "errorDetails": errors,
    }
