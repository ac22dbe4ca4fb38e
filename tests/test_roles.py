import pytest

from models.account import Role
from utils.errors import InvalidRole, NotFound, WrongRoleStore
from utils.roles import (
    assert_store_role,
    find_account,
    is_active_account,
    resolve_role,
    resolve_store,
)


@pytest.mark.parametrize(
    "value, role",
    [("user", Role.BUYER), ("seller", Role.SELLER), ("admin", Role.ADMIN)],
)
def test_resolve_role(value, role):
    assert resolve_role(value) is role


@pytest.mark.parametrize("value", ["buyer", "User", " admin", "", None, 1, "superadmin"])
def test_resolve_role_is_exact(value):
    with pytest.raises(InvalidRole):
        resolve_role(value)


@pytest.mark.parametrize(
    "role, collection",
    [("user", "users"), (Role.SELLER, "sellers"), ("admin", "admins")],
)
async def test_resolve_store_targets_role_collection(db, role, collection):
    await resolve_store(db, role).insert_one({"email": "x@example.com"})

    assert await db[collection].count_documents({"email": "x@example.com"}) == 1


def test_resolve_store_rejects_unknown_role(db):
    with pytest.raises(InvalidRole):
        resolve_store(db, "moderator")


async def test_find_account_normalizes_email(db, make_user):
    await make_user(email="buyer@example.com")

    account = await find_account(db.users, "  Buyer@Example.com ")

    assert account["email"] == "buyer@example.com"


async def test_find_account_is_store_scoped(db, make_seller):
    await make_seller(email="seller@example.com")

    with pytest.raises(NotFound):
        await find_account(db.users, "seller@example.com")


def test_seller_marker_in_buyer_store_is_rejected():
    with pytest.raises(WrongRoleStore) as exc:
        assert_store_role({"role": "seller"}, Role.BUYER)

    assert "Seller Login" in exc.value.message


def test_type_marker_is_checked_too():
    with pytest.raises(WrongRoleStore):
        assert_store_role({"type": "seller"}, Role.BUYER)


def test_admin_marker_in_seller_store_is_rejected():
    with pytest.raises(WrongRoleStore):
        assert_store_role({"role": "admin"}, Role.SELLER)


@pytest.mark.parametrize(
    "account, role",
    [
        ({"type": "buyer"}, Role.BUYER),
        ({"role": "user"}, Role.BUYER),
        ({}, Role.SELLER),
        ({"role": "admin"}, Role.ADMIN),
        ({"role": "customer"}, Role.BUYER),
    ],
)
def test_matching_or_unknown_markers_pass(account, role):
    assert assert_store_role(account, role) is None


def test_soft_deleted_accounts_are_inactive():
    assert not is_active_account({"status": "deleted"}, Role.BUYER)
    assert not is_active_account({"deleted": True}, Role.ADMIN)
    assert is_active_account({"status": "active"}, Role.ADMIN)
    assert is_active_account({"status": "pending"}, Role.SELLER)
