from conftest import PASSWORD
from utils.hash import is_password_hash


def seller_payload(**overrides):
    payload = {
        "firstName": "Achieng",
        "lastName": "Onyango",
        "email": "Achieng@Example.com",
        "phone": "0712 345 678",
        "password": PASSWORD,
        "businessName": "Kisumu Upcycle",
    }
    payload.update(overrides)
    return payload


def buyer_payload(**overrides):
    payload = {
        "firstName": "Kamau",
        "lastName": "Mwangi",
        "email": "kamau@example.com",
        "phone": "+254 722 000 111",
        "password": PASSWORD,
    }
    payload.update(overrides)
    return payload


async def test_seller_registration_starts_pending(client, db):
    response = await client.post("/api/seller/register", json=seller_payload())

    assert response.status_code == 201
    assert response.json()["approvalStatus"] == "pending"

    stored = await db.sellers.find_one({"email": "achieng@example.com"})
    assert stored["status"] == stored["approvalStatus"] == "pending"
    assert stored["phone"] == "+254712345678"
    assert stored["storeName"] == "Kisumu Upcycle"
    assert stored["businessCountry"] == "Kenya"
    assert is_password_hash(stored["password"])


async def test_new_seller_waits_for_approval(client):
    await client.post("/api/seller/register", json=seller_payload())

    response = await client.post(
        "/api/user/login",
        json={"email": "achieng@example.com", "password": PASSWORD, "role": "seller"},
    )

    assert response.status_code == 403
    assert response.json()["error"] == "PendingApproval"


async def test_duplicate_seller_phone_is_refused(client):
    await client.post("/api/seller/register", json=seller_payload())

    response = await client.post(
        "/api/seller/register",
        json=seller_payload(email="other@example.com", phone="+254712345678"),
    )

    assert response.status_code == 409
    assert response.json()["success"] is False


async def test_buyer_registration_and_login(client, db):
    response = await client.post("/api/user/register", json=buyer_payload())

    assert response.status_code == 201
    assert response.json()["user"]["role"] == "user"

    stored = await db.users.find_one({"email": "kamau@example.com"})
    assert stored["status"] == "active"
    assert stored["type"] == "buyer"
    assert stored["phone"] == "+254722000111"

    login = await client.post(
        "/api/user/login",
        json={"email": "Kamau@example.com", "password": PASSWORD, "role": "user"},
    )
    assert login.status_code == 200


async def test_buyer_and_seller_stores_are_separate(client):
    await client.post("/api/user/register", json=buyer_payload(email="same@example.com"))

    response = await client.post(
        "/api/seller/register",
        json=seller_payload(email="same@example.com"),
    )

    assert response.status_code == 201


async def test_registration_validation(client):
    short = await client.post("/api/user/register", json=buyer_payload(password="abc"))
    bad_phone = await client.post("/api/user/register", json=buyer_payload(phone="12345"))
    no_business = await client.post("/api/seller/register", json=seller_payload(businessName=""))

    assert short.status_code == 422
    assert bad_phone.status_code == 422
    assert no_business.status_code == 422


async def test_me_returns_token_account(client):
    await client.post("/api/user/register", json=buyer_payload())
    login = await client.post(
        "/api/user/login",
        json={"email": "kamau@example.com", "password": PASSWORD, "role": "user"},
    )
    token = login.json()["access_token"]

    response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "kamau@example.com"


async def test_seller_token_stops_working_after_rejection(client, make_seller, admin_headers):
    seller = await make_seller()
    login = await client.post(
        "/api/user/login",
        json={"email": "seller@example.com", "password": PASSWORD, "role": "seller"},
    )
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    assert (await client.get("/api/seller/profile", headers=headers)).status_code == 200

    await client.post(f"/api/admin/sellers/{seller['_id']}/reject", headers=admin_headers)

    response = await client.get("/api/seller/profile", headers=headers)
    assert response.status_code == 403
    assert response.json()["error"] == "Rejected"


async def test_sellers_without_phone_do_not_store_null(client, db):
    first = await client.post(
        "/api/seller/register",
        json=seller_payload(email="one@example.com", phone=""),
    )
    second = await client.post(
        "/api/seller/register",
        json=seller_payload(email="two@example.com", phone=None),
    )

    assert first.status_code == 201
    assert second.status_code == 201

    async for stored in db.sellers.find({"email": {"$in": ["one@example.com", "two@example.com"]}}):
        assert "phone" not in stored
