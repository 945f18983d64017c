# tests/api/test_users_api.py
#
# /users 与 /users/{id}/addresses：
# - 列表仅管理员
# - 单个用户 / 地址：本人或管理员；他人 401；不存在 404
from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from tests.factories import (
    OTHER_ADDRESS_ID,
    OTHER_USER_EMAIL,
    OTHER_USER_ID,
    TEST_ADDRESS_ID,
    TEST_USER_EMAIL,
    TEST_USER_ID,
    make_address,
)
from commerce.models.user import User

pytestmark = [pytest.mark.asyncio]


# ---------------- 用户列表 ----------------
async def test_user_list_as_admin(client, admin_headers):
    resp = await client.get("/users", headers=admin_headers)
    assert resp.status_code == 200, resp.text
    users = {u["id"]: u for u in resp.json()}
    assert set(users) == {TEST_USER_ID, OTHER_USER_ID}
    assert users[TEST_USER_ID]["email"] == TEST_USER_EMAIL
    assert users[TEST_USER_ID]["order_count"] == 2
    assert users[OTHER_USER_ID]["order_count"] == 1


async def test_user_list_filtered_by_email(client, admin_headers):
    resp = await client.get("/users", params={"email": OTHER_USER_EMAIL}, headers=admin_headers)
    assert resp.status_code == 200, resp.text
    assert [u["id"] for u in resp.json()] == [OTHER_USER_ID]


async def test_user_list_counts_users_without_orders(client, app, admin_headers):
    async with app.state.session_factory() as s:
        s.add(User(id="alfred", email="alfred@wayneindustries.com"))
        await s.commit()

    resp = await client.get("/users", params={"email": "alfred@wayneindustries.com"}, headers=admin_headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()[0]["order_count"] == 0


@pytest.mark.parametrize("subject", [TEST_USER_ID, "stranger"])
async def test_user_list_as_non_admin(client, auth, subject):
    resp = await client.get("/users", headers=auth(subject))
    assert resp.status_code == 401, resp.text


async def test_user_list_no_creds(client):
    resp = await client.get("/users")
    assert resp.status_code == 401, resp.text


# ---------------- 单个用户 ----------------
async def test_user_view_self(client, auth):
    resp = await client.get(f"/users/{TEST_USER_ID}", headers=auth(TEST_USER_ID, TEST_USER_EMAIL))
    assert resp.status_code == 200, resp.text
    u = resp.json()
    assert u["id"] == TEST_USER_ID
    assert u["email"] == TEST_USER_EMAIL
    assert u["order_count"] == 2


async def test_user_view_as_admin(client, admin_headers):
    resp = await client.get(f"/users/{OTHER_USER_ID}", headers=admin_headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()["id"] == OTHER_USER_ID
    created = datetime.fromisoformat(resp.json()["created_at"].replace("Z", "+00:00"))
    assert created.utcoffset() == timedelta(0)


async def test_user_view_as_stranger(client, auth):
    resp = await client.get(f"/users/{TEST_USER_ID}", headers=auth("stranger"))
    assert resp.status_code == 401, resp.text
    assert resp.json()["code"] == 401


async def test_user_view_missing_as_admin(client, admin_headers):
    resp = await client.get("/users/dne", headers=admin_headers)
    assert resp.status_code == 404, resp.text


async def test_user_view_missing_self(client, auth):
    # 已登录但尚未下过单的用户：本人访问得到 404 而不是 401
    resp = await client.get("/users/dne", headers=auth("dne"))
    assert resp.status_code == 404, resp.text


# ---------------- 地址 ----------------
async def test_address_list_as_admin(client, app, admin_headers):
    resp = await client.get(f"/users/{TEST_USER_ID}/addresses", headers=admin_headers)
    assert resp.status_code == 200, resp.text
    assert [a["id"] for a in resp.json()] == [TEST_ADDRESS_ID]

    async with app.state.session_factory() as s:
        s.add(make_address("second-address", TEST_USER_ID, name="Bruce Wayne Jr."))
        await s.commit()

    resp = await client.get(f"/users/{TEST_USER_ID}/addresses", headers=admin_headers)
    assert resp.status_code == 200, resp.text
    assert {a["id"] for a in resp.json()} == {TEST_ADDRESS_ID, "second-address"}


async def test_address_list_as_user(client, auth):
    resp = await client.get(f"/users/{TEST_USER_ID}/addresses", headers=auth(TEST_USER_ID))
    assert resp.status_code == 200, resp.text
    addrs = resp.json()
    assert len(addrs) == 1
    assert addrs[0]["user_id"] == TEST_USER_ID
    assert addrs[0]["city"] == "Gotham"


async def test_address_list_as_stranger(client, auth):
    resp = await client.get(f"/users/{TEST_USER_ID}/addresses", headers=auth("stranger"))
    assert resp.status_code == 401, resp.text


async def test_address_list_empty(client, app, auth):
    async with app.state.session_factory() as s:
        s.add(User(id="alfred", email="alfred@wayneindustries.com"))
        await s.commit()

    resp = await client.get("/users/alfred/addresses", headers=auth("alfred"))
    assert resp.status_code == 200, resp.text
    assert resp.json() == []


async def test_address_list_missing_user(client, admin_headers):
    resp = await client.get("/users/dne/addresses", headers=admin_headers)
    assert resp.status_code == 404, resp.text


async def test_address_list_no_creds(client):
    resp = await client.get(f"/users/{TEST_USER_ID}/addresses")
    assert resp.status_code == 401, resp.text


async def test_address_view(client, auth):
    resp = await client.get(
        f"/users/{TEST_USER_ID}/addresses/{TEST_ADDRESS_ID}",
        headers=auth(TEST_USER_ID),
    )
    assert resp.status_code == 200, resp.text
    a = resp.json()
    assert a["id"] == TEST_ADDRESS_ID
    assert a["name"] == "Bruce Wayne"
    assert a["zip"] == "324234"


async def test_address_view_of_other_user(client, admin_headers):
    # 地址存在但不属于路径中的用户
    resp = await client.get(
        f"/users/{TEST_USER_ID}/addresses/{OTHER_ADDRESS_ID}",
        headers=admin_headers,
    )
    assert resp.status_code == 404, resp.text


async def test_address_view_as_stranger(client, auth):
    resp = await client.get(
        f"/users/{TEST_USER_ID}/addresses/{TEST_ADDRESS_ID}",
        headers=auth("stranger"),
    )
    assert resp.status_code == 401, resp.text


async def test_address_view_missing(client, auth):
    resp = await client.get(f"/users/{TEST_USER_ID}/addresses/nope", headers=auth(TEST_USER_ID))
    assert resp.status_code == 404, resp.text
