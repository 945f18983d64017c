# tests/factories.py
"""
固定测试世界：

- TEST_USER（i-am-batman）：一个地址，两张订单
- OTHER_USER（joker）：一个地址，一张订单
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from commerce.models.address import Address
from commerce.models.line_item import LineItem
from commerce.models.order import Order
from commerce.models.user import User

TEST_USER_ID = "i-am-batman"
TEST_USER_EMAIL = "bruce@wayneindustries.com"
TEST_ADDRESS_ID = "first-address"

OTHER_USER_ID = "joker"
OTHER_USER_EMAIL = "joker@dc.com"
OTHER_ADDRESS_ID = "joker-address"

FIRST_ORDER_ID = "first-order"
SECOND_ORDER_ID = "second-order"
THIRD_ORDER_ID = "third-order"

ADMIN_ID = "admin-yo"
ADMIN_EMAIL = "admin@wayneindustries.com"


def address_payload(**overrides) -> dict:
    data = {
        "name": "Bruce Wayne",
        "company": "Wayne Industries",
        "address1": "123 Cave Street",
        "address2": "",
        "city": "Gotham",
        "country": "dcland",
        "state": "NJ",
        "zip": "324234",
    }
    data.update(overrides)
    return data


def make_address(address_id: str, user_id: str, **overrides) -> Address:
    return Address(id=address_id, user_id=user_id, **address_payload(**overrides))


def make_order(order_id: str, user_id: str, email: str, address_id: str, *, currency: str = "USD") -> Order:
    order = Order(
        id=order_id,
        user_id=user_id,
        session_id=f"session-{order_id}",
        email=email,
        currency=currency,
        billing_address_id=address_id,
        shipping_address_id=address_id,
    )
    order.line_items = [
        LineItem(sku="123-i-can-count", title="batwing", path="/vehicles/batwing", price=10000, quantity=1, vat=0),
        LineItem(sku="456-i-can-count", title="tumbler", path="/vehicles/tumbler", price=2500, quantity=2, vat=0),
    ]
    order.sub_total = 15000
    order.total = 15000
    return order


async def seed_world(session: AsyncSession) -> None:
    session.add_all(
        [
            User(id=TEST_USER_ID, email=TEST_USER_EMAIL),
            User(id=OTHER_USER_ID, email=OTHER_USER_EMAIL),
        ]
    )
    await session.flush()

    session.add_all(
        [
            make_address(TEST_ADDRESS_ID, TEST_USER_ID),
            make_address(OTHER_ADDRESS_ID, OTHER_USER_ID, name="Jack Napier", address1="1 Ace Chemicals"),
        ]
    )
    await session.flush()

    session.add_all(
        [
            make_order(FIRST_ORDER_ID, TEST_USER_ID, TEST_USER_EMAIL, TEST_ADDRESS_ID),
            make_order(SECOND_ORDER_ID, TEST_USER_ID, TEST_USER_EMAIL, TEST_ADDRESS_ID, currency="EUR"),
            make_order(THIRD_ORDER_ID, OTHER_USER_ID, OTHER_USER_EMAIL, OTHER_ADDRESS_ID),
        ]
    )
    await session.commit()
