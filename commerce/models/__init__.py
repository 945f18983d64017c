# commerce/models/__init__.py
"""
统一导出 ORM 模型。
"""

from commerce.models.address import Address
from commerce.models.enums import DataType, FulfillmentState, OrderState, PaymentState
from commerce.models.line_item import LineItem
from commerce.models.order import Order
from commerce.models.order_data import OrderData
from commerce.models.user import User

__all__ = [
    "Address",
    "DataType",
    "FulfillmentState",
    "LineItem",
    "Order",
    "OrderData",
    "OrderState",
    "PaymentState",
    "User",
]
