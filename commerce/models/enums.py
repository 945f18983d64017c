# commerce/models/enums.py
from __future__ import annotations

from enum import StrEnum


class PaymentState(StrEnum):
    """
    支付状态：
    - PENDING  待支付
    - PAID     已支付（之后币种 / 账单地址 / 金额锁定）
    - FAILED   支付失败
    """

    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


class FulfillmentState(StrEnum):
    """
    履约状态：离开 PENDING 即视为已进入发货流程，收货地址锁定。
    """

    PENDING = "pending"
    SHIPPING = "shipping"
    SHIPPED = "shipped"


class OrderState(StrEnum):
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    FAILED = "failed"


class DataType(StrEnum):
    """订单元数据值类型：决定写入哪一列。"""

    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
