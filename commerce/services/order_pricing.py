# commerce/services/order_pricing.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from commerce.core.config import AppSettings
from commerce.models.line_item import LineItem

_ONE = Decimal("1")
_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class Totals:
    sub_total: int
    taxes: int
    shipping: int
    total: int


def _line_tax(price: int, quantity: int, vat: int) -> int:
    amount = Decimal(price) * Decimal(quantity) * Decimal(vat) / _HUNDRED
    return int(amount.quantize(_ONE, rounding=ROUND_HALF_UP))


def calculate(line_items: Iterable[LineItem], settings: AppSettings) -> Totals:
    """
    金额单位为分：
      sub_total = Σ price * quantity
      taxes     = Σ round_half_up(price * quantity * vat / 100)
      shipping  = 有行项目时取 SHIPPING_FLAT_CENTS
      total     = sub_total + taxes + shipping
    """
    items = list(line_items)
    sub_total = sum(int(li.price) * int(li.quantity) for li in items)
    taxes = sum(_line_tax(int(li.price), int(li.quantity), int(li.vat)) for li in items)
    shipping = int(settings.SHIPPING_FLAT_CENTS) if items else 0
    return Totals(sub_total=sub_total, taxes=taxes, shipping=shipping, total=sub_total + taxes + shipping)
