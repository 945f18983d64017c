# commerce/services/order_data.py
"""
订单元数据（key → 值）的类型收口：

- 仅接受 string / number / bool，其余（数组、对象、null）一律 400
- 先整体校验，再写库：任何一个值不合法，整批都不落
- 同 key 覆盖写入（upsert），值落到对应类型列
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from commerce.api.errors import BadRequestError
from commerce.models.enums import DataType
from commerce.models.order import Order
from commerce.models.order_data import OrderData


@dataclass(frozen=True)
class StringValue:
    value: str
    type = DataType.STRING


@dataclass(frozen=True)
class NumberValue:
    value: float
    type = DataType.NUMBER


@dataclass(frozen=True)
class BoolValue:
    value: bool
    type = DataType.BOOL


DataValue = Union[StringValue, NumberValue, BoolValue]


def parse_data_value(key: str, raw: Any) -> DataValue:
    # bool 是 int 的子类，必须先判
    if isinstance(raw, bool):
        return BoolValue(raw)
    if isinstance(raw, (int, float)):
        try:
            f = float(raw)
        except OverflowError:
            f = math.inf
        # 落库列为双精度，inf / nan 无法原样回读
        if not math.isfinite(f):
            raise BadRequestError(f"Data value for {key!r} must be a finite number")
        return NumberValue(f)
    if isinstance(raw, str):
        return StringValue(raw)
    raise BadRequestError(f"Data value for {key!r} must be a string, number or boolean")


def parse_data_map(raw: Mapping[str, Any]) -> Dict[str, DataValue]:
    out: Dict[str, DataValue] = {}
    for key, value in raw.items():
        k = str(key).strip()
        if not k:
            raise BadRequestError("Data keys must not be empty")
        out[k] = parse_data_value(k, value)
    return out


def _fill_row(row: OrderData, value: DataValue) -> None:
    row.type = value.type
    row.string_value = value.value if isinstance(value, StringValue) else None
    row.numeric_value = value.value if isinstance(value, NumberValue) else None
    row.bool_value = value.value if isinstance(value, BoolValue) else None


async def apply_data(session: AsyncSession, order: Order, values: Mapping[str, DataValue]) -> List[OrderData]:
    """按 key upsert；新行挂到 order.data 上。调用方负责事务边界。"""
    if not values:
        return []

    existing = (
        (
            await session.execute(
                select(OrderData).where(
                    OrderData.order_id == order.id,
                    OrderData.key.in_(list(values.keys())),
                )
            )
        )
        .scalars()
        .all()
    )
    by_key = {row.key: row for row in existing}

    rows: List[OrderData] = []
    for key, value in values.items():
        row = by_key.get(key)
        if row is None:
            row = OrderData(key=key)
            order.data.append(row)
        _fill_row(row, value)
        rows.append(row)
    return rows


def data_as_dict(rows: Iterable[OrderData]) -> Dict[str, Any]:
    return {row.key: row.value for row in rows}
