# loomdesk/services/challan_math.py
from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Union

from loomdesk.schemas.challan import ChallanTotals, ItemTotals, LineItem
from loomdesk.utils.money import ZERO, money2, qty4, to_decimal

ItemLike = Union[LineItem, Mapping[str, Any]]


def _non_negative(x: Any) -> Decimal:
    d = to_decimal(x)
    return d if d > 0 else ZERO


def compute_item_totals(ordered_quantity, weight_per_unit,
                        price_per_unit) -> ItemTotals:
    """
    Weight (4 dp) and amount (2 dp) for one challan line.
    Negative inputs are clamped to 0.
    """
    qty = _non_negative(ordered_quantity)
    weight = _non_negative(weight_per_unit)
    price = _non_negative(price_per_unit)

    return ItemTotals(
        calculated_weight=qty4(qty * weight),
        calculated_amount=money2(qty * price),
    )


def _as_line_item(item: ItemLike) -> LineItem:
    if isinstance(item, LineItem):
        return item
    return LineItem.model_validate(item)


def apply_item_totals(items: Iterable[ItemLike]) -> List[LineItem]:
    out: List[LineItem] = []
    for raw in items:
        item = _as_line_item(raw)
        calc = compute_item_totals(item.ordered_quantity,
                                   item.weight_per_unit,
                                   item.price_per_unit)
        out.append(
            item.model_copy(
                update={
                    "calculated_weight": calc.calculated_weight,
                    "calculated_amount": calc.calculated_amount,
                }))
    return out


def aggregate_totals(items: Iterable[ItemLike]) -> ChallanTotals:
    # round once after the fold, never per item
    total_meters = ZERO
    total_weight = ZERO
    subtotal = ZERO

    for raw in items or []:
        item = _as_line_item(raw)
        total_meters += _non_negative(item.ordered_quantity)
        total_weight += item.calculated_weight
        subtotal += item.calculated_amount

    return ChallanTotals(
        total_meters=money2(total_meters),
        total_weight=qty4(total_weight),
        subtotal_amount=money2(subtotal),
    )
