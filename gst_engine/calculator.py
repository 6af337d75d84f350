"""GST computation for a single amount or a priced line item."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping

from .billing import BillingMode, BillingModeLike, combined_rate, normalize_billing_mode
from .errors import InvalidInput
from .money import HUNDRED, ZERO, NumberLike, non_negative, to_float
from .rounding import round_currency

TWO = Decimal(2)


@dataclass(frozen=True)
class TaxBreakdown:
    taxable_value: Decimal
    cgst_amount: Decimal
    sgst_amount: Decimal
    total_tax: Decimal
    total_amount: Decimal

    def to_dict(self) -> Dict[str, float]:
        return {
            "taxable_value": to_float(self.taxable_value),
            "cgst_amount": to_float(self.cgst_amount),
            "sgst_amount": to_float(self.sgst_amount),
            "total_tax": to_float(self.total_tax),
            "total_amount": to_float(self.total_amount),
        }


@dataclass(frozen=True)
class LineItemResult(TaxBreakdown):
    quantity: Decimal
    unit_price: Decimal
    amount: Decimal

    def to_dict(self) -> Dict[str, float]:
        data = super().to_dict()
        data.update(
            {
                "quantity": float(self.quantity),
                "unit_price": float(self.unit_price),
            }
        )
        return data


def _untaxed(amount: Decimal) -> TaxBreakdown:
    taxable = round_currency(amount, "taxable")
    return TaxBreakdown(
        taxable_value=taxable,
        cgst_amount=ZERO,
        sgst_amount=ZERO,
        total_tax=ZERO,
        total_amount=taxable,
    )


def compute_amount_tax(
    amount: NumberLike,
    tax_rate_percent: NumberLike,
    billing_mode: BillingModeLike,
) -> TaxBreakdown:
    """Split ``amount`` into taxable value, CGST/SGST and total.

    In inclusive mode ``amount`` already contains the tax and the taxable value
    is backed out of it; in exclusive mode tax is added on top. A zero rate
    (or ``no_gst`` billing) leaves the amount untaxed whatever the mode.

    Each half of the tax is rounded from the unrounded ``tax / 2`` and the
    total amount is the sum of the rounded taxable value and rounded tax, so
    ``cgst + sgst`` may differ from ``total_tax`` by a cent.
    """

    base = non_negative(amount, "amount")
    rate = non_negative(tax_rate_percent, "tax_rate_percent")
    mode = normalize_billing_mode(billing_mode)

    if rate == 0 or mode is BillingMode.NO_GST:
        return _untaxed(base)

    if mode is BillingMode.INCLUSIVE_GST:
        taxable = base * HUNDRED / (HUNDRED + rate)
        tax = base - taxable
    else:
        taxable = base
        tax = base * rate / HUNDRED

    half = tax / TWO
    taxable_value = round_currency(taxable, "taxable")
    total_tax = round_currency(tax, "tax")
    return TaxBreakdown(
        taxable_value=taxable_value,
        cgst_amount=round_currency(half, "component"),
        sgst_amount=round_currency(half, "component"),
        total_tax=total_tax,
        total_amount=taxable_value + total_tax,
    )


def compute_line_item_tax(
    unit_price: NumberLike,
    quantity: NumberLike,
    tax_rate_percent: NumberLike,
    billing_mode: BillingModeLike,
) -> LineItemResult:
    """Multiply price by quantity and compute the GST breakdown for the line."""

    price = non_negative(unit_price, "unit_price")
    qty = non_negative(quantity, "quantity")
    amount = price * qty
    breakdown = compute_amount_tax(amount, tax_rate_percent, billing_mode)
    return LineItemResult(
        taxable_value=breakdown.taxable_value,
        cgst_amount=breakdown.cgst_amount,
        sgst_amount=breakdown.sgst_amount,
        total_tax=breakdown.total_tax,
        total_amount=breakdown.total_amount,
        quantity=qty,
        unit_price=price,
        amount=amount,
    )


def _required(item: Mapping[str, Any], field: str, index: int) -> Any:
    value = item.get(field)
    if value is None:
        raise InvalidInput(f"line {index} is missing {field}", field=field)
    return value


def _line_rate(item: Mapping[str, Any]) -> Any:
    rate = item.get("tax_rate_percent")
    if rate is not None:
        return rate
    return combined_rate(item.get("cgst_percent"), item.get("sgst_percent"))


def compute_line_items(items: Iterable[Mapping[str, Any]], billing_mode: BillingModeLike) -> List[LineItemResult]:
    """Compute every line of a document in input order.

    Lines carry ``unit_price`` and ``quantity`` plus either a combined
    ``tax_rate_percent`` or the persisted ``cgst_percent``/``sgst_percent`` pair.
    A line without a rate is untaxed; a line without a price or quantity is
    rejected.
    """

    mode = normalize_billing_mode(billing_mode)
    return [
        compute_line_item_tax(
            _required(item, "unit_price", index),
            _required(item, "quantity", index),
            _line_rate(item),
            mode,
        )
        for index, item in enumerate(items)
    ]
