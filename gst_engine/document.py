from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable

from .calculator import LineItemResult
from .money import ZERO, NumberLike, non_negative, to_float
from .rounding import round_currency


@dataclass(frozen=True)
class DocumentTotals:
    subtotal: Decimal
    total_cgst: Decimal
    total_sgst: Decimal
    total_tax: Decimal
    gross_total: Decimal
    discount: Decimal
    grand_total: Decimal
    line_count: int

    def to_dict(self) -> Dict[str, float | int]:
        return {
            "subtotal": to_float(self.subtotal),
            "total_cgst": to_float(self.total_cgst),
            "total_sgst": to_float(self.total_sgst),
            "total_tax": to_float(self.total_tax),
            "gross_total": to_float(self.gross_total),
            "discount": to_float(self.discount),
            "grand_total": to_float(self.grand_total),
            "line_count": self.line_count,
        }


def aggregate_document(
    lines: Iterable[LineItemResult],
    discount: NumberLike = 0,
    *,
    clamp_discount: bool = False,
) -> DocumentTotals:
    """Sum already-rounded line figures into document totals.

    The discount comes off the grand total only. By default a discount larger
    than the total yields a negative grand total, as on previously issued
    documents; ``clamp_discount`` floors it at zero instead.
    """

    off = round_currency(non_negative(discount, "discount"), "document")

    subtotal = ZERO
    total_cgst = ZERO
    total_sgst = ZERO
    total_tax = ZERO
    gross = ZERO
    total_amount = ZERO
    count = 0
    for line in lines:
        subtotal += line.taxable_value
        total_cgst += line.cgst_amount
        total_sgst += line.sgst_amount
        total_tax += line.total_tax
        gross += line.amount
        total_amount += line.total_amount
        count += 1

    grand_total = total_amount - off
    if clamp_discount and grand_total < 0:
        grand_total = ZERO

    return DocumentTotals(
        subtotal=subtotal,
        total_cgst=total_cgst,
        total_sgst=total_sgst,
        total_tax=total_tax,
        gross_total=round_currency(gross, "document"),
        discount=off,
        grand_total=grand_total,
        line_count=count,
    )
