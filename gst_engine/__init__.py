"""GST calculation engine: taxable value, CGST/SGST split and document totals."""

from .billing import DEFAULT_BILLING_MODE, BillingMode, combined_rate, normalize_billing_mode
from .calculator import (
    LineItemResult,
    TaxBreakdown,
    compute_amount_tax,
    compute_line_item_tax,
    compute_line_items,
)
from .document import DocumentTotals, aggregate_document
from .errors import GstEngineError, InvalidInput, UnknownBillingMode

__all__ = [
    "DEFAULT_BILLING_MODE",
    "BillingMode",
    "DocumentTotals",
    "GstEngineError",
    "InvalidInput",
    "LineItemResult",
    "TaxBreakdown",
    "UnknownBillingMode",
    "aggregate_document",
    "combined_rate",
    "compute_amount_tax",
    "compute_line_item_tax",
    "compute_line_items",
    "normalize_billing_mode",
]
