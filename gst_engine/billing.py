from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any, Union

from .errors import UnknownBillingMode
from .money import non_negative


class BillingMode(str, Enum):
    """How a document's prices relate to GST."""

    INCLUSIVE_GST = "inclusive_gst"
    EXCLUSIVE_GST = "exclusive_gst"
    NO_GST = "no_gst"


# Missing or unrecognised tenant settings have always been billed as tax-inclusive.
DEFAULT_BILLING_MODE = BillingMode.INCLUSIVE_GST

_ALIASES = {
    "inclusive": BillingMode.INCLUSIVE_GST,
    "inclusive_gst": BillingMode.INCLUSIVE_GST,
    "exclusive": BillingMode.EXCLUSIVE_GST,
    "exclusive_gst": BillingMode.EXCLUSIVE_GST,
    "no_gst": BillingMode.NO_GST,
}

BillingModeLike = Union[BillingMode, str, None]


def normalize_billing_mode(value: BillingModeLike, *, strict: bool = False) -> BillingMode:
    """Resolve a billing-mode setting to a :class:`BillingMode`.

    Accepts enum members and the strings ``inclusive``/``inclusive_gst``,
    ``exclusive``/``exclusive_gst`` and ``no_gst`` in any case. Anything else
    falls back to :data:`DEFAULT_BILLING_MODE` unless ``strict`` is set, in
    which case :class:`UnknownBillingMode` is raised.
    """

    if isinstance(value, BillingMode):
        return value
    if isinstance(value, str):
        mode = _ALIASES.get(value.strip().lower())
        if mode is not None:
            return mode
    if strict:
        raise UnknownBillingMode(value)
    return DEFAULT_BILLING_MODE


def combined_rate(cgst_percent: Any = None, sgst_percent: Any = None) -> Decimal:
    """Sum the persisted CGST and SGST percentages into one GST rate."""

    cgst = non_negative(cgst_percent if cgst_percent is not None else 0, "cgst_percent")
    sgst = non_negative(sgst_percent if sgst_percent is not None else 0, "sgst_percent")
    return cgst + sgst
