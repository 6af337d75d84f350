from decimal import Decimal

import pytest

from gst_engine import BillingMode, InvalidInput, compute_amount_tax

INCLUSIVE = BillingMode.INCLUSIVE_GST
EXCLUSIVE = BillingMode.EXCLUSIVE_GST


def test_inclusive_backs_tax_out_of_mrp():
    result = compute_amount_tax(118, 18, INCLUSIVE)
    assert result.taxable_value == Decimal("100.00")
    assert result.total_tax == Decimal("18.00")
    assert result.cgst_amount == Decimal("9.00")
    assert result.sgst_amount == Decimal("9.00")
    assert result.total_amount == Decimal("118.00")


def test_exclusive_adds_tax_on_top():
    result = compute_amount_tax(100, 18, EXCLUSIVE)
    assert result.taxable_value == Decimal("100.00")
    assert result.total_tax == Decimal("18.00")
    assert result.cgst_amount == result.sgst_amount == Decimal("9.00")
    assert result.total_amount == Decimal("118.00")


@pytest.mark.parametrize("mode", [INCLUSIVE, EXCLUSIVE, BillingMode.NO_GST])
def test_zero_rate_is_untaxed_in_every_mode(mode):
    result = compute_amount_tax("250.50", 0, mode)
    assert result.taxable_value == Decimal("250.50")
    assert result.cgst_amount == Decimal("0")
    assert result.sgst_amount == Decimal("0")
    assert result.total_tax == Decimal("0")
    assert result.total_amount == Decimal("250.50")


def test_no_gst_mode_ignores_rate():
    result = compute_amount_tax(500, 18, BillingMode.NO_GST)
    assert result.taxable_value == Decimal("500.00")
    assert result.total_tax == Decimal("0")
    assert result.total_amount == Decimal("500.00")


def test_odd_cent_split_rounds_each_half_independently():
    result = compute_amount_tax("51.30", 5, EXCLUSIVE)
    # 2.565 of tax: each half is 1.2825
    assert result.cgst_amount == Decimal("1.28")
    assert result.sgst_amount == Decimal("1.28")
    assert result.total_tax == Decimal("2.57")
    assert result.total_amount == Decimal("53.87")


def test_inclusive_halves_stay_equal_when_tax_has_odd_cent():
    result = compute_amount_tax(100, 18, INCLUSIVE)
    assert result.taxable_value == Decimal("84.75")
    assert result.total_tax == Decimal("15.25")
    assert result.cgst_amount == Decimal("7.63")
    assert result.sgst_amount == Decimal("7.63")
    assert result.total_amount == Decimal("100.00")


def test_total_is_sum_of_rounded_parts():
    # Rounding 0.25 directly would give 0.25; the parts round to 0.13 each.
    result = compute_amount_tax("0.125", 100, EXCLUSIVE)
    assert result.taxable_value == Decimal("0.13")
    assert result.total_tax == Decimal("0.13")
    assert result.total_amount == Decimal("0.26")


def test_string_and_float_inputs_match_decimal_inputs():
    from_str = compute_amount_tax("1499.99", "28", EXCLUSIVE)
    from_float = compute_amount_tax(1499.99, 28.0, EXCLUSIVE)
    from_decimal = compute_amount_tax(Decimal("1499.99"), Decimal("28"), EXCLUSIVE)
    assert from_str == from_float == from_decimal
    assert from_str.total_tax == Decimal("420.00")


def test_missing_billing_mode_defaults_to_inclusive():
    assert compute_amount_tax(118, 18, None) == compute_amount_tax(118, 18, INCLUSIVE)
    assert compute_amount_tax(118, 18, "something_else") == compute_amount_tax(118, 18, INCLUSIVE)


def test_billing_mode_strings_are_accepted():
    assert compute_amount_tax(100, 18, "exclusive") == compute_amount_tax(100, 18, EXCLUSIVE)
    assert compute_amount_tax(100, 18, "EXCLUSIVE_GST") == compute_amount_tax(100, 18, EXCLUSIVE)


@pytest.mark.parametrize(
    "amount, rate, field",
    [
        (-10, 18, "amount"),
        (100, -5, "tax_rate_percent"),
    ],
)
def test_negative_inputs_rejected(amount, rate, field):
    with pytest.raises(InvalidInput) as exc_info:
        compute_amount_tax(amount, rate, EXCLUSIVE)
    assert exc_info.value.field == field


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), "abc", "", True, None, [100]])
def test_non_numeric_amount_rejected(bad):
    with pytest.raises(InvalidInput):
        compute_amount_tax(bad, 18, EXCLUSIVE)


def test_to_dict_renders_floats():
    assert compute_amount_tax(100, 18, EXCLUSIVE).to_dict() == {
        "taxable_value": 100.0,
        "cgst_amount": 9.0,
        "sgst_amount": 9.0,
        "total_tax": 18.0,
        "total_amount": 118.0,
    }


@pytest.mark.parametrize("amount", [Decimal("1e27"), "5e30", 1e28])
def test_amount_too_large_to_round_rejected(amount):
    with pytest.raises(InvalidInput):
        compute_amount_tax(amount, 18, EXCLUSIVE)


@pytest.mark.parametrize("bad", [float("nan"), "abc", ""])
def test_non_numeric_rate_reports_field(bad):
    with pytest.raises(InvalidInput) as exc_info:
        compute_amount_tax(100, bad, EXCLUSIVE)
    assert exc_info.value.field == "tax_rate_percent"


def test_non_numeric_amount_reports_field():
    with pytest.raises(InvalidInput) as exc_info:
        compute_amount_tax(float("inf"), 18, EXCLUSIVE)
    assert exc_info.value.field == "amount"
