"""
Testy walidacji formularza produktu.
"""

import uuid

import pytest

from core.exceptions import FormValidationError, InvalidFieldValueError, RequiredFieldError
from products.validation import (
    normalize_product_code,
    validate_name,
    validate_price,
    validate_product_form,
    validate_qty_per_box,
)


def valid_form(**overrides):
    data = {
        "name": "ASHOKA MINI MUG",
        "product_code": "800a1ace",
        "category_id": str(uuid.uuid4()),
        "price": "620.00",
        "qty_per_box": "24 PCS",
    }
    data.update(overrides)
    return data


@pytest.mark.parametrize("qty", ["48 PCS", "60 pieces", "12 Pcs", "48PCS", "100   PIECES"])
def test_quantity_accepted(qty):
    assert validate_qty_per_box(qty) == qty.strip()


@pytest.mark.parametrize("qty", ["48", "PCS", "48 BOXES", "forty PCS", "48 PCS extra", "-4 PCS"])
def test_quantity_rejected(qty):
    with pytest.raises(InvalidFieldValueError) as exc:
        validate_qty_per_box(qty)
    assert exc.value.message == 'Format: "48 PCS" or "60 PIECES"'


def test_quantity_required():
    with pytest.raises(RequiredFieldError) as exc:
        validate_qty_per_box("   ")
    assert exc.value.message == "Quantity is required"


@pytest.mark.parametrize("value,expected", [
    ("620", 620.0),
    ("620.004", 620.0),
    (0.01, 0.01),
    (999999, 999999.0),
])
def test_price_accepted(value, expected):
    assert validate_price(value) == expected


@pytest.mark.parametrize("value,message", [
    ("0", "Price must be greater than 0"),
    (-5, "Price must be greater than 0"),
    ("1000000", "Price too high"),
    ("abc", "Price must be a number"),
    (None, "Price must be a number"),
    (True, "Price must be a number"),
    ("nan", "Price must be a number"),
])
def test_price_rejected(value, message):
    with pytest.raises(InvalidFieldValueError) as exc:
        validate_price(value)
    assert exc.value.message == message


def test_name_length_bounds():
    assert validate_name("  Mug  ") == "Mug"
    with pytest.raises(InvalidFieldValueError):
        validate_name("ab")
    with pytest.raises(InvalidFieldValueError):
        validate_name("x" * 101)


def test_product_code_is_uppercased():
    assert normalize_product_code(" 800a1ace ") == "800A1ACE"
    assert normalize_product_code(None) == ""


def test_form_returns_cleaned_values():
    cleaned = validate_product_form(valid_form())
    assert cleaned["name"] == "ASHOKA MINI MUG"
    assert cleaned["product_code"] == "800A1ACE"
    assert cleaned["price"] == 620.0
    assert cleaned["qty_per_box"] == "24 PCS"


def test_form_collects_all_field_errors():
    with pytest.raises(FormValidationError) as exc:
        validate_product_form(valid_form(name="x", category_id="not-a-uuid", price="0", qty_per_box="24"))

    errors = exc.value.errors
    assert set(errors) == {"name", "category_id", "price", "qty_per_box"}
    assert errors["category_id"] == "Invalid category"
