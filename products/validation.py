#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ProductValidator - Walidacja pól formularza produktu

Każda funkcja waliduje jedno pole i:
- zwraca znormalizowaną wartość
- albo rzuca ValidationError z nazwą pola (komunikat pokazywany przy polu)

Reguły:
    name          3-100 znaków
    category_id   UUID istniejącej kategorii
    price         > 0 i <= 999999
    qty_per_box   "<liczba> PCS" / "<liczba> PIECES" (bez rozróżniania wielkości liter)
    product_code  dowolny tekst, zapisywany WIELKIMI literami
"""

import re
import uuid
from typing import Any, Dict

from config.settings import (
    PRODUCT_NAME_MIN_LENGTH,
    PRODUCT_NAME_MAX_LENGTH,
    PRODUCT_MAX_PRICE,
)
from core.exceptions import (
    FormValidationError,
    InvalidFieldValueError,
    RequiredFieldError,
    ValidationError,
)

QTY_PATTERN = re.compile(r'^\d+\s*(PCS|PIECES)$', re.IGNORECASE)


def validate_name(value: Any) -> str:
    name = str(value or "").strip()

    if len(name) < PRODUCT_NAME_MIN_LENGTH:
        raise InvalidFieldValueError(
            "name", value,
            f"Product name must be at least {PRODUCT_NAME_MIN_LENGTH} characters"
        )
    if len(name) > PRODUCT_NAME_MAX_LENGTH:
        raise InvalidFieldValueError(
            "name", value,
            f"Product name must be less than {PRODUCT_NAME_MAX_LENGTH} characters"
        )
    return name


def validate_category_id(value: Any) -> str:
    if not value:
        raise RequiredFieldError("category_id", message="Invalid category")
    try:
        return str(uuid.UUID(str(value)))
    except (ValueError, AttributeError, TypeError):
        raise InvalidFieldValueError("category_id", value, "Invalid category")


def validate_price(value: Any) -> float:
    """
    Cena z pola tekstowego lub liczby.

    Raises:
        InvalidFieldValueError: brak liczby, <= 0 albo > 999999
    """
    if isinstance(value, bool):
        raise InvalidFieldValueError("price", value, "Price must be a number")

    try:
        price = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        raise InvalidFieldValueError("price", value, "Price must be a number")

    if price != price:  # NaN
        raise InvalidFieldValueError("price", value, "Price must be a number")
    if price <= 0:
        raise InvalidFieldValueError("price", value, "Price must be greater than 0")
    if price > PRODUCT_MAX_PRICE:
        raise InvalidFieldValueError("price", value, "Price too high")
    return round(price, 2)


def validate_qty_per_box(value: Any) -> str:
    qty = (value or "").strip() if isinstance(value, str) else ""

    if not qty:
        raise RequiredFieldError("qty_per_box", message="Quantity is required")
    if not QTY_PATTERN.match(qty):
        raise InvalidFieldValueError(
            "qty_per_box", value, 'Format: "48 PCS" or "60 PIECES"'
        )
    return qty


def normalize_product_code(value: Any) -> str:
    return (value or "").strip().upper()


def validate_product_form(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Waliduj cały formularz produktu.

    Args:
        data: Surowe wartości z formularza (name, product_code, category_id,
              price, qty_per_box)

    Returns:
        Znormalizowane dane gotowe do zapisu

    Raises:
        FormValidationError: {pole: komunikat} dla wszystkich błędnych pól
    """
    validators = {
        "name": validate_name,
        "category_id": validate_category_id,
        "price": validate_price,
        "qty_per_box": validate_qty_per_box,
    }

    cleaned: Dict[str, Any] = {}
    errors: Dict[str, str] = {}

    for field, check in validators.items():
        try:
            cleaned[field] = check(data.get(field))
        except ValidationError as e:
            errors[e.field or field] = e.message

    if errors:
        raise FormValidationError(errors)

    cleaned["product_code"] = normalize_product_code(data.get("product_code"))
    return cleaned
