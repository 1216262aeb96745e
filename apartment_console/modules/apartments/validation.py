"""
Apartment form validation.
"""

import math
from typing import Optional

from apartment_console.shared.exceptions import FormValidationError

from .models import ApartmentForm


def _as_number(value: object) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip().replace(",", "."))
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def validate_apartment_form(form: ApartmentForm) -> ApartmentForm:
    """
    Validate an apartment form and normalize its numbers.

    Returns:
        A copy of the form with price and VAT as floats

    Raises:
        FormValidationError: With one message per invalid field
    """
    errors: dict[str, str] = {}

    if not form.name.strip():
        errors["name"] = "Name is required"

    price = _as_number(form.price_for_clean)
    if price is None or price <= 0:
        errors["price_for_clean"] = "Cleaning price must be a number greater than 0"

    vat = _as_number(form.vat)
    if vat is None or vat < 0 or vat > 100:
        errors["vat"] = "VAT must be a number between 0 and 100"

    if errors:
        raise FormValidationError(errors)
    return form.model_copy(update={"price_for_clean": price, "vat": vat})
