"""Display and parsing helpers for dates, prices and VAT rates."""

import math
from datetime import datetime
from typing import Any, Optional

from dateutil import parser as date_parser


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an API timestamp, returning None when it cannot be parsed."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return date_parser.parse(str(value))
    except (ValueError, OverflowError, TypeError):
        return None


def parse_timestamp(value: Any) -> float:
    """Timestamp used for sorting; unparseable dates sort as 0."""
    parsed = parse_datetime(value)
    if parsed is None:
        return 0.0
    try:
        return parsed.timestamp()
    except (OverflowError, OSError, ValueError):
        return 0.0


def parse_number(value: Any) -> float:
    """Parse a price or VAT value, defaulting to 0 when it is not numeric."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(str(value).strip())
    except ValueError:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def format_date(value: Any) -> str:
    """Format a timestamp as DD.MM.YYYY, HH:MM."""
    if not value:
        return "Not provided"
    parsed = parse_datetime(value)
    if parsed is None:
        return "Invalid date"
    return parsed.strftime("%d.%m.%Y, %H:%M")


def format_short_date(value: Any) -> str:
    """Date-only form used by list searches; empty string when unparseable."""
    parsed = parse_datetime(value)
    if parsed is None:
        return ""
    return parsed.strftime("%d.%m.%Y")


def _format_decimal(number: float) -> str:
    if number % 1 == 0:
        return str(int(number))
    return f"{number:.2f}".rstrip("0").rstrip(".")


def format_price(value: Any) -> Optional[str]:
    """
    Format a cleaning price in euro.

    Empty values give None; non-numeric values are returned unchanged.
    """
    if not value:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return str(value)
    if math.isnan(number):
        return str(value)
    return f"€{_format_decimal(number)}"


def format_vat(value: Any) -> Optional[str]:
    """Format a VAT rate as a percentage."""
    if not value:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return str(value)
    if math.isnan(number):
        return str(value)
    return f"{_format_decimal(number)}%"
