import pytest

from apartment_console.shared.formatting import (
    format_date,
    format_price,
    format_short_date,
    format_vat,
    parse_number,
    parse_timestamp,
)


class TestFormatDate:
    def test_formats_iso_timestamp(self):
        """Should render DD.MM.YYYY, HH:MM."""
        assert format_date("2024-03-05T08:07:00") == "05.03.2024, 08:07"

    def test_empty(self):
        """Should report a missing date."""
        assert format_date(None) == "Not provided"
        assert format_date("") == "Not provided"

    def test_invalid(self):
        """Should report an unparseable date."""
        assert format_date("not a date") == "Invalid date"

    def test_short_date(self):
        """Should render the date part only."""
        assert format_short_date("2024-03-05T08:07:00") == "05.03.2024"
        assert format_short_date("garbage") == ""


class TestParsing:
    @pytest.mark.parametrize("value,expected", [
        ("12.5", 12.5),
        (7, 7.0),
        (None, 0.0),
        ("abc", 0.0),
        ("nan", 0.0),
        (True, 0.0),
    ])
    def test_parse_number(self, value, expected):
        """Should default non-numeric values to 0."""
        assert parse_number(value) == expected

    def test_parse_timestamp_orders_dates(self):
        """Should produce comparable timestamps; bad dates sort first."""
        earlier = parse_timestamp("2023-01-01T00:00:00+00:00")
        later = parse_timestamp("2024-01-01T00:00:00+00:00")
        assert earlier < later
        assert parse_timestamp("bad") == 0.0


class TestPriceAndVat:
    def test_format_price(self):
        """Should render euro amounts without trailing zeros."""
        assert format_price(12) == "€12"
        assert format_price("12.50") == "€12.5"
        assert format_price(None) is None

    def test_format_vat(self):
        """Should render VAT as a percentage."""
        assert format_vat(23) == "23%"
        assert format_vat("8.0") == "8%"
        assert format_vat("") is None
