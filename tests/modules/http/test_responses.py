import httpx
import pytest

from apartment_console.modules.http.exceptions import (
    ApiError,
    ForbiddenError,
    ResourceNotFoundError,
    UnauthorizedError,
)
from apartment_console.modules.http.responses import (
    extract_error_message,
    extract_errors,
    raise_for_api_error,
    read_json,
)


class TestReadJson:
    def test_json_body(self):
        """Should decode JSON bodies."""
        assert read_json(httpx.Response(200, json={"a": 1})) == {"a": 1}

    def test_empty_or_invalid_body(self):
        """Should return None for empty and non-JSON bodies."""
        assert read_json(httpx.Response(204)) is None
        assert read_json(httpx.Response(200, text="<html>")) is None


class TestErrorMessages:
    def test_errors_list(self):
        """Should join a list of validation errors."""
        data = {"errors": ["Name is required", "VAT is invalid"]}
        assert extract_errors(data) == ["Name is required", "VAT is invalid"]
        assert extract_error_message(data, "x") == "Name is required, VAT is invalid"

    def test_errors_mapping(self):
        """Should flatten field-keyed errors."""
        assert extract_errors({"errors": {"email": "taken"}}) == ["email: taken"]

    @pytest.mark.parametrize("key", ["error", "detail", "message", "hydra:description"])
    def test_single_message_keys(self, key):
        """Should read the usual single-message keys."""
        assert extract_error_message({key: "Nope"}, "default") == "Nope"

    def test_default(self):
        """Should fall back to the default message."""
        assert extract_error_message(None, "default") == "default"
        assert extract_error_message({"error": ""}, "default") == "default"


class TestRaiseForApiError:
    def test_success_does_nothing(self):
        """Should not raise for 2xx."""
        raise_for_api_error(httpx.Response(201, json={}))

    def test_status_mapping(self):
        """Should map statuses to exception types."""
        with pytest.raises(UnauthorizedError):
            raise_for_api_error(httpx.Response(401))
        with pytest.raises(ForbiddenError):
            raise_for_api_error(httpx.Response(403))
        with pytest.raises(ResourceNotFoundError):
            raise_for_api_error(httpx.Response(404))

    def test_forbidden_message_override(self):
        """Should prefer the caller's 403 message."""
        with pytest.raises(ForbiddenError) as exc_info:
            raise_for_api_error(httpx.Response(403), forbidden_message="Admins only")
        assert exc_info.value.message == "Admins only"

    def test_api_error_carries_status_and_errors(self):
        """Should raise ApiError with status and validation errors."""
        response = httpx.Response(422, json={"errors": ["Email taken"]})
        with pytest.raises(ApiError) as exc_info:
            raise_for_api_error(response, default_message="Error creating user")
        error = exc_info.value
        assert error.status_code == 422
        assert error.errors == ["Email taken"]
        assert error.message == "Email taken"
        assert error.details["service"] == "api"
