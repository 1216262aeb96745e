"""
Response helpers.

The client hands every non-401 response back untouched; services use these
helpers to turn error statuses into exceptions and to read JSON bodies.
"""

from typing import Any, Optional

import httpx

from .exceptions import (
    ApiError,
    ForbiddenError,
    ResourceNotFoundError,
    UnauthorizedError,
)


def read_json(response: httpx.Response) -> Any:
    """Decode a JSON body, returning None for empty or non-JSON bodies."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def extract_errors(data: Any) -> list[str]:
    """Collect the validation messages of an error body ({"errors": [...]})."""
    if not isinstance(data, dict):
        return []
    errors = data.get("errors")
    if isinstance(errors, list):
        return [str(e) for e in errors]
    if isinstance(errors, dict):
        return [f"{field}: {msg}" for field, msg in errors.items()]
    return []


def extract_error_message(data: Any, default: str) -> str:
    """Pick the most useful human-readable message from an error body."""
    errors = extract_errors(data)
    if errors:
        return ", ".join(errors)
    if isinstance(data, dict):
        for key in ("error", "detail", "message", "hydra:description"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
    return default


def raise_for_api_error(
    response: httpx.Response,
    default_message: str = "Request failed",
    not_found_message: Optional[str] = None,
    forbidden_message: Optional[str] = None,
) -> None:
    """
    Raise the exception matching an error response.

    Does nothing for 2xx responses. 403 is never retried by anyone, it is
    final for the attempted action.
    """
    if response.is_success:
        return

    data = read_json(response)
    message = extract_error_message(data, default_message)
    status = response.status_code

    if status == 401:
        raise UnauthorizedError(message if message != default_message else "Authentication required")
    if status == 403:
        raise ForbiddenError(forbidden_message or extract_error_message(data, "Access denied"))
    if status == 404:
        raise ResourceNotFoundError(not_found_message or extract_error_message(data, "Resource not found"))
    raise ApiError(status, message, errors=extract_errors(data))
