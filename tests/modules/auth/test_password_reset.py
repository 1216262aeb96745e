import pytest

from apartment_console.modules.auth import InvalidResetTokenError, PasswordResetService
from apartment_console.modules.http.exceptions import ApiError
from apartment_console.shared.exceptions import FormValidationError


@pytest.fixture
def reset_service(api_client):
    return PasswordResetService(api_client)


class TestRequestReset:
    @pytest.mark.asyncio
    async def test_posts_email(self, reset_service, fake_api, read_body):
        fake_api.route("POST", "/password-reset/request", json={"message": "sent"})
        await reset_service.request_reset(" anna@example.com ")
        assert read_body(fake_api.requests[0]) == {"email": "anna@example.com"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email,message", [("", "Email is required"), ("anna@", "Email is invalid")])
    async def test_invalid_email(self, reset_service, fake_api, email, message):
        with pytest.raises(FormValidationError) as exc_info:
            await reset_service.request_reset(email)
        assert exc_info.value.errors == {"email": message}
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_api_failure(self, reset_service, fake_api):
        fake_api.route("POST", "/password-reset/request", status=500)
        with pytest.raises(ApiError) as exc_info:
            await reset_service.request_reset("anna@example.com")
        assert exc_info.value.message == "Failed to request password reset"


class TestVerify:
    @pytest.mark.asyncio
    async def test_valid_token(self, reset_service, fake_api):
        fake_api.route("POST", "/password-reset/verify", json={"valid": True, "email": "anna@example.com"})
        assert await reset_service.verify("abc") == "anna@example.com"

    @pytest.mark.asyncio
    async def test_invalid_token(self, reset_service, fake_api):
        fake_api.route("POST", "/password-reset/verify", status=400, json={"valid": False, "error": "Token expired"})
        with pytest.raises(InvalidResetTokenError) as exc_info:
            await reset_service.verify("abc")
        assert exc_info.value.message == "Token expired"

    @pytest.mark.asyncio
    async def test_missing_token(self, reset_service, fake_api):
        with pytest.raises(InvalidResetTokenError):
            await reset_service.verify("")
        assert fake_api.requests == []


class TestReset:
    @pytest.mark.asyncio
    async def test_sets_password(self, reset_service, fake_api, read_body):
        fake_api.route("POST", "/password-reset/reset", json={"message": "ok"})
        await reset_service.reset("abc", "new-secret", "new-secret")
        assert read_body(fake_api.requests[0]) == {"token": "abc", "password": "new-secret"}

    @pytest.mark.asyncio
    async def test_mismatch(self, reset_service, fake_api):
        with pytest.raises(FormValidationError) as exc_info:
            await reset_service.reset("abc", "new-secret", "other")
        assert exc_info.value.errors == {"confirm_password": "Passwords do not match"}
        assert fake_api.requests == []
