import pytest

from apartment_console.modules.users import (
    UserForm,
    password_errors,
    validate_user_form,
)
from apartment_console.shared.exceptions import FormValidationError
from apartment_console.shared.models import InvoiceInfo


def valid_form(**overrides):
    values = {
        "name": "Anna",
        "surname": "Nowak",
        "email": "anna@example.com",
        "username": "anna",
        "phone": "+48123456789",
        "password": "secret1",
        "confirm_password": "secret1",
    }
    values.update(overrides)
    return UserForm(**values)


class TestValidateUserForm:
    def test_valid(self):
        validate_user_form(valid_form())

    def test_collects_every_error(self):
        """All field problems should be reported at once."""
        form = UserForm(email="not-an-email", username="ab", phone="0048123", password="123")
        with pytest.raises(FormValidationError) as exc_info:
            validate_user_form(form)
        assert set(exc_info.value.errors) == {
            "name",
            "surname",
            "email",
            "username",
            "phone",
            "password",
            "confirm_password",
        }

    @pytest.mark.parametrize("phone", ["", "+48123456789", "+12"])
    def test_valid_phones(self, phone):
        validate_user_form(valid_form(phone=phone))

    @pytest.mark.parametrize("phone", ["48123456789", "+0123", "+48 123 456", "+1234567890123456"])
    def test_invalid_phones(self, phone):
        with pytest.raises(FormValidationError) as exc_info:
            validate_user_form(valid_form(phone=phone))
        assert set(exc_info.value.errors) == {"phone"}

    def test_password_optional_when_editing(self):
        validate_user_form(valid_form(password="", confirm_password=""), creating=False)

    def test_password_required_when_creating(self):
        with pytest.raises(FormValidationError) as exc_info:
            validate_user_form(valid_form(password="", confirm_password=""))
        assert exc_info.value.errors == {"password": "Password is required"}


class TestPasswordErrors:
    def test_mismatch(self):
        assert password_errors("secret1", "secret2") == {"confirm_password": "Passwords do not match"}

    def test_confirmation_without_password_when_optional(self):
        assert password_errors("", "secret1", required=False) == {"confirm_password": "Passwords do not match"}

    def test_empty_optional(self):
        assert password_errors("", "", required=False) == {}


class TestPayloads:
    def test_register_payload(self):
        payload = valid_form(name=" Anna ", phone="").to_register_payload()
        assert payload == {
            "username": "anna",
            "email": "anna@example.com",
            "name": "Anna",
            "surname": "Nowak",
            "phone": None,
            "roles": ["ROLE_USER"],
            "password": "secret1",
        }

    def test_update_payload_without_password(self):
        """An empty password should keep the current one."""
        payload = valid_form(password="", confirm_password="", role="ROLE_ADMIN").to_update_payload()
        assert "password" not in payload
        assert "confirmPassword" not in payload
        assert payload["roles"] == ["ROLE_ADMIN"]

    def test_update_payload_with_password_and_invoice(self):
        form = valid_form(invoice_info=InvoiceInfo(company_name="Nowak Sp. z o.o.", nip="1234567890"))
        payload = form.to_update_payload()
        assert payload["confirmPassword"] == "secret1"
        assert payload["invoiceInfo"]["companyName"] == "Nowak Sp. z o.o."
        assert payload["invoiceInfo"]["nip"] == "1234567890"
