from decimal import Decimal

import pytest

from apartment_console.modules.apartments import (
    ApartmentForm,
    ApartmentService,
    PartialSaveError,
    apartments_from_profile,
)
from apartment_console.modules.http.client import REFRESH_PATH
from apartment_console.modules.http.exceptions import ResourceNotFoundError, SessionExpiredError
from apartment_console.modules.shares import ShareAllocation
from apartment_console.shared.exceptions import FormValidationError


@pytest.fixture
def apartments(api_client):
    return ApartmentService(api_client)


@pytest.fixture
def form():
    return ApartmentForm(name="Sea View", price_for_clean="180", vat="8", can_faktura=True)


def allocation_for(*user_ids):
    allocation = ShareAllocation.for_create()
    for user_id in user_ids:
        allocation.add(user_id)
    return allocation


class TestQueries:
    @pytest.mark.asyncio
    async def test_list_apartments(self, apartments, fake_api):
        fake_api.route(
            "GET",
            "/apartments",
            json={"hydra:member": [{"id": 1, "name": "Loft", "canFaktura": True}], "hydra:totalItems": 1},
        )
        result = await apartments.list_apartments()
        assert [(a.id, a.can_faktura) for a in result] == [(1, True)]

    @pytest.mark.asyncio
    async def test_list_my_apartments(self, apartments, fake_api):
        """Should read apartments from the profile shares with the user's percentage."""
        fake_api.route(
            "GET",
            "/me",
            json={
                "id": 3,
                "udzialy": [
                    {"id": 1, "procent": "62.5", "apartment": {"id": 5, "name": "Loft"}},
                    {"id": 2, "procent": 10, "apartment": {"id": 6, "name": ""}},
                    {"id": 3, "procent": 10},
                ],
            },
        )
        result = await apartments.list_my_apartments()
        assert [a.id for a in result] == [5]
        assert result[0].user_percentage == Decimal("62.5")

    def test_profile_without_shares(self):
        assert apartments_from_profile({"id": 1}) == []
        assert apartments_from_profile(None) == []

    @pytest.mark.asyncio
    async def test_get_missing_apartment(self, apartments):
        with pytest.raises(ResourceNotFoundError, match="Apartment not found"):
            await apartments.get_apartment(42)

    def test_picture_url(self, apartments):
        from apartment_console.shared.models import Apartment

        assert apartments.picture_url(Apartment(picture="uploads/a.png")) == "http://assets.test/uploads/a.png"
        assert apartments.picture_url(Apartment()) is None


class TestCreate:
    @pytest.mark.asyncio
    async def test_creates_then_saves_shareholders(self, apartments, form, fake_api, read_body):
        fake_api.route("POST", "/apartments", status=201, json={"apartment": {"id": 9, "name": "Sea View"}})
        fake_api.route("PUT", "/udzialy/apartment/9", json={})

        apartment = await apartments.create_apartment(form, allocation_for(1, 2))

        assert apartment.id == 9
        assert read_body(fake_api.requests[0]) == {
            "name": "Sea View",
            "priceForClean": 180.0,
            "vat": 8.0,
            "canFaktura": True,
        }
        assert read_body(fake_api.requests[1]) == {
            "shareholders": [{"user_id": 1, "procent": 50}, {"user_id": 2, "procent": 50}]
        }

    @pytest.mark.asyncio
    async def test_no_shareholders_no_second_call(self, apartments, form, fake_api):
        fake_api.route("POST", "/apartments", json={"id": 9, "name": "Sea View"})
        await apartments.create_apartment(form, ShareAllocation.for_create())
        assert len(fake_api.requests) == 1

    @pytest.mark.asyncio
    async def test_invalid_form_skips_api(self, apartments, fake_api):
        with pytest.raises(FormValidationError):
            await apartments.create_apartment(ApartmentForm(name="Loft"))
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_shareholder_failure_is_partial_save(self, apartments, form, fake_api):
        """A failed share update should report the apartment that was saved."""
        fake_api.route("POST", "/apartments", json={"id": 9, "name": "Sea View"})
        fake_api.route("PUT", "/udzialy/apartment/9", status=500, json={"error": "Database down"})

        with pytest.raises(PartialSaveError) as exc_info:
            await apartments.create_apartment(form, allocation_for(1))

        error = exc_info.value
        assert error.saved.id == 9
        assert error.step == "shareholders"
        assert "Apartment was created" in error.message
        assert "Database down" in error.message

    @pytest.mark.asyncio
    async def test_session_expiry_is_not_a_partial_save(self, apartments, form, fake_api):
        """Session expiry during the share update should propagate as such."""
        fake_api.route("POST", "/apartments", json={"id": 9, "name": "Sea View"})
        fake_api.route("PUT", "/udzialy/apartment/9", status=401)
        fake_api.route("POST", REFRESH_PATH, status=401)

        with pytest.raises(SessionExpiredError):
            await apartments.create_apartment(form, allocation_for(1))


class TestUpdateAndDelete:
    @pytest.mark.asyncio
    async def test_update_with_edited_shareholders(self, apartments, form, fake_api, read_body):
        fake_api.route("PUT", "/apartments/4", json={"name": "Sea View"})
        fake_api.route("PUT", "/udzialy/apartment/4", json={})
        allocation = ShareAllocation.for_edit()
        allocation.add(1)
        allocation.add(2)
        allocation.remove(2)

        apartment = await apartments.update_apartment(4, form, allocation)

        assert apartment.id == 4
        assert read_body(fake_api.calls("PUT", "/udzialy/apartment/4")[0]) == {
            "shareholders": [{"user_id": 1, "procent": 50}]
        }

    @pytest.mark.asyncio
    async def test_update_without_shareholders(self, apartments, form, fake_api):
        fake_api.route("PUT", "/apartments/4", json={"id": 4, "name": "Sea View"})
        await apartments.update_apartment(4, form)
        assert fake_api.calls("PUT", "/udzialy/apartment/4") == []

    @pytest.mark.asyncio
    async def test_delete(self, apartments, fake_api):
        fake_api.route("DELETE", "/apartments/4", status=204)
        await apartments.delete_apartment(4)
        assert len(fake_api.requests) == 1
