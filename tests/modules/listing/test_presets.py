from apartment_console.modules.listing import (
    CAN_INVOICE_TAB,
    CANNOT_INVOICE_TAB,
    apartment_list_controller,
    available_role_tabs,
    user_list_controller,
)
from apartment_console.modules.roles import ADMIN_ROLE, USER_ROLE
from apartment_console.shared.models import Apartment, ApartmentSummary, Share, User


def make_apartments():
    return [
        Apartment(
            id=i,
            name=f"Apartment {i:02d}",
            price_for_clean=str(100 + (i * 37) % 25 * 10),
            vat="23",
            can_faktura=i % 3 == 0,
            created_at=f"2024-01-{i:02d}T10:00:00+00:00",
        )
        for i in range(1, 26)
    ]


class TestApartmentList:
    def test_invoice_tab_is_exact_subset(self):
        """The invoice tab should show exactly the invoiceable apartments."""
        apartments = make_apartments()
        controller = apartment_list_controller(apartments, page_size=100)
        controller.set_tab(CAN_INVOICE_TAB)
        expected = {a.id for a in apartments if a.can_faktura}
        assert {a.id for a in controller.filtered} == expected

        controller.set_tab(CANNOT_INVOICE_TAB)
        assert {a.id for a in controller.filtered} == {a.id for a in apartments} - expected

    def test_price_sort_descending_is_reverse(self):
        """Descending price order should reverse ascending order."""
        controller = apartment_list_controller(make_apartments(), page_size=100)
        controller.sort_by("price_for_clean")
        ascending = [a.id for a in controller.filtered]
        prices = [float(a.price_for_clean) for a in controller.filtered]
        assert prices == sorted(prices)

        controller.sort_by("price_for_clean")
        assert [a.id for a in controller.filtered] == list(reversed(ascending))

    def test_default_pagination(self):
        """25 apartments should give pages of 10, 10 and 5."""
        controller = apartment_list_controller(make_apartments())
        view = controller.view()
        assert len(view.items) == 10
        assert view.total_pages == 3
        controller.set_page(3)
        assert len(controller.page_items) == 5

    def test_search_by_formatted_date(self):
        """Should match the short display date."""
        controller = apartment_list_controller(make_apartments())
        controller.set_search("15.01.2024")
        assert [a.id for a in controller.filtered] == [15]

    def test_unparseable_prices_sort_as_zero(self):
        apartments = [
            Apartment(id=1, name="A", price_for_clean="120"),
            Apartment(id=2, name="B", price_for_clean="n/a"),
        ]
        controller = apartment_list_controller(apartments)
        controller.sort_by("price_for_clean")
        assert [a.id for a in controller.filtered] == [2, 1]


def make_user(user_id, name, surname, roles, apartments=()):
    return User(
        id=user_id,
        name=name,
        surname=surname,
        email=f"{name.lower()}@example.com",
        username=name.lower(),
        roles=roles,
        udzialy=[
            Share(procent="50", apartment=ApartmentSummary(id=index, name=apartment))
            for index, apartment in enumerate(apartments, start=1)
        ],
    )


class TestUserList:
    def test_name_sorts_by_full_name(self):
        """'name' should compare "name surname"."""
        users = [
            make_user(1, "Anna", "Zielinska", [USER_ROLE]),
            make_user(2, "Anna", "Adamska", [USER_ROLE]),
            make_user(3, "Adam", "Nowak", [ADMIN_ROLE]),
        ]
        controller = user_list_controller(users)
        assert [u.id for u in controller.filtered] == [3, 2, 1]

    def test_search_by_apartment_name(self):
        users = [
            make_user(1, "Anna", "Nowak", [USER_ROLE], ["Sea View"]),
            make_user(2, "Piotr", "Kowalski", [USER_ROLE], ["Old Town"]),
        ]
        controller = user_list_controller(users)
        controller.set_search("sea")
        assert [u.id for u in controller.filtered] == [1]

    def test_role_tabs(self):
        """Admins should be listed only under the admin tab."""
        users = [
            make_user(1, "Anna", "Nowak", [USER_ROLE, ADMIN_ROLE]),
            make_user(2, "Piotr", "Kowalski", [USER_ROLE]),
        ]
        controller = user_list_controller(users)
        controller.set_tab(ADMIN_ROLE)
        assert [u.id for u in controller.filtered] == [1]
        controller.set_tab(USER_ROLE)
        assert [u.id for u in controller.filtered] == [2]

    def test_available_role_tabs(self):
        """Only roles present in the list should get a tab."""
        users = [make_user(1, "Anna", "Nowak", [USER_ROLE])]
        assert available_role_tabs(users) == [USER_ROLE]
        users.append(make_user(2, "Adam", "Admin", [ADMIN_ROLE]))
        assert available_role_tabs(users) == [ADMIN_ROLE, USER_ROLE]
        assert available_role_tabs([]) == []
