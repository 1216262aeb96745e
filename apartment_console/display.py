"""Rich terminal rendering for the console commands."""

from decimal import Decimal
from typing import Any, Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from apartment_console.shared.formatting import format_date, format_price, format_vat
from apartment_console.shared.models import Apartment, User
from apartment_console.modules.listing.models import ListView, SortDirection
from apartment_console.modules.roles import get_highest_role
from apartment_console.modules.shares.allocation import FULL_ALLOCATION, ShareAllocation

console = Console()


def toast_success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def toast_error(message: str) -> None:
    console.print(f"[red]Error:[/red] {message}")


def toast_info(message: str) -> None:
    console.print(f"[dim]{message}[/dim]")


def _text(value: Any, empty: str = "-") -> str:
    if value is None or value == "":
        return empty
    return str(value)


def _percent(value: Decimal) -> str:
    return f"{value.normalize():f}%"


def render_list_footer(view: ListView, noun: str) -> None:
    """Pagination summary, e.g. 'Showing 11-20 of 25 apartments (page 2/3)'."""
    if view.total_items == 0:
        console.print(f"[dim]No {noun} found[/dim]")
        return
    if not view.items:
        console.print(
            f"[dim]Page {view.current_page} is empty; "
            f"{view.total_items} {noun} on {view.total_pages} page(s)[/dim]"
        )
        return
    first = view.start_index + 1
    last = view.start_index + len(view.items)
    arrow = "↑" if view.sort_direction is SortDirection.ASC else "↓"
    console.print(
        f"[dim]Showing {first}-{last} of {view.total_items} {noun} "
        f"(page {view.current_page}/{view.total_pages}, "
        f"sorted by {view.sort_field} {arrow}, tab: {view.active_tab})[/dim]"
    )


def render_apartments(view: ListView, show_user_percentage: bool = False) -> None:
    table = Table(title="Apartments")
    table.add_column("ID", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Cleaning price", justify="right")
    table.add_column("VAT", justify="right")
    table.add_column("Invoice")
    if show_user_percentage:
        table.add_column("Your share", justify="right")
    table.add_column("Created")

    for apartment in view.items:
        row = [
            _text(apartment.id),
            apartment.name,
            _text(format_price(apartment.price_for_clean)),
            _text(format_vat(apartment.vat)),
            "yes" if apartment.can_faktura else "no",
        ]
        if show_user_percentage:
            row.append(_percent(apartment.user_percentage or Decimal("0")))
        row.append(format_date(apartment.created_at))
        table.add_row(*row)

    console.print(table)
    render_list_footer(view, "apartments")


def render_users(view: ListView) -> None:
    table = Table(title="Users")
    table.add_column("ID", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Username")
    table.add_column("Email")
    table.add_column("Role")
    table.add_column("Apartments")
    table.add_column("Created")

    for user in view.items:
        table.add_row(
            _text(user.id),
            user.full_name,
            user.username,
            user.email,
            get_highest_role(user.roles),
            ", ".join(user.apartment_names) or "-",
            format_date(user.created_at),
        )

    console.print(table)
    render_list_footer(view, "users")


def render_shares(allocation: ShareAllocation, title: str) -> None:
    """Share table with the total highlighted green only at exactly 100%."""
    table = Table(title=title)
    table.add_column("ID", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Share", justify="right")
    for entry in allocation.entries:
        table.add_row(_text(entry.participant_id), _text(entry.label), _percent(entry.percentage))

    total = allocation.total
    if allocation.is_complete:
        style = "green"
    elif total > FULL_ALLOCATION:
        style = "red"
    else:
        style = "yellow"
    table.add_section()
    table.add_row("", "Total", f"[{style}]{_percent(total)}[/{style}]")
    console.print(table)
    if allocation.entries and not allocation.is_complete:
        console.print(f"[{style}]Shares add up to {_percent(total)}, not 100%[/{style}]")


def _details_panel(title: str, rows: Iterable[tuple[str, Any]]) -> Panel:
    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="dim")
    grid.add_column()
    for label, value in rows:
        grid.add_row(label, _text(value))
    return Panel(grid, title=title, border_style="blue")


def render_apartment(apartment: Apartment, picture_url: Optional[str] = None) -> None:
    console.print(
        _details_panel(
            apartment.name or f"Apartment {apartment.id}",
            [
                ("ID", apartment.id),
                ("Cleaning price", format_price(apartment.price_for_clean)),
                ("VAT", format_vat(apartment.vat)),
                ("Invoice", "yes" if apartment.can_faktura else "no"),
                ("Picture", picture_url),
                ("Created", format_date(apartment.created_at)),
            ],
        )
    )
    if apartment.udzialy:
        render_shares(ShareAllocation.from_apartment(apartment), "Shareholders")


def render_user(user: User) -> None:
    invoice = user.invoice_info
    rows: list[tuple[str, Any]] = [
        ("ID", user.id),
        ("Username", user.username),
        ("Email", user.email),
        ("Phone", user.phone),
        ("Role", get_highest_role(user.roles)),
        ("Created", format_date(user.created_at)),
    ]
    if invoice is not None:
        rows.extend(
            [
                ("Company", invoice.company_name),
                ("NIP", invoice.nip),
                ("Address", invoice.address),
                ("City", invoice.city),
                ("Country", invoice.country),
                ("Invoice email", invoice.email),
            ]
        )
    console.print(_details_panel(user.full_name or user.username, rows))
    if user.udzialy:
        render_shares(ShareAllocation.from_user(user), "Shares")
