"""
Apartment console - terminal client for the apartment ownership API.

Logs in once, keeps the session in a token file, and offers the list,
detail and admin screens of the web client as subcommands.

Usage:
    apartment-console login alice
    apartment-console apartments --tab canInvoice --sort price_for_clean --desc
    apartment-console users --search kowalski --page 2
    apartment-console shares 12
"""

import argparse
import asyncio
import getpass
import logging
import sys
from pathlib import Path
from typing import Awaitable, Callable, Optional

from rich.logging import RichHandler
from rich.console import Console

from apartment_console import __version__
from apartment_console.container import ServiceContainer
from apartment_console.display import (
    console,
    render_apartment,
    render_apartments,
    render_shares,
    render_user,
    render_users,
    toast_error,
    toast_info,
    toast_success,
)
from apartment_console.shared.config import Settings, get_settings
from apartment_console.shared.exceptions import ConsoleError, FormValidationError
from apartment_console.shared.models import User
from apartment_console.modules.apartments.models import ApartmentForm
from apartment_console.modules.apartments.exceptions import PartialSaveError
from apartment_console.modules.auth.exceptions import NotAuthenticatedError
from apartment_console.modules.http.exceptions import (
    ApiConnectionError,
    ForbiddenError,
    SessionExpiredError,
)
from apartment_console.modules.listing import (
    ListController,
    apartment_list_controller,
    available_role_tabs,
    user_list_controller,
)
from apartment_console.modules.roles import ADMIN_ROLE, USER_ROLE, require_admin
from apartment_console.modules.shares.allocation import ShareAllocation
from apartment_console.modules.users.models import UserForm

logger = logging.getLogger(__name__)

DEFAULT_SESSION_FILE = Path.home() / ".apartment-console" / "session.json"

Handler = Callable[[ServiceContainer, argparse.Namespace], Awaitable[int]]


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


def resolve_settings(args: argparse.Namespace) -> Settings:
    """Settings with command-line overrides; a CLI session always has a token file."""
    settings = get_settings()
    updates = {}
    if args.api_url:
        updates["api_url"] = args.api_url
    if args.log_level:
        updates["log_level"] = args.log_level
    if not settings.token_storage_path:
        updates["token_storage_path"] = str(DEFAULT_SESSION_FILE)
    return settings.model_copy(update=updates) if updates else settings


# Guards

async def require_login(container: ServiceContainer) -> None:
    """Restore the stored session, refreshing it if the access token expired."""
    auth = container.auth_context
    await auth.initialize(force_refresh=False)
    if not auth.is_authenticated:
        raise NotAuthenticatedError("You are not logged in. Run 'apartment-console login' first.")


async def require_admin_user(container: ServiceContainer) -> Optional[User]:
    await require_login(container)
    user = await container.user_context.ensure_user()
    require_admin(user.roles if user is not None else container.auth_context.user.roles)
    return user


# List options

def apply_list_options(controller: ListController, args: argparse.Namespace) -> None:
    if args.search:
        controller.set_search(args.search)
    if args.tab:
        controller.set_tab(args.tab)
    if args.sort:
        controller.sort_by(args.sort)
    if args.desc:
        # the same field a second time flips the direction
        controller.sort_by(controller.sort_field)
    if args.page:
        controller.set_page(args.page)


# Commands

async def cmd_login(container: ServiceContainer, args: argparse.Namespace) -> int:
    password = args.password or getpass.getpass("Password: ")
    claims = await container.user_context.login(args.username, password, persist=True)
    name = claims.identity if claims is not None else args.username
    toast_success(f"Logged in as {name}")
    return 0


async def cmd_logout(container: ServiceContainer, args: argparse.Namespace) -> int:
    container.auth_context.logout()
    toast_success("Logged out")
    return 0


async def cmd_whoami(container: ServiceContainer, args: argparse.Namespace) -> int:
    await require_login(container)
    user = await container.user_context.ensure_user()
    if user is None:
        claims = container.auth_context.user
        console.print(f"{claims.identity} ([dim]profile unavailable[/dim])")
        return 0
    render_user(user)
    return 0


async def cmd_watch_session(container: ServiceContainer, args: argparse.Namespace) -> int:
    session = container.session

    def announce(token: Optional[str]) -> None:
        claims = session.parse_jwt(token) if token else None
        if claims is None:
            toast_info("Session ended")
        else:
            toast_info(f"Session changed: {claims.identity}")

    unsubscribe = session.subscribe(announce)
    toast_info("Watching the session file, press Ctrl+C to stop")
    try:
        await session.watch_storage(container.settings.storage_poll_interval)
    finally:
        unsubscribe()
    return 0


async def cmd_apartments(container: ServiceContainer, args: argparse.Namespace) -> int:
    await require_login(container)
    user_context = container.user_context
    await user_context.ensure_user()

    if user_context.is_admin:
        apartments = await container.apartments.list_apartments()
    else:
        apartments = await container.apartments.list_my_apartments()

    controller = apartment_list_controller(apartments, page_size=args.page_size or container.settings.page_size)
    apply_list_options(controller, args)
    render_apartments(controller.view(), show_user_percentage=not user_context.is_admin)
    return 0


async def cmd_users(container: ServiceContainer, args: argparse.Namespace) -> int:
    await require_admin_user(container)
    users = await container.users.list_users()

    controller = user_list_controller(users, page_size=args.page_size or container.settings.page_size)
    apply_list_options(controller, args)
    render_users(controller.view())
    tabs = available_role_tabs(users)
    if tabs:
        toast_info(f"Tabs: all, {', '.join(tabs)}")
    return 0


async def cmd_apartment(container: ServiceContainer, args: argparse.Namespace) -> int:
    await require_login(container)
    apartment = await container.apartments.get_apartment(args.id)
    render_apartment(apartment, container.apartments.picture_url(apartment))
    return 0


async def cmd_user(container: ServiceContainer, args: argparse.Namespace) -> int:
    await require_admin_user(container)
    render_user(await container.users.get_user(args.id))
    return 0


def _confirm(prompt: str, assume_yes: bool) -> bool:
    if assume_yes:
        return True
    answer = console.input(f"{prompt} (y/N) ")
    return answer.strip().lower() in ("y", "yes")


async def cmd_delete_apartment(container: ServiceContainer, args: argparse.Namespace) -> int:
    await require_admin_user(container)
    apartment = await container.apartments.get_apartment(args.id)
    if not _confirm(f"Delete apartment '{apartment.name}'?", args.yes):
        toast_info("Cancelled")
        return 1
    await container.apartments.delete_apartment(args.id)
    toast_success(f"Apartment '{apartment.name}' deleted")
    return 0


async def cmd_delete_user(container: ServiceContainer, args: argparse.Namespace) -> int:
    await require_admin_user(container)
    user = await container.users.get_user(args.id)
    if not _confirm(f"Delete user '{user.full_name or user.username}'?", args.yes):
        toast_info("Cancelled")
        return 1
    await container.users.delete_user(args.id)
    toast_success(f"User '{user.full_name or user.username}' deleted")
    return 0


async def cmd_shares(container: ServiceContainer, args: argparse.Namespace) -> int:
    await require_admin_user(container)
    apartment = await container.apartments.get_apartment(args.apartment_id)
    render_shares(ShareAllocation.from_apartment(apartment), f"Shareholders of {apartment.name}")
    return 0


async def cmd_add_share(container: ServiceContainer, args: argparse.Namespace) -> int:
    await require_admin_user(container)
    await container.shares.add_share(args.user_id, args.apartment_id, args.percent)
    toast_success("Share added")
    return 0


async def cmd_create_apartment(container: ServiceContainer, args: argparse.Namespace) -> int:
    await require_admin_user(container)
    form = ApartmentForm(
        name=args.name,
        price_for_clean=args.price,
        vat=args.vat,
        can_faktura=args.invoice,
        image_path=args.image,
    )
    shareholders = ShareAllocation.for_create()
    for user_id in args.shareholder or []:
        shareholders.add(user_id)

    try:
        apartment = await container.apartments.create_apartment(form, shareholders)
    except PartialSaveError as e:
        toast_error(e.message)
        return 1
    toast_success(f"Apartment '{apartment.name}' created")
    if len(shareholders):
        render_shares(shareholders, "Shareholders")
    return 0


async def cmd_create_user(container: ServiceContainer, args: argparse.Namespace) -> int:
    await require_admin_user(container)
    password = args.password or getpass.getpass("Password: ")
    confirm = args.password or getpass.getpass("Confirm password: ")
    form = UserForm(
        name=args.name,
        surname=args.surname,
        email=args.email,
        username=args.username,
        phone=args.phone or "",
        role=ADMIN_ROLE if args.admin else USER_ROLE,
        password=password,
        confirm_password=confirm,
    )

    availability = await container.users.check_username(form.username)
    if not availability.available:
        toast_error(availability.error or f"Username '{form.username}' is taken")
        return 1

    user = await container.users.register_user(form)
    toast_success(f"User '{user.username or form.username}' created")
    return 0


async def cmd_reset_password(container: ServiceContainer, args: argparse.Namespace) -> int:
    reset = container.password_reset
    if args.action == "request":
        await reset.request_reset(args.value)
        toast_success("If the address is registered, a reset link has been sent")
        return 0
    if args.action == "verify":
        email = await reset.verify(args.value)
        toast_success(f"Reset link is valid for {email}")
        return 0

    email = await reset.verify(args.value)
    toast_info(f"Setting a new password for {email}")
    password = getpass.getpass("New password: ")
    confirm = getpass.getpass("Confirm password: ")
    await reset.reset(args.value, password, confirm)
    toast_success("Password changed, you can log in now")
    return 0


# Entry point

def _add_list_options(parser: argparse.ArgumentParser, tabs: str, sorts: str) -> None:
    parser.add_argument("--search", "-s", help="Case-insensitive search text")
    parser.add_argument("--tab", "-t", help=f"Category tab: {tabs}")
    parser.add_argument("--sort", help=f"Sort field: {sorts}")
    parser.add_argument("--desc", action="store_true", help="Sort descending")
    parser.add_argument("--page", "-p", type=int, help="Page number (default: 1)")
    parser.add_argument("--page-size", type=int, help="Rows per page")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apartment-console",
        description="Terminal client for the apartment ownership API",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--api-url", help="Base API URL (overrides CONSOLE_API_URL)")
    parser.add_argument("--log-level", help="Logging level, e.g. INFO or DEBUG")
    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Log in and remember the session")
    login.add_argument("username")
    login.add_argument("--password", help="Password (prompted when omitted)")
    login.set_defaults(handler=cmd_login)

    commands.add_parser("logout", help="Forget the session").set_defaults(handler=cmd_logout)
    commands.add_parser("whoami", help="Show the logged-in user").set_defaults(handler=cmd_whoami)
    commands.add_parser(
        "watch-session", help="Follow logins and logouts made by other processes"
    ).set_defaults(handler=cmd_watch_session)

    apartments = commands.add_parser("apartments", help="List apartments")
    _add_list_options(
        apartments,
        "all, canInvoice, cannotInvoice",
        "name, id, price_for_clean, vat, created_at, can_faktura",
    )
    apartments.set_defaults(handler=cmd_apartments)

    users = commands.add_parser("users", help="List users (admin)")
    _add_list_options(
        users,
        f"all, {ADMIN_ROLE}, {USER_ROLE}",
        "name, surname, email, username, id, role, created_at",
    )
    users.set_defaults(handler=cmd_users)

    apartment = commands.add_parser("apartment", help="Show one apartment")
    apartment.add_argument("id", type=int)
    apartment.set_defaults(handler=cmd_apartment)

    user = commands.add_parser("user", help="Show one user (admin)")
    user.add_argument("id", type=int)
    user.set_defaults(handler=cmd_user)

    delete_apartment = commands.add_parser("delete-apartment", help="Delete an apartment (admin)")
    delete_apartment.add_argument("id", type=int)
    delete_apartment.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")
    delete_apartment.set_defaults(handler=cmd_delete_apartment)

    delete_user = commands.add_parser("delete-user", help="Delete a user (admin)")
    delete_user.add_argument("id", type=int)
    delete_user.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")
    delete_user.set_defaults(handler=cmd_delete_user)

    shares = commands.add_parser("shares", help="Show the shareholders of an apartment (admin)")
    shares.add_argument("apartment_id", type=int)
    shares.set_defaults(handler=cmd_shares)

    add_share = commands.add_parser("add-share", help="Give a user a share of an apartment (admin)")
    add_share.add_argument("--user", dest="user_id", type=int, required=True)
    add_share.add_argument("--apartment", dest="apartment_id", type=int, required=True)
    add_share.add_argument("--percent", required=True, help="Percentage, greater than 0 and at most 100")
    add_share.set_defaults(handler=cmd_add_share)

    create_apartment = commands.add_parser("create-apartment", help="Create an apartment (admin)")
    create_apartment.add_argument("--name", required=True)
    create_apartment.add_argument("--price", required=True, help="Cleaning price")
    create_apartment.add_argument("--vat", required=True, help="VAT rate in percent")
    create_apartment.add_argument("--invoice", action="store_true", help="Invoices can be issued")
    create_apartment.add_argument("--image", type=Path, help="JPEG, PNG or WebP picture (max 10 MB)")
    create_apartment.add_argument(
        "--shareholder",
        type=int,
        action="append",
        help="User ID of a shareholder; repeat to split the apartment evenly",
    )
    create_apartment.set_defaults(handler=cmd_create_apartment)

    create_user = commands.add_parser("create-user", help="Register a user (admin)")
    create_user.add_argument("username")
    create_user.add_argument("--name", required=True)
    create_user.add_argument("--surname", required=True)
    create_user.add_argument("--email", required=True)
    create_user.add_argument("--phone", help="International format, e.g. +48123456789")
    create_user.add_argument("--admin", action="store_true", help="Grant the admin role")
    create_user.add_argument("--password", help="Password (prompted when omitted)")
    create_user.set_defaults(handler=cmd_create_user)

    reset = commands.add_parser("reset-password", help="Password reset by e-mail")
    reset.add_argument("action", choices=["request", "verify", "reset"])
    reset.add_argument("value", help="E-mail address for 'request', reset token otherwise")
    reset.set_defaults(handler=cmd_reset_password)

    return parser


async def run(args: argparse.Namespace, container: ServiceContainer) -> int:
    """Run one command, turning errors into messages and an exit status."""
    handler: Handler = args.handler
    try:
        return await handler(container, args)
    except FormValidationError as e:
        toast_error(e.message)
        for field, message in e.errors.items():
            console.print(f"  [yellow]{field}[/yellow]: {message}")
        return 1
    except SessionExpiredError as e:
        toast_error(f"{e.message}. Run 'apartment-console login' again.")
        return 1
    except ForbiddenError as e:
        toast_error(f"Access denied: {e.message}")
        return 1
    except ApiConnectionError as e:
        toast_error(e.message)
        return 2
    except ConsoleError as e:
        logger.debug(f"Command failed: {e.to_dict()}")
        toast_error(e.message)
        return 1
    finally:
        await container.aclose()


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = resolve_settings(args)
    configure_logging(settings.log_level)

    container = ServiceContainer(settings=settings)
    try:
        return asyncio.run(run(args, container))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
