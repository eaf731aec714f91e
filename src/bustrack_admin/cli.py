"""Command line front end for the bus-tracking admin client.

Each command navigates the router to the screen that owns the action,
runs it, and prints whatever the screen reported. The session persists
between invocations in the configured storage file.

Exit status: 0 on success, 1 when the action failed, 2 when the route
guard sent the command to the login screen.
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import sys
from typing import TypeVar

from bustrack_admin.client import BusTrackClient
from bustrack_admin.config import AdminConfig
from bustrack_admin.exceptions import ConfigError
from bustrack_admin.models.forms import BusForm
from bustrack_admin.router import Router
from bustrack_admin.views.auth import ForgotPasswordView, LoginView
from bustrack_admin.views.base import PopupView, ResourceView, View
from bustrack_admin.views.buses import BusesView
from bustrack_admin.views.profile import ProfileView
from bustrack_admin.views.users import UsersView

V = TypeVar("V", bound=View)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_LOGIN_REQUIRED = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bustrack-admin", description="Bus-tracking platform administration")
    parser.add_argument("--api-url", help="API base URL (default: $BUSTRACK_API_URL)")
    parser.add_argument("--storage", help="Session storage file (default: $BUSTRACK_STORAGE_PATH)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Sign in as an administrator")
    login.add_argument("email")
    login.add_argument("--password", help="Password (prompted when omitted)")

    commands.add_parser("logout", help="Sign out and forget the stored session")
    commands.add_parser("whoami", help="Show the signed-in account")

    buses = commands.add_parser("buses", help="Manage the bus fleet").add_subparsers(dest="action", required=True)
    bus_list = buses.add_parser("list", help="List buses")
    bus_list.add_argument("--page", type=int, default=1)
    bus_add = buses.add_parser("add", help="Add a bus")
    bus_add.add_argument("--name", required=True, dest="bus_name")
    bus_add.add_argument("--driver", default="", dest="driver_name")
    bus_add.add_argument("--plate", default="", dest="license_plate")
    bus_add.add_argument("--inactive", action="store_true")
    bus_edit = buses.add_parser("edit", help="Edit a bus")
    bus_edit.add_argument("bus_id", type=int)
    bus_edit.add_argument("--name", dest="bus_name")
    bus_edit.add_argument("--driver", dest="driver_name")
    bus_edit.add_argument("--plate", dest="license_plate")
    for action in ("toggle", "delete"):
        sub = buses.add_parser(action, help=f"{action.capitalize()} a bus")
        sub.add_argument("bus_id", type=int)

    users = commands.add_parser("users", help="Manage user accounts").add_subparsers(dest="action", required=True)
    user_list = users.add_parser("list", help="List users")
    user_list.add_argument("--page", type=int, default=1)
    user_delete = users.add_parser("delete", help="Delete a user")
    user_delete.add_argument("user_id", type=int)

    profile = commands.add_parser("profile", help="Edit your own profile").add_subparsers(
        dest="action", required=True
    )
    profile_update = profile.add_parser("update", help="Update name and email")
    profile_update.add_argument("--name")
    profile_update.add_argument("--email")
    profile.add_parser("password", help="Change your password (signs you out)")

    forgot = commands.add_parser("forgot-password", help="Reset a forgotten password")
    forgot.add_argument("email")
    return parser


# ----------------------------------------------------------------------
# Output helpers
# ----------------------------------------------------------------------


def _report(view: View) -> None:
    if isinstance(view, ResourceView):
        for notification in view.notifications.visible():
            print(f"[{notification.type}] {notification.message}")
    if isinstance(view, PopupView) and view.popup is not None:
        print(f"[{view.popup.type}] {view.popup.title}: {view.popup.message}")


def _print_buses(view: BusesView) -> None:
    print(f"Total: {view.total_count}  Active: {view.active_count}  Inactive: {view.inactive_count}")
    for bus in view.page_rows:
        print(f"{bus.id:>5}  {bus.bus_name:<20} {bus.driver_name:<20} {bus.license_plate:<12} {bus.status_label}")
    if view.total_count:
        print(view.summary)


def _print_users(view: UsersView) -> None:
    print(f"Admins: {view.admin_count}  Users: {view.user_count}")
    for user in view.page_rows:
        print(f"{user.id:>5}  {user.name:<24} {user.email:<32} {user.role.display_name}")
    print(view.summary)


def _exit(ok: bool) -> int:
    return EXIT_OK if ok else EXIT_FAILED


async def _open(router: Router, path: str, view_cls: type[V]) -> V | None:
    navigation = await router.navigate(path)
    if isinstance(navigation.view, view_cls):
        return navigation.view
    print("Please log in first: bustrack-admin login <email>", file=sys.stderr)
    return None


# ----------------------------------------------------------------------
# Commands
# ----------------------------------------------------------------------


async def _cmd_login(router: Router, client: BusTrackClient, args: argparse.Namespace) -> int:
    navigation = await router.navigate("/login")
    if not isinstance(navigation.view, LoginView):
        user = client.session.user
        print(f"Already signed in as {user.name if user else '?'}")
        return EXIT_OK
    password = args.password if args.password is not None else getpass.getpass("Password: ")
    redirect = await navigation.view.submit(args.email, password)
    if redirect is None:
        print(navigation.view.error, file=sys.stderr)
        return EXIT_FAILED
    await router.navigate(redirect)
    user = client.session.user
    print(f"Signed in as {user.name if user else args.email}")
    return EXIT_OK


def _cmd_whoami(client: BusTrackClient) -> int:
    user = client.session.user
    if not client.session.is_authenticated or user is None:
        print("Not signed in")
        return EXIT_LOGIN_REQUIRED
    print(f"{user.name} <{user.email}> ({user.role.display_name})")
    return EXIT_OK


async def _cmd_buses(router: Router, args: argparse.Namespace) -> int:
    view = await _open(router, "/buses", BusesView)
    if view is None:
        return EXIT_LOGIN_REQUIRED
    ok = True
    if args.action == "list":
        await view.go_to_page(args.page)
        _report(view)
        _print_buses(view)
        return _exit(bool(view.last_fetch_ok))
    if args.action == "add":
        form = BusForm(
            bus_name=args.bus_name,
            driver_name=args.driver_name,
            license_plate=args.license_plate,
            is_active=not args.inactive,
        )
        ok = await view.add_bus(form)
    elif args.action == "edit":
        bus = view.find(args.bus_id)
        if bus is None:
            print(f"No bus with id {args.bus_id}", file=sys.stderr)
            return EXIT_FAILED
        overrides = {
            key: value
            for key in ("bus_name", "driver_name", "license_plate")
            if (value := getattr(args, key)) is not None
        }
        ok = await view.edit_bus(bus.id, BusForm.from_bus(bus).model_copy(update=overrides))
    elif args.action == "toggle":
        ok = await view.toggle_active(args.bus_id)
    elif args.action == "delete":
        ok = await view.delete_bus(args.bus_id)
    _report(view)
    return _exit(ok)


async def _cmd_users(router: Router, args: argparse.Namespace) -> int:
    view = await _open(router, "/users", UsersView)
    if view is None:
        return EXIT_LOGIN_REQUIRED
    if args.action == "list":
        ok = bool(view.last_fetch_ok)
        if ok and args.page != view.users.current_page:
            ok = await view.go_to_page(args.page)
        _report(view)
        _print_users(view)
        return _exit(ok)
    ok = await view.delete_user(args.user_id)
    _report(view)
    return _exit(ok)


async def _cmd_profile(router: Router, args: argparse.Namespace) -> int:
    view = await _open(router, "/profile", ProfileView)
    if view is None:
        return EXIT_LOGIN_REQUIRED
    if args.action == "update":
        ok = await view.update_profile(args.name, args.email)
    else:
        ok = await view.change_password(
            getpass.getpass("Current password: "),
            getpass.getpass("New password: "),
            getpass.getpass("Confirm new password: "),
        )
    _report(view)
    return _exit(ok)


async def _cmd_forgot_password(router: Router, args: argparse.Namespace) -> int:
    navigation = await router.navigate("/forgot-password")
    view = navigation.view
    if not isinstance(view, ForgotPasswordView):
        return EXIT_FAILED
    ok = await view.send_email(args.email)
    _report(view)
    if not ok:
        return EXIT_FAILED
    view.close_popup()
    ok = await view.reset_password(
        getpass.getpass("New password: "),
        getpass.getpass("Confirm new password: "),
    )
    _report(view)
    return _exit(ok)


async def _run(args: argparse.Namespace) -> int:
    try:
        config = AdminConfig.from_env(base_url=args.api_url, storage_path=args.storage)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_FAILED

    async with BusTrackClient(config) as client:
        router = Router(client)
        if args.command == "login":
            return await _cmd_login(router, client, args)
        if args.command == "logout":
            client.session.logout()
            print("Signed out")
            return EXIT_OK
        if args.command == "whoami":
            return _cmd_whoami(client)
        if args.command == "buses":
            return await _cmd_buses(router, args)
        if args.command == "users":
            return await _cmd_users(router, args)
        if args.command == "profile":
            return await _cmd_profile(router, args)
        return await _cmd_forgot_password(router, args)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
