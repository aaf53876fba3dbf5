"""CLI entrypoint and menu wiring for the TErdle client."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace

from .config import Settings, load_settings, normalize_base_url
from .console import Console
from .game import Session, play_daily, play_random
from .log import configure_logging
from .menus import Menu, MenuBuilder, MenuSystem
from .service import AuthService, GameService
from .stats import summarize
from .view import ApplicationView

logger = logging.getLogger(__name__)

LOGIN_MENU_NAME = "LoginMenu"
MAIN_MENU_NAME = "MainMenu"
ADMIN_MAIN_MENU_NAME = "AdminMainMenu"
ADMIN_MENU_NAME = "AdminMenu"

UNEXPECTED_ERROR_MESSAGE = "An unexpected error has occurred. See the log file for details."


def handle_login(session: Session) -> None:
    """Log in and enter the main menu matching the user's role."""
    credentials = session.view.prompt_for_credentials()
    user = session.auth_service.login(credentials)
    if user is None:
        session.view.display_error_message("Login failed.")
        return
    session.current_user = user
    session.game_service.set_auth_token(user.token)
    session.view.display_success_message("Login successful.")
    _menus(session).push_menu(ADMIN_MAIN_MENU_NAME if user.user.is_admin else MAIN_MENU_NAME)


def show_user_game_stats(session: Session) -> None:
    rounds = session.game_service.list_rounds(session.user_id)
    if rounds is None:
        session.view.display_error_message("Could not load your games.")
        return
    session.view.display_round_history(rounds)
    session.view.display_stats_summary(summarize(rounds))


def show_all_games(session: Session) -> None:
    session.view.display_game_list(session.game_service.list_all_games())


def goto_admin_menu(session: Session) -> None:
    _menus(session).push_menu(ADMIN_MENU_NAME)


def log_out(session: Session) -> None:
    """Forget the current user and return to the login menu."""
    if session.current_user is not None:
        logger.info("Logged out %s", session.current_user.user.username)
    session.current_user = None
    session.game_service.set_auth_token(None)
    _menus(session).pop_current_menu()


def _menus(session: Session) -> MenuSystem[Session]:
    if session.menu_system is None:
        raise RuntimeError("Menu system is not attached to the session.")
    return session.menu_system


LOGIN_MENU: Menu[Session] = (
    MenuBuilder[Session]()
    .add_item("Login", handle_login)
    .add_item("Exit", continues_menu=False)
    .build(LOGIN_MENU_NAME, "Login Menu")
)
MAIN_MENU: Menu[Session] = (
    MenuBuilder[Session]()
    .add_item("Play Daily Game", play_daily)
    .add_item("Play Random Game", play_random)
    .add_item("Show Game Statistics", show_user_game_stats)
    .add_item("Log Out", log_out)
    .build(MAIN_MENU_NAME, "Main Menu")
)
ADMIN_MAIN_MENU: Menu[Session] = (
    MenuBuilder[Session]()
    .add_item("Play Daily Game", play_daily)
    .add_item("Play Random Game", play_random)
    .add_item("Show Game Statistics", show_user_game_stats)
    .add_item("Admin Menu", goto_admin_menu)
    .add_item("Log Out", log_out)
    .build(ADMIN_MAIN_MENU_NAME, "Main Menu")
)
ADMIN_MENU: Menu[Session] = (
    MenuBuilder[Session]()
    .add_item("Show All Games", show_all_games)
    .add_item("Return to Main Menu", continues_menu=False)
    .build(ADMIN_MENU_NAME, "Admin Menu")
)

MENUS = (LOGIN_MENU, MAIN_MENU, ADMIN_MAIN_MENU, ADMIN_MENU)


class Application:
    """Owns the session and runs the menu loop."""

    def __init__(self, session: Session, console: Console) -> None:
        self.session = session
        self.menu_system = MenuSystem(session, console, MENUS, LOGIN_MENU_NAME)
        session.menu_system = self.menu_system

    def run(self) -> bool:
        """Run until the user exits; return False if an unexpected error stopped the run."""
        try:
            self.session.view.display_welcome_message()
            self.menu_system.run()
        except (EOFError, KeyboardInterrupt):
            self.session.view.display_blank_line()
            logger.info("Input closed; exiting")
        except Exception:
            logger.exception("Unexpected error in menu loop")
            self.session.view.display_error_message(UNEXPECTED_ERROR_MESSAGE)
            return False
        return True


def build_application(settings: Settings, console: Console | None = None) -> Application:
    """Create services, view, and session for the given settings."""
    console = console if console is not None else Console()
    session = Session(
        view=ApplicationView(console),
        game_service=GameService(settings.api_base_url, timeout=settings.request_timeout),
        auth_service=AuthService(settings.api_base_url, timeout=settings.request_timeout),
    )
    return Application(session, console)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="terdle", description="Console client for the TErdle word game")
    parser.add_argument("--api-url", help="base URL of the game server REST API")
    parser.add_argument("--log-file", help="file to write the client log to")
    parser.add_argument("--log-level", help="logging level, e.g. DEBUG or INFO")
    return parser.parse_args(argv)


def run(argv: list[str] | None = None) -> int:
    """Run the CLI application."""
    args = parse_args(argv)
    settings = load_settings()
    if args.api_url:
        settings = replace(settings, api_base_url=normalize_base_url(args.api_url))
    if args.log_file:
        settings = replace(settings, log_file=args.log_file)
    if args.log_level:
        settings = replace(settings, log_level=args.log_level.upper())
    configure_logging(settings.log_file, settings.log_level)
    logger.info("Starting client against %s", settings.api_base_url)
    return 0 if build_application(settings).run() else 1


def main_entry() -> None:
    """Console script entrypoint."""
    raise SystemExit(run())


if __name__ == "__main__":  # pragma: no cover
    main_entry()
