"""Play daily and random rounds for the logged-in user."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .models import MAX_GUESSES, AuthenticatedUser, GameRound, RoundType, is_valid_word
from .scoring import score_round
from .service import AuthService, GameService
from .view import ApplicationView

if TYPE_CHECKING:
    from .menus import MenuSystem

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """State shared by every menu action for one run of the client."""

    view: ApplicationView
    game_service: GameService
    auth_service: AuthService
    current_user: AuthenticatedUser | None = None
    menu_system: MenuSystem[Session] | None = None

    @property
    def user_id(self) -> int:
        if self.current_user is None:
            raise RuntimeError("No user is logged in.")
        return self.current_user.user.id


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def play_daily(session: Session) -> None:
    """Resume today's round, or start it if this user has not played yet."""
    user_id = session.user_id
    game_round: GameRound | None = None
    todays = session.game_service.get_todays_round()
    if todays is not None:
        game_round = session.game_service.fetch_round(user_id, todays.round_id)
    if game_round is None:
        game_round = session.game_service.create_round(user_id, RoundType.DAILY)
    _play_or_report(session, game_round)


def play_random(session: Session) -> None:
    """Start a fresh random round."""
    _play_or_report(session, session.game_service.create_round(session.user_id, RoundType.RANDOM))


def _play_or_report(session: Session, game_round: GameRound | None) -> None:
    if game_round is None:
        session.view.display_error_message("Could not start a game. Please try again later.")
        return
    play_round(session, game_round)


def play_round(session: Session, game_round: GameRound) -> GameRound:
    """Prompt for guesses until the round is solved or out of guesses.

    The server owns the round: after each accepted submission the round is
    fetched again and its guesses and success flag replace the local copy.
    Returns the last known state of the round.
    """
    view = session.view
    service = session.game_service

    made = len(game_round.guesses)
    if made > 0:
        view.display_blank_line()
        view.display_message(
            f"You have already played this game and made {made} {_plural(made, 'guess', 'guesses')}."
        )
        view.display_matches(score_round(game_round))

    while not game_round.success and len(game_round.guesses) < MAX_GUESSES:
        guess = view.prompt_for_guess(len(game_round.guesses) + 1)
        if not is_valid_word(guess):
            view.display_error_message(f"{guess} is not a valid 5 letter word!")
            continue
        if not service.submit_guess(game_round.with_guess(guess)):
            view.display_error_message(f"{guess} is not a valid 5 letter word!")
            continue

        refreshed = service.fetch_round(game_round.user_id, game_round.round_id)
        if refreshed is None:
            view.display_error_message("Could not load your game. Please try again later.")
            return game_round
        game_round = refreshed
        view.display_matches(score_round(game_round))

    count = len(game_round.guesses)
    if game_round.success:
        logger.info("User %d solved game %d in %d", game_round.user_id, game_round.round_id, count)
        view.display_success_message(f"You got it in {count} {_plural(count, 'try', 'tries')}!")
    else:
        logger.info("User %d missed game %d", game_round.user_id, game_round.round_id)
        view.display_message(
            f"Sorry, you didn't get it.  The word you are looking for is {(game_round.word or '').upper()}."
        )
    return game_round
