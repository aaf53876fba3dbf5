"""HTTP clients for the game and authentication REST API.

Failures never escape these classes: they are logged and reported to callers
as `None` or `False`.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, cast

import requests

from .config import DEFAULT_REQUEST_TIMEOUT, normalize_base_url
from .models import AuthenticatedUser, Credentials, GameRound, RoundType, User

logger = logging.getLogger(__name__)

# Transport failures and malformed payloads.
API_ERRORS = (requests.RequestException, ValueError, TypeError, KeyError)


def round_from_json(raw: object) -> GameRound:
    """Build a round from an API payload."""
    if not isinstance(raw, dict):
        raise ValueError("Game payload must be a JSON object.")
    data = cast(dict[str, Any], raw)
    date_raw = data.get("date")
    guesses_raw = data.get("guesses") or []
    if not isinstance(guesses_raw, list):
        raise ValueError("Game guesses must be a list.")
    return GameRound(
        user_id=int(data.get("userId") or 0),
        round_id=int(data.get("gameId") or 0),
        type=RoundType(str(data.get("type", RoundType.RANDOM.value)).upper()),
        word=str(data["word"]).lower() if data.get("word") else None,
        date=date.fromisoformat(date_raw) if isinstance(date_raw, str) and date_raw else None,
        guesses=[str(guess).lower() for guess in guesses_raw],
        success=bool(data.get("success", False)),
    )


def round_to_json(game_round: GameRound) -> dict[str, Any]:
    """Serialize a round for POST and PUT requests."""
    return {
        "gameId": game_round.round_id,
        "userId": game_round.user_id,
        "word": game_round.word,
        "date": game_round.date.isoformat() if game_round.date else None,
        "type": game_round.type.value,
        "guesses": list(game_round.guesses),
        "success": game_round.success,
    }


def user_from_json(raw: object) -> AuthenticatedUser:
    """Build an authenticated user from a login response."""
    if not isinstance(raw, dict):
        raise ValueError("Login payload must be a JSON object.")
    data = cast(dict[str, Any], raw)
    user_raw = data.get("user")
    if not isinstance(user_raw, dict):
        raise ValueError("Login payload is missing the user.")
    authorities: list[str] = []
    for item in user_raw.get("authorities") or []:
        name = item.get("name") if isinstance(item, dict) else item
        if name:
            authorities.append(str(name))
    user = User(id=int(user_raw["id"]), username=str(user_raw.get("username", "")), authorities=tuple(authorities))
    return AuthenticatedUser(token=str(data["token"]), user=user)


class _ApiClient:
    """Shared request plumbing for API clients."""

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self.base_url = normalize_base_url(base_url)
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.auth_token: str | None = None

    def set_auth_token(self, token: str | None) -> None:
        """Use `token` as the bearer credential for later requests."""
        self.auth_token = token

    def _headers(self) -> dict[str, str]:
        if not self.auth_token:
            return {}
        return {"Authorization": f"Bearer {self.auth_token}"}

    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> object:
        """Send one request and return the decoded JSON body (None when empty)."""
        response = self.session.request(
            method,
            self.base_url + path,
            json=payload,
            headers=self._headers(),
            timeout=self.timeout,
        )
        if response.status_code >= 400:
            logger.warning("%s %s failed: %s %s", method, path, response.status_code, response.text)
            response.raise_for_status()
        if not response.content:
            return None
        return response.json()


class AuthService(_ApiClient):
    """Log users in against the REST API."""

    def login(self, credentials: Credentials) -> AuthenticatedUser | None:
        payload = {"username": credentials.username, "password": credentials.password}
        try:
            authenticated = user_from_json(self._request("POST", "login", payload))
        except API_ERRORS as exc:
            logger.info("Login failed for %s: %s", credentials.username, exc)
            return None
        logger.info("Logged in %s (id %d)", authenticated.user.username, authenticated.user.id)
        return authenticated


class GameService(_ApiClient):
    """Fetch, create, and update rounds through the REST API."""

    def get_todays_round(self) -> GameRound | None:
        """Return today's daily round, or None if there is none yet."""
        try:
            raw = self._request("GET", "games/today")
            return None if raw is None else round_from_json(raw)
        except API_ERRORS as exc:
            logger.warning("Could not load today's game: %s", exc)
            return None

    def list_all_games(self) -> list[GameRound] | None:
        try:
            raw = self._request("GET", "games")
            return [round_from_json(item) for item in _as_list(raw)]
        except API_ERRORS as exc:
            logger.warning("Could not list games: %s", exc)
            return None

    def create_round(self, user_id: int, round_type: RoundType) -> GameRound | None:
        """Start a new round for the user."""
        new_round = GameRound(user_id=user_id, type=round_type)
        try:
            created = round_from_json(self._request("POST", f"users/{user_id}/games", round_to_json(new_round)))
        except API_ERRORS as exc:
            logger.warning("Could not create %s game for user %d: %s", round_type.name, user_id, exc)
            return None
        logger.info("Created %s game %d for user %d", round_type.name, created.round_id, user_id)
        return created

    def submit_guess(self, game_round: GameRound) -> bool:
        """Save the round with its newest guess; False means the guess was rejected."""
        path = f"users/{game_round.user_id}/games/{game_round.round_id}"
        try:
            self._request("PUT", path, round_to_json(game_round))
        except requests.RequestException as exc:
            logger.info("Guess '%s' rejected for game %d: %s", game_round.last_guess, game_round.round_id, exc)
            return False
        return True

    def fetch_round(self, user_id: int, round_id: int) -> GameRound | None:
        """Return the user's authoritative copy of a round, or None."""
        try:
            raw = self._request("GET", f"users/{user_id}/games/{round_id}")
            return None if raw is None else round_from_json(raw)
        except API_ERRORS as exc:
            logger.warning("Could not load game %d for user %d: %s", round_id, user_id, exc)
            return None

    def list_rounds(self, user_id: int) -> list[GameRound] | None:
        try:
            raw = self._request("GET", f"users/{user_id}/games")
            return [round_from_json(item) for item in _as_list(raw)]
        except API_ERRORS as exc:
            logger.warning("Could not list games for user %d: %s", user_id, exc)
            return None


def _as_list(raw: object) -> list[object]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError("Expected a JSON list.")
    return cast(list[object], raw)
