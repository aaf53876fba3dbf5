"""Core domain models for rounds, letter matches, and users."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum

WORD_LENGTH = 5
MAX_GUESSES = 6
ADMIN_AUTHORITY = "ROLE_ADMIN"


class RoundFinished(Exception):
    """Raised when a guess is added to a round that is already solved or full."""


class MatchClass(Enum):
    """Per-letter feedback, best match first."""

    EXACT_MATCH = "EXACT_MATCH"
    WRONG_LOCATION = "WRONG_LOCATION"
    NO_MATCH = "NO_MATCH"


class RoundType(Enum):
    """Daily rounds are shared by everyone for one date; random rounds are one-offs."""

    DAILY = "DAILY"
    RANDOM = "RANDOM"


@dataclass(frozen=True)
class MatchedLetter:
    """One scored letter of a guess."""

    char: str
    match: MatchClass


def normalize_word(text: str) -> str:
    """Normalize user or server text into a comparable word."""
    return text.strip().lower()


def is_valid_word(text: str) -> bool:
    """Return whether text is exactly one five-letter word."""
    return len(text) == WORD_LENGTH and text.isalpha()


@dataclass
class GameRound:
    """One user's play of a round and the guesses made so far."""

    user_id: int
    type: RoundType
    round_id: int = 0
    word: str | None = None
    date: date | None = None
    guesses: list[str] = field(default_factory=list)
    success: bool = False

    @property
    def finished(self) -> bool:
        return self.success or len(self.guesses) >= MAX_GUESSES

    @property
    def last_guess(self) -> str:
        return self.guesses[-1] if self.guesses else ""

    def add_guess(self, guess: str) -> None:
        """Append a guess, marking the round solved when it matches the word."""
        if self.finished:
            raise RoundFinished(f"Round {self.round_id} is already finished.")
        normalized = normalize_word(guess)
        self.guesses.append(normalized)
        if self.word is not None and normalized == normalize_word(self.word):
            self.success = True

    def with_guess(self, guess: str) -> GameRound:
        """Return a copy of this round with one more guess appended."""
        candidate = replace(self, guesses=list(self.guesses))
        candidate.add_guess(guess)
        return candidate


@dataclass(frozen=True)
class Credentials:
    """Username and password entered at login."""

    username: str
    password: str


@dataclass(frozen=True)
class User:
    """Account details returned by the auth service."""

    id: int
    username: str
    authorities: tuple[str, ...] = ()

    @property
    def is_admin(self) -> bool:
        return ADMIN_AUTHORITY in self.authorities


@dataclass(frozen=True)
class AuthenticatedUser:
    """Logged-in user and the bearer token for API calls."""

    token: str
    user: User
