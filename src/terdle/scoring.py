"""Score guesses letter by letter against a target word."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from .models import GameRound, MatchClass, MatchedLetter, normalize_word


class LengthMismatch(ValueError):
    """Raised when a guess and its target word differ in length."""


def score(target: str, guess: str) -> list[MatchedLetter]:
    """Classify each guess letter as an exact match, wrong location, or no match.

    Exact matches are claimed first. Each remaining target letter can then
    credit at most one misplaced guess letter, scanning left to right, so a
    repeated guess letter is never credited more often than it occurs in the
    target.
    """
    target = normalize_word(target)
    guess = normalize_word(guess)
    if len(target) != len(guess):
        raise LengthMismatch(f"Guess '{guess}' has {len(guess)} letters; expected {len(target)}.")

    classes: list[MatchClass | None] = [None] * len(guess)
    available: Counter[str] = Counter()
    for index, (wanted, given) in enumerate(zip(target, guess)):
        if wanted == given:
            classes[index] = MatchClass.EXACT_MATCH
        else:
            available[wanted] += 1

    for index, given in enumerate(guess):
        if classes[index] is not None:
            continue
        if available[given] > 0:
            available[given] -= 1
            classes[index] = MatchClass.WRONG_LOCATION
        else:
            classes[index] = MatchClass.NO_MATCH

    return [MatchedLetter(char, match) for char, match in zip(guess, classes) if match is not None]


def is_solved(matches: Iterable[MatchedLetter]) -> bool:
    """Return whether every letter is an exact match."""
    letters = list(matches)
    return bool(letters) and all(letter.match is MatchClass.EXACT_MATCH for letter in letters)


def score_round(game_round: GameRound) -> list[list[MatchedLetter]]:
    """Score every guess of a round in submission order."""
    if game_round.word is None:
        return []
    return [score(game_round.word, guess) for guess in game_round.guesses]
