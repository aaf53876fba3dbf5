from datetime import date
from typing import Any

from terdle.models import GameRound, RoundType
from terdle.scoring import score
from terdle.stats import StatsSummary
from terdle.view import ApplicationView


def test_read_integer_returns_none_on_blank(scripted_console: Any) -> None:
    console = scripted_console(["   "])
    assert console.read_integer("Pick: ") is None


def test_read_integer_reprompts_until_number(scripted_console: Any) -> None:
    console = scripted_console(["x", "4.5", " 12 "])
    assert console.read_integer("Pick: ") == 12
    assert console.prompts == ["Pick: "] * 3
    assert console.text.count("Enter a number, please") == 2


def test_banner_and_lines(scripted_console: Any) -> None:
    console = scripted_console([])
    console.print_banner("Main Menu", "bold white on blue")
    console.print_line("1) [Play]")
    assert "Main Menu" in console.text
    assert "1) [Play]" in console.text


def test_prompts(scripted_console: Any) -> None:
    console = scripted_console(["alice", "secret", " TRAIN "])
    view = ApplicationView(console)
    credentials = view.prompt_for_credentials()
    assert (credentials.username, credentials.password) == ("alice", "secret")
    assert view.prompt_for_guess(3) == "train"
    assert console.prompts == ["Username: ", "Password: ", "Enter guess number 3: "]


def test_display_matches_upper_cases_letters(scripted_console: Any) -> None:
    console = scripted_console([])
    ApplicationView(console).display_matches([score("train", "crate"), score("train", "train")])
    lines = [line.strip() for line in console.text.splitlines()]
    assert lines == ["C   R   A   T   E", "T   R   A   I   N"]


def test_round_history_and_summary(scripted_console: Any) -> None:
    console = scripted_console([])
    view = ApplicationView(console)
    rounds = [
        GameRound(1, RoundType.DAILY, 3, "train", date(2024, 5, 1), ["crate", "train"], True),
        GameRound(1, RoundType.RANDOM, 4, "error", None, [], False),
    ]
    view.display_round_history(rounds)
    view.display_stats_summary(StatsSummary(2, 1, 1, 100.0, 2.0))
    text = console.text
    assert "2024-05-01" in text
    assert "DAILY" in text and "RANDOM" in text
    assert "Last Guess" in text
    assert "Games won %" in text
    assert "100.0" in text
    assert "2.00" in text


def test_game_list_empty_shows_error(scripted_console: Any) -> None:
    console = scripted_console([])
    ApplicationView(console).display_game_list([])
    assert "There are no games to show." in console.text
