"""User-facing prompts, messages, and tables."""

from __future__ import annotations

from collections.abc import Sequence

from rich.table import Table
from rich.text import Text

from .console import Console
from .models import Credentials, GameRound, MatchClass, MatchedLetter
from .stats import StatsSummary

WELCOME_STYLE = "bold green"
ERROR_STYLE = "red"
SUCCESS_STYLE = "green"
HEADER_STYLE = "bold italic black on white"
SOLVED_ROW_STYLE = "black on green"
SUMMARY_STYLE = "black on magenta"

MATCH_STYLES = {
    MatchClass.EXACT_MATCH: "bold white on green",
    MatchClass.WRONG_LOCATION: "bold black on yellow",
    MatchClass.NO_MATCH: "bold black on white",
}


class ApplicationView:
    """Gather input from and present information to the player."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def display_blank_line(self) -> None:
        self.console.print_blank_line()

    def display_message(self, message: str) -> None:
        self.console.print_line(message)

    def display_error_message(self, message: str) -> None:
        self.console.print_styled(message, ERROR_STYLE)
        self.console.print_blank_line()

    def display_success_message(self, message: str) -> None:
        self.console.print_styled(message, SUCCESS_STYLE)
        self.console.print_blank_line()

    def display_welcome_message(self) -> None:
        self.console.print_banner("Welcome to TErdle!", WELCOME_STYLE)
        self.console.print_blank_line()

    def prompt_for_credentials(self) -> Credentials:
        self.console.print_line("Please login.")
        username = self.console.read_line("Username: ")
        password = self.console.read_line("Password: ")
        return Credentials(username, password)

    def prompt_for_guess(self, guess_number: int) -> str:
        return self.console.read_line(f"Enter guess number {guess_number}: ").strip().lower()

    def display_matches(self, rows: Sequence[Sequence[MatchedLetter]]) -> None:
        """Show each scored guess as a row of colored letter cells."""
        for row in rows:
            line = Text()
            for letter in row:
                line.append(f" {letter.char.upper()} ", style=MATCH_STYLES[letter.match])
                line.append(" ")
            self.console.print_renderable(line)

    def display_round_history(self, rounds: Sequence[GameRound]) -> None:
        table = Table(header_style=HEADER_STYLE)
        for heading in ("Date", "Word", "Last Guess", "Guesses", "Type"):
            table.add_column(heading, justify="center")
        for game_round in rounds:
            table.add_row(
                game_round.date.isoformat() if game_round.date else "",
                game_round.word or "",
                game_round.last_guess,
                str(len(game_round.guesses)),
                game_round.type.name,
                style=SOLVED_ROW_STYLE if game_round.success else None,
            )
        self.console.print_renderable(table)

    def display_stats_summary(self, summary: StatsSummary) -> None:
        table = Table(show_header=False)
        table.add_column(style=HEADER_STYLE)
        table.add_column(style=SUMMARY_STYLE, justify="right")
        table.add_row("Games started", str(summary.games_started))
        table.add_row("Games completed", str(summary.games_completed))
        table.add_row("Games won", str(summary.games_won))
        table.add_row("Games won %", f"{summary.win_percentage:.1f}")
        table.add_row("Average Guesses", f"{summary.average_guesses:.2f}")
        self.console.print_renderable(table)

    def display_game_list(self, rounds: Sequence[GameRound] | None) -> None:
        if not rounds:
            self.display_error_message("There are no games to show.")
            return
        table = Table(title="All Games")
        table.add_column("Id", justify="right")
        table.add_column("Date")
        table.add_column("Word")
        table.add_column("Type")
        for game_round in rounds:
            table.add_row(
                str(game_round.round_id),
                game_round.date.isoformat() if game_round.date else "",
                game_round.word or "",
                game_round.type.name,
            )
        self.console.print_renderable(table)
