"""Console input and output primitives."""

from __future__ import annotations

from collections.abc import Callable

from rich.console import Console as RichConsole
from rich.console import RenderableType
from rich.padding import Padding
from rich.text import Text

InputFn = Callable[[str], str]

ERROR_STYLE = "black on red"


class Console:
    """Read lines through `input_fn` and write text through a rich console."""

    def __init__(self, input_fn: InputFn = input, output: RichConsole | None = None) -> None:
        self._input_fn = input_fn
        self.output = output if output is not None else RichConsole(highlight=False)

    def print_line(self, text: str = "") -> None:
        self.output.print(Text(text))

    def print_styled(self, text: str, style: str) -> None:
        self.output.print(Text(text, style=style))

    def print_renderable(self, renderable: RenderableType) -> None:
        self.output.print(renderable)

    def print_blank_line(self) -> None:
        self.output.print()

    def print_banner(self, text: str, style: str = "") -> None:
        """Print text on a padded, styled band."""
        self.output.print(Padding(Text(text), (0, 1), style=style, expand=False))

    def print_error(self, text: str) -> None:
        self.print_banner(text, ERROR_STYLE)

    def read_line(self, prompt: str) -> str:
        return self._input_fn(prompt)

    def read_integer(self, prompt: str) -> int | None:
        """Read an integer, or None when the entry is blank."""
        while True:
            entry = self.read_line(prompt).strip()
            if not entry:
                return None
            try:
                return int(entry)
            except ValueError:
                self.print_error("Enter a number, please")
