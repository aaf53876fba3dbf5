from __future__ import annotations

import io
import shutil
import sys
from collections.abc import Iterator
from pathlib import Path
from uuid import uuid4

import pytest
from rich.console import Console as RichConsole

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from terdle.console import Console  # noqa: E402


def _tmp_path_fixture() -> Iterator[Path]:
    """Provide per-test temporary directory path inside the workspace.

    This overrides pytest's builtin ``tmp_path`` fixture so temporary files
    stay under ``.tmp_pytest/`` in the project directory.
    """
    base = ROOT / ".tmp_pytest"
    base.mkdir(parents=True, exist_ok=True)
    path = base / str(uuid4())
    path.mkdir(parents=True, exist_ok=False)
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
        try:
            next(base.iterdir())
        except StopIteration:
            base.rmdir()
        except FileNotFoundError:
            pass


tmp_path = pytest.fixture(name="tmp_path")(_tmp_path_fixture)


class ScriptedConsole(Console):
    """Console fed from a list of inputs, recording prompts and plain-text output."""

    def __init__(self, inputs: list[str]) -> None:
        self.buffer = io.StringIO()
        self.prompts: list[str] = []
        self._inputs = iter(inputs)
        super().__init__(input_fn=self._next_input, output=RichConsole(file=self.buffer, width=120))

    def _next_input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        try:
            return next(self._inputs)
        except StopIteration:
            raise EOFError from None

    @property
    def text(self) -> str:
        return self.buffer.getvalue()


@pytest.fixture
def scripted_console() -> type[ScriptedConsole]:
    return ScriptedConsole
