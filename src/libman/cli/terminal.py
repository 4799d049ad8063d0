"""Blocking console prompts used by every shell."""

from __future__ import annotations

from collections.abc import Callable

import typer
from rich.console import Console

from libman.commands.parser import is_digits

Reader = Callable[[str], str]

_TRUE_WORDS = frozenset({"y", "yes", "true"})
_FALSE_WORDS = frozenset({"n", "no", "false"})


def typer_reader(text: str) -> str:
    """Read one line with Typer, returning an empty string for blank input.

    Args:
        text: Prompt text, printed verbatim.

    Returns:
        Line typed by the user.
    """
    return typer.prompt(text, default="", show_default=False, prompt_suffix="")


class Terminal:
    """Console output plus line-oriented input primitives."""

    def __init__(self, *, console: Console, reader: Reader | None = None) -> None:
        """Store console and input source.

        Args:
            console: Rich console used for output.
            reader: Optional line reader; defaults to `typer.prompt`.
        """
        self._console = console
        self._reader = reader or typer_reader

    @property
    def console(self) -> Console:
        """Return the output console."""
        return self._console

    def print(self, message: str = "") -> None:
        """Print text without interpreting Rich markup.

        Args:
            message: Text to print.
        """
        self._console.print(message, markup=False, highlight=False)

    def prompt(self, text: str) -> str:
        """Show a shell prompt and read one raw line.

        Args:
            text: Prompt text.

        Returns:
            Raw line, untrimmed.
        """
        return self._reader(f"{text} ")

    def read_input(self, text: str) -> str:
        """Ask a question and read a trimmed answer.

        Args:
            text: Question text.

        Returns:
            Answer with surrounding whitespace removed.
        """
        return self._reader(f"{text}: ").strip()

    def read_option(self, text: str) -> str | None:
        """Ask a question whose blank answer means "skip".

        Args:
            text: Question text.

        Returns:
            Answer, or None when left blank.
        """
        answer = self.read_input(text)
        return answer or None

    def read_bool(self, text: str) -> bool:
        """Ask a yes/no question until a valid answer is given.

        Args:
            text: Question text.

        Returns:
            True for yes, False for no.
        """
        while True:
            answer = self.read_input(f"{text} [y/n]").lower()
            if answer in _TRUE_WORDS:
                return True
            if answer in _FALSE_WORDS:
                return False
            self.print("please enter 'yes' or 'no'")

    def read_option_bool(self, text: str) -> bool | None:
        """Ask a yes/no question that may be skipped.

        Args:
            text: Question text.

        Returns:
            True, False, or None when left blank.
        """
        while True:
            answer = self.read_input(f"{text} [y/n/empty]").lower()
            if not answer:
                return None
            if answer in _TRUE_WORDS:
                return True
            if answer in _FALSE_WORDS:
                return False
            self.print("please enter 'yes', 'no' or nothing")

    def read_number(self, low: int, high: int) -> int | None:
        """Ask for an integer in `[low, high)`; blank cancels.

        Args:
            low: Smallest accepted value.
            high: Exclusive upper bound.

        Returns:
            Chosen number, or None when left blank.
        """
        while True:
            answer = self.read_input("number")
            if not answer:
                return None
            if is_digits(answer) and low <= int(answer) < high:
                return int(answer)
            self.print(f"please enter a number between {low} and {high - 1}")
