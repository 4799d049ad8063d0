"""Deterministic input tokenizer for shell command lines."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict

_FIRST_WHITESPACE_RUN = re.compile(r"\s+")
_VOLUME_DELTA = re.compile(r"^\s*([-+])\s*(\d+)\s*$")


class IndexParseError(ValueError):
    """Raised when an index argument is not a non-negative integer."""


class IndexRangeError(ValueError):
    """Raised when an index argument falls outside the browsed collection."""

    def __init__(self, index: int, size: int) -> None:
        """Store the rejected index and the collection size.

        Args:
            index: Parsed index.
            size: Number of items available.
        """
        super().__init__(f"please enter a number between 0 and {size - 1}")
        self.index = index
        self.size = size


class CommandCall(BaseModel):
    """One tokenized command line."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    arg: str | None = None
    raw: str


def split_command(line: str) -> tuple[str, str | None]:
    """Split a line into command token and optional argument.

    Only the first whitespace run separates the two parts. The argument keeps
    its inner and trailing whitespace verbatim; an empty or all-whitespace
    remainder is reported as None.

    Args:
        line: One line of input without its record separator.

    Returns:
        Command token and argument (or None).
    """
    match = _FIRST_WHITESPACE_RUN.search(line)
    if match is None:
        return line, None
    command = line[: match.start()]
    argument = line[match.end() :]
    if not argument.strip():
        return command, None
    return command, argument


def parse_command(line: str) -> CommandCall:
    """Tokenize a line into a `CommandCall`.

    Args:
        line: Raw input line.

    Returns:
        Normalized call carrying the original text.
    """
    name, arg = split_command(line)
    return CommandCall(name=name, arg=arg, raw=line)


def is_digits(token: str) -> bool:
    """Return whether a token is made only of ASCII decimal digits.

    Args:
        token: Candidate index token.

    Returns:
        True for non-empty ASCII digit strings.
    """
    return bool(token) and token.isascii() and token.isdigit()


def parse_volume_delta(line: str) -> int | None:
    """Parse the `+N` / `-N` volume shorthand.

    Args:
        line: Raw input line.

    Returns:
        Signed delta, or None when the line is not the shorthand.
    """
    match = _VOLUME_DELTA.match(line)
    if match is None:
        return None
    magnitude = int(match.group(2))
    return magnitude if match.group(1) == "+" else -magnitude


def parse_index(token: str, size: int) -> int:
    """Parse and range-check a 0-based index.

    Args:
        token: Index text.
        size: Number of items available.

    Returns:
        Validated index.

    Raises:
        IndexParseError: If the token is not a non-negative integer.
        IndexRangeError: If the index is not below `size`.
    """
    if not is_digits(token):
        raise IndexParseError(f"{token!r} is not a valid index")
    index = int(token)
    if index >= size:
        raise IndexRangeError(index, size)
    return index
