"""Single-pass scanner that splits a template into literal runs and placeholders."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from interpolate.recovery import RecoveryReason

OPEN_BRACE = "{"
CLOSE_BRACE = "}"

_BRACE_PATTERN = re.compile(r"[{}]")


@dataclass(slots=True, frozen=True)
class Literal:
    """Literal text with escaped braces already decoded."""

    text: str


@dataclass(slots=True, frozen=True)
class Placeholder:
    """A ``{...}`` span; ``body`` is the text between the braces."""

    body: str
    start: int

    @property
    def raw(self) -> str:
        return f"{OPEN_BRACE}{self.body}{CLOSE_BRACE}"


@dataclass(slots=True, frozen=True)
class Malformed:
    """Source text that could not be delimited and is copied through verbatim."""

    raw: str
    reason: RecoveryReason
    start: int


Token = Union[Literal, Placeholder, Malformed]


def scan(template: str) -> Iterator[Token]:
    """Yield the tokens of ``template`` from left to right.

    ``{{`` and ``}}`` collapse to single braces inside literal runs. A ``{``
    without a closing ``}`` turns the rest of the input into one verbatim
    ``Malformed`` token, so the tokens always cover the whole input.
    """

    length = len(template)
    cursor = 0
    buffer: list[str] = []

    while cursor < length:
        match = _BRACE_PATTERN.search(template, cursor)
        if match is None:
            buffer.append(template[cursor:])
            break

        position = match.start()
        if position > cursor:
            buffer.append(template[cursor:position])
        brace = match.group()

        if template.startswith(brace, position + 1):
            buffer.append(brace)
            cursor = position + 2
            continue

        if buffer:
            yield Literal("".join(buffer))
            buffer = []

        if brace == CLOSE_BRACE:
            yield Malformed(CLOSE_BRACE, RecoveryReason.STRAY_CLOSING_BRACE, position)
            cursor = position + 1
            continue

        close = template.find(CLOSE_BRACE, position + 1)
        if close == -1:
            yield Malformed(template[position:], RecoveryReason.UNTERMINATED_PLACEHOLDER, position)
            return

        yield Placeholder(template[position + 1 : close], position)
        cursor = close + 1

    if buffer:
        yield Literal("".join(buffer))
