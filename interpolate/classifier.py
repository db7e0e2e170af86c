"""Placeholder classification: named, explicit positional or implicit positional."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

SPEC_SEPARATOR = ":"

_DIGITS_PATTERN = re.compile(r"[0-9]+")


@dataclass(slots=True, frozen=True)
class Named:
    identifier: str


@dataclass(slots=True, frozen=True)
class PositionalExplicit:
    index: int


@dataclass(slots=True, frozen=True)
class PositionalImplicit:
    pass


PlaceholderKind = Union[Named, PositionalExplicit, PositionalImplicit]


@dataclass(slots=True, frozen=True)
class Classification:
    kind: PlaceholderKind
    spec: str | None = None

    @property
    def kind_name(self) -> str:
        if isinstance(self.kind, Named):
            return "named"
        if isinstance(self.kind, PositionalExplicit):
            return "explicit"
        return "implicit"


def split_body(body: str) -> tuple[str, str | None]:
    """Split a placeholder body at the first ``:``.

    Returns ``(name_part, spec_part)``; ``spec_part`` is ``None`` when the body
    has no separator and ``""`` for a trailing bare ``:``.
    """
    name_part, separator, spec_part = body.partition(SPEC_SEPARATOR)
    if not separator:
        return name_part, None
    return name_part, spec_part


def classify(body: str) -> Classification | None:
    """Classify a placeholder body, or return None when it fits no kind.

    Digits are ASCII only; identifiers follow ``str.isidentifier``.
    """
    name_part, spec = split_body(body)
    if not name_part:
        return Classification(PositionalImplicit(), spec)
    if _DIGITS_PATTERN.fullmatch(name_part):
        return Classification(PositionalExplicit(int(name_part)), spec)
    if name_part.isidentifier():
        return Classification(Named(name_part), spec)
    return None
