"""Reassemble scanned tokens into the normalized template."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from interpolate.classifier import Named, PositionalExplicit, classify
from interpolate.recovery import RecoveryLog, RecoveryReason
from interpolate.registry import IdentifierRegistry
from interpolate.scanner import Literal, Malformed, Token

SLOT_PREFIX = "__"


def slot_marker(slot: int, spec: str | None = None) -> str:
    """Return the canonical marker for ``slot``: ``{__N}`` or ``{__N:spec}``."""
    if spec is None:
        return f"{{{SLOT_PREFIX}{slot}}}"
    return f"{{{SLOT_PREFIX}{slot}:{spec}}}"


@dataclass(slots=True, frozen=True)
class _NamedRef:
    slot: int
    spec: str | None


@dataclass(slots=True)
class RenderOutcome:
    text: str
    registry: IdentifierRegistry
    named_offset: int = 0
    kind_counts: dict[str, int] = field(default_factory=dict)

    @property
    def placeholder_count(self) -> int:
        return sum(self.kind_counts.values())


def render(tokens: Iterable[Token], *, recovery: RecoveryLog) -> RenderOutcome:
    """Render tokens, numbering implicit placeholders from 0.

    Explicit indices are emitted as-is and do not advance the implicit
    counter. Named identifiers are numbered after the highest positional slot
    in the template, so their markers are emitted once the scan is complete.
    """

    parts: list[str | _NamedRef] = []
    registry = IdentifierRegistry()
    kind_counts = {"named": 0, "explicit": 0, "implicit": 0}
    implicit_counter = 0
    max_positional = -1
    mixed_reported = False

    for token in tokens:
        if isinstance(token, Literal):
            parts.append(token.text)
            continue

        if isinstance(token, Malformed):
            recovery.record(token.reason, offset=token.start, raw=token.raw)
            parts.append(token.raw)
            continue

        classification = classify(token.body)
        if classification is None:
            recovery.record(RecoveryReason.UNCLASSIFIABLE_BODY, offset=token.start, raw=token.raw)
            parts.append(token.raw)
            continue

        kind = classification.kind
        kind_counts[classification.kind_name] += 1

        if isinstance(kind, Named):
            parts.append(_NamedRef(registry.register(kind.identifier), classification.spec))
            continue

        if isinstance(kind, PositionalExplicit):
            slot = kind.index
        else:
            slot = implicit_counter
            implicit_counter += 1

        if not mixed_reported and kind_counts["explicit"] and kind_counts["implicit"]:
            recovery.record(RecoveryReason.MIXED_POSITIONAL_NUMBERING, offset=token.start)
            mixed_reported = True

        max_positional = max(max_positional, slot)
        parts.append(slot_marker(slot, classification.spec))

    named_offset = max_positional + 1
    text = "".join(
        part if isinstance(part, str) else slot_marker(named_offset + part.slot, part.spec)
        for part in parts
    )
    return RenderOutcome(
        text=text,
        registry=registry,
        named_offset=named_offset,
        kind_counts=kind_counts,
    )
