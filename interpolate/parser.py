"""Template parsing entry points.

``parse_internal`` is the minimal contract used by formatting layers: it
returns the normalized template and the sorted named identifiers.
``parse_template`` returns the full ``ParseResult`` with slot assignments and
recovery anomalies. Neither ever raises on template content.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any

from interpolate.recovery import RecoveryLog
from interpolate.render import SLOT_PREFIX, render
from interpolate.scanner import scan

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ParseResult:
    """Outcome of parsing one template."""

    normalized: str
    identifiers: tuple[str, ...] = ()
    slots: dict[str, int] = field(default_factory=dict)
    kind_counts: dict[str, int] = field(default_factory=dict)
    anomalies: list[str] = field(default_factory=list)

    @property
    def placeholder_count(self) -> int:
        return sum(self.kind_counts.values())

    def as_tuple(self) -> tuple[str, tuple[str, ...]]:
        return self.normalized, self.identifiers

    def asdict(self) -> dict[str, Any]:
        return {
            "normalized": self.normalized,
            "identifiers": list(self.identifiers),
            "slots": dict(self.slots),
            "placeholder_count": self.placeholder_count,
            "anomalies": list(self.anomalies),
        }


def parse_template(template: str | None) -> ParseResult:
    """Parse a template into its normalized form.

    Args:
        template: Template text (None becomes empty string)

    Returns:
        ParseResult with the normalized template, sorted identifiers, the
        slot of each identifier and any recovered anomalies
    """
    start_time = perf_counter()

    if template is None:
        template = ""
    if not isinstance(template, str):
        template = str(template)

    recovery = RecoveryLog()
    outcome = render(scan(template), recovery=recovery)

    LOGGER.debug(
        "parsed template",
        extra={
            "length": len(template),
            "placeholders": outcome.placeholder_count,
            "identifiers": len(outcome.registry),
            "anomalies": recovery.anomalies,
            "elapsed_ms": (perf_counter() - start_time) * 1000,
        },
    )

    return ParseResult(
        normalized=outcome.text,
        identifiers=outcome.registry.identifiers,
        slots=outcome.registry.slots(offset=outcome.named_offset),
        kind_counts=outcome.kind_counts,
        anomalies=recovery.anomalies,
    )


def parse_internal(template: str) -> tuple[str, tuple[str, ...]]:
    """Return ``(normalized, identifiers)`` for ``template``.

    Placeholders become ``{__N}`` or ``{__N:spec}``, ``{{`` and ``}}`` become
    single braces and malformed placeholders are copied through unchanged.
    Positional placeholders never appear in ``identifiers``.
    """
    return parse_template(template).as_tuple()


def parse_many(templates: Iterable[str | None]) -> list[ParseResult]:
    """Parse a collection of templates eagerly."""
    return [parse_template(template) for template in templates]


@dataclass(slots=True, frozen=True)
class Interpolation:
    """A parsed template bound to the message it belongs to.

    ``source`` labels the owner of the template (an enum member, a catalog
    key); the parser never inspects it.
    """

    source: Any
    rewritten_text: str
    identifiers: tuple[str, ...]
    slots: Mapping[str, int]

    @classmethod
    def parse(cls, template: str, *, source: Any = None) -> Interpolation:
        return cls.from_result(parse_template(template), source=source)

    @classmethod
    def from_result(cls, result: ParseResult, *, source: Any = None) -> Interpolation:
        return cls(
            source=source,
            rewritten_text=result.normalized,
            identifiers=result.identifiers,
            slots=result.slots,
        )

    def used_fields(self, fields: Iterable[str]) -> list[str]:
        """Return the given field names that the template references, in order."""
        return [name for name in fields if name in self.slots]

    def bindings(self, fields: Iterable[str]) -> dict[str, str]:
        """Map each referenced field's slot keyword (``__N``) to the field name.

        Fields the template does not reference need no binding and are left out.
        """
        return {f"{SLOT_PREFIX}{self.slots[name]}": name for name in self.used_fields(fields)}
