"""Recovery policy for malformed template input.

Nothing in the parser raises. Every malformed span is demoted to literal text
and the reason is recorded here so callers can inspect what was recovered.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

LOGGER = logging.getLogger(__name__)


class RecoveryReason(str, Enum):
    """Why a span of the template was demoted or resolved by fixed policy."""

    UNTERMINATED_PLACEHOLDER = "unterminated_placeholder"
    UNCLASSIFIABLE_BODY = "unclassifiable_body"
    MIXED_POSITIONAL_NUMBERING = "mixed_positional_numbering"
    STRAY_CLOSING_BRACE = "stray_closing_brace"
    TEMPLATE_TOO_LARGE = "template_too_large"


def format_anomaly(reason: RecoveryReason, offset: int | None = None) -> str:
    if offset is None:
        return reason.value
    return f"{reason.value}@{offset}"


def anomaly_reason(entry: str) -> str:
    """Return the reason part of an anomaly entry (``reason@offset``)."""
    return entry.partition("@")[0]


@dataclass(slots=True)
class RecoveryLog:
    """Per-call record of recovered spans."""

    anomalies: list[str] = field(default_factory=list)

    def record(self, reason: RecoveryReason, *, offset: int | None = None, raw: str = "") -> None:
        self.anomalies.append(format_anomaly(reason, offset))
        LOGGER.debug(
            "placeholder_demoted",
            extra={"reason": reason.value, "offset": offset, "length": len(raw)},
        )
