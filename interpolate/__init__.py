"""
Placeholder template parsing.

Rewrites ``{...}`` placeholders in message templates to canonical slot
markers and collects the named identifiers they reference.

Usage:
    from interpolate import parse_internal

    normalized, identifiers = parse_internal("Hello, {name}! You are {age}.")
    # normalized == "Hello, {__0}! You are {__1}."
    # identifiers == ("age", "name")
"""

from interpolate.parser import Interpolation, ParseResult, parse_internal, parse_many, parse_template
from interpolate.recovery import RecoveryReason
from interpolate.render import SLOT_PREFIX, slot_marker

__all__ = [
    "Interpolation",
    "ParseResult",
    "RecoveryReason",
    "SLOT_PREFIX",
    "parse_internal",
    "parse_many",
    "parse_template",
    "slot_marker",
]
