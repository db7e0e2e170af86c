from __future__ import annotations

from interpolate.recovery import RecoveryLog, RecoveryReason
from interpolate.render import SLOT_PREFIX, render, slot_marker
from interpolate.scanner import Literal, Malformed, Placeholder, scan


def test_slot_marker() -> None:
    assert SLOT_PREFIX == "__"
    assert slot_marker(3) == "{__3}"
    assert slot_marker(3, "04x") == "{__3:04x}"
    assert slot_marker(0, "") == "{__0:}"


def test_render_tokens_directly() -> None:
    recovery = RecoveryLog()
    tokens = [
        Literal("Hi "),
        Placeholder("name", 3),
        Literal(", "),
        Placeholder("", 11),
        Malformed("}", RecoveryReason.STRAY_CLOSING_BRACE, 13),
    ]

    outcome = render(tokens, recovery=recovery)

    assert outcome.text == "Hi {__1}, {__0}}"
    assert outcome.named_offset == 1
    assert outcome.registry.identifiers == ("name",)
    assert recovery.anomalies == ["stray_closing_brace@13"]


def test_named_offset_zero_without_positional() -> None:
    outcome = render(scan("{a} {b}"), recovery=RecoveryLog())

    assert outcome.named_offset == 0
    assert outcome.text == "{__0} {__1}"


def test_named_offset_follows_highest_explicit_index() -> None:
    outcome = render(scan("{5} {name} {}"), recovery=RecoveryLog())

    assert outcome.named_offset == 6
    assert outcome.text == "{__5} {__6} {__0}"


def test_placeholder_count_excludes_demoted() -> None:
    outcome = render(scan("{a} {0x} {} {"), recovery=RecoveryLog())

    assert outcome.placeholder_count == 2
    assert outcome.kind_counts == {"named": 1, "explicit": 0, "implicit": 1}
