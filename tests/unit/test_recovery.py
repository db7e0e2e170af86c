from __future__ import annotations

from interpolate.recovery import RecoveryLog, RecoveryReason, anomaly_reason, format_anomaly


def test_format_anomaly() -> None:
    assert format_anomaly(RecoveryReason.UNCLASSIFIABLE_BODY, 4) == "unclassifiable_body@4"
    assert format_anomaly(RecoveryReason.TEMPLATE_TOO_LARGE) == "template_too_large"


def test_anomaly_reason() -> None:
    assert anomaly_reason("stray_closing_brace@9") == "stray_closing_brace"
    assert anomaly_reason("template_too_large") == "template_too_large"


def test_recovery_log_records_in_order() -> None:
    log = RecoveryLog()
    log.record(RecoveryReason.UNCLASSIFIABLE_BODY, offset=0, raw="{0x}")
    log.record(RecoveryReason.UNTERMINATED_PLACEHOLDER, offset=7, raw="{")

    assert log.anomalies == ["unclassifiable_body@0", "unterminated_placeholder@7"]


def test_reason_is_str_enum() -> None:
    assert RecoveryReason("mixed_positional_numbering") is RecoveryReason.MIXED_POSITIONAL_NUMBERING
    assert RecoveryReason.MIXED_POSITIONAL_NUMBERING == "mixed_positional_numbering"
