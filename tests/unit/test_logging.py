"""Unit tests for femtologging integration helpers.

Run with:
    pytest tests/unit/test_logging.py
"""

from __future__ import annotations

import pytest

from releasescope.logging import (
    configure_logging,
    format_log_message,
    log_debug,
    log_error,
    log_exception,
    log_info,
    log_warning,
    normalize_log_level,
)
from tests.helpers.logging_doubles import FakeLogger


class TestNormalizeLogLevel:
    """Tests for normalize_log_level."""

    @pytest.mark.parametrize(
        ("input_level", "expected_level", "expected_invalid"),
        [
            pytest.param("warning", "WARNING", False, id="lower-case"),
            pytest.param(" debug ", "DEBUG", False, id="padded"),
            pytest.param(None, "INFO", True, id="missing"),
            pytest.param("", "INFO", True, id="empty"),
            pytest.param("nope", "INFO", True, id="unknown"),
        ],
    )
    def test_normalize_log_level(
        self,
        input_level: str | None,
        expected_level: str,
        expected_invalid: bool,  # noqa: FBT001
    ) -> None:
        """Normalize log levels and flag invalid inputs."""
        level, invalid = normalize_log_level(input_level)
        assert level == expected_level, (
            f"Expected {input_level!r} to normalize to {expected_level}."
        )
        assert invalid is expected_invalid, (
            f"Expected invalid flag to be {expected_invalid} for {input_level!r}."
        )


def test_format_log_message_uses_percent_formatting() -> None:
    """Percent formatting produces the expected message."""
    message = format_log_message("cached %s for %d ms", "dashboard", 900000)
    assert message == "cached dashboard for 900000 ms", "wrong formatting result"


def test_format_log_message_without_args_keeps_percent_signs() -> None:
    """Templates without arguments are returned untouched."""
    assert format_log_message("100% cached") == "100% cached"


@pytest.mark.parametrize(
    ("emit", "level"),
    [
        pytest.param(log_debug, "DEBUG", id="debug"),
        pytest.param(log_info, "INFO", id="info"),
        pytest.param(log_warning, "WARNING", id="warning"),
        pytest.param(log_error, "ERROR", id="error"),
    ],
)
def test_level_helpers_format_and_pass_level(emit: object, level: str) -> None:
    """Every helper formats its message and emits its own level."""
    logger = FakeLogger()

    emit(logger, "key=%s", "raw-data")  # type: ignore[operator]  # parametrized helper

    assert logger.calls == [(level, "key=raw-data", None, False)], (
        f"Expected a single {level} entry with stack_info disabled."
    )


def test_log_warning_forwards_exc_info() -> None:
    """log_warning forwards exc_info to the logger."""
    logger = FakeLogger()
    exc = ValueError("boom")

    log_warning(logger, "warning: %s", "oops", exc_info=exc)

    assert logger.calls == [("WARNING", "warning: oops", exc, False)], (
        "Expected WARNING log entry with exc_info."
    )


def test_log_exception_passes_exc_info() -> None:
    """log_exception forwards the exception payload to the logger."""
    logger = FakeLogger()
    exc = ValueError("boom")

    log_exception(logger, "failed", exc)

    assert logger.calls == [("ERROR", "failed", exc, False)], (
        "Expected ERROR log entry with exc_info."
    )


@pytest.mark.parametrize(
    ("input_level", "expected_normalized", "expected_invalid"),
    [
        pytest.param("DEBUG", "DEBUG", False, id="valid"),
        pytest.param("nope", "INFO", True, id="invalid"),
    ],
)
def test_configure_logging(
    monkeypatch: pytest.MonkeyPatch,
    input_level: str,
    expected_normalized: str,
    expected_invalid: bool,  # noqa: FBT001
) -> None:
    """configure_logging normalizes input levels and flags invalid values."""
    captured: dict[str, object] = {}

    def fake_basic_config(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr("releasescope.logging.basicConfig", fake_basic_config)

    normalized, invalid = configure_logging(input_level)

    assert normalized == expected_normalized, (
        f"Expected {input_level} to normalize to {expected_normalized}."
    )
    assert invalid is expected_invalid, (
        f"Expected invalid flag to be {expected_invalid} for {input_level}."
    )
    assert captured == {"level": expected_normalized, "force": False}, (
        "Expected basicConfig to receive the normalized level."
    )
