"""Unit tests for femtologging integration helpers.

Run with:
    pytest tests/unit/test_logging.py
"""

from __future__ import annotations

import pytest

from contribgate.logging import (
    configure_logging,
    log_debug,
    log_error,
    log_info,
    log_warning,
    normalize_log_level,
)


class _FakeLogger:
    """Collects log calls for assertions."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, object | None, bool]] = []

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str:
        self.calls.append((level, message, exc_info, stack_info))
        return message


@pytest.mark.parametrize(
    ("raw", "expected_level", "expected_invalid"),
    [
        ("warning", "WARNING", False),
        ("  debug ", "DEBUG", False),
        (None, "INFO", True),
        ("", "INFO", True),
        ("verbose", "INFO", True),
    ],
)
def test_normalize_log_level(
    raw: str | None, expected_level: str, *, expected_invalid: bool
) -> None:
    """Known levels are upper-cased; anything else falls back to INFO."""
    assert normalize_log_level(raw) == (expected_level, expected_invalid)


def test_configure_logging_applies_fallback_level(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """configure_logging passes the normalized level to femtologging."""
    captured: dict[str, object] = {}

    def fake_basic_config(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr("contribgate.logging.basicConfig", fake_basic_config)

    assert configure_logging("nonsense", force=True) == ("INFO", True)
    assert captured == {"level": "INFO", "force": True}


@pytest.mark.parametrize(
    ("helper", "level"),
    [
        (log_debug, "DEBUG"),
        (log_info, "INFO"),
        (log_warning, "WARNING"),
        (log_error, "ERROR"),
    ],
)
def test_helpers_format_before_logging(helper: object, level: str) -> None:
    """Each helper interpolates arguments and logs at its level."""
    logger = _FakeLogger()

    helper(logger, "scanned %d of %s", 2, "acme")  # type: ignore[operator]

    assert logger.calls == [(level, "scanned 2 of acme", None, False)]


def test_literal_percent_without_args_is_preserved() -> None:
    """Templates without arguments are logged verbatim."""
    logger = _FakeLogger()

    log_info(logger, "100% of repositories reachable")

    assert logger.calls[0][1] == "100% of repositories reachable"


def test_exc_info_is_forwarded() -> None:
    """Exception info reaches the underlying logger."""
    logger = _FakeLogger()
    error = RuntimeError("boom")

    log_error(logger, "failed: %s", error, exc_info=error)

    assert logger.calls[0][2] is error
