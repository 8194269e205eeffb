"""Unit tests for femtologging integration helpers.

Run with:
    pytest tests/unit/test_logging.py
"""

from __future__ import annotations

import pytest

from mergestats.logging import (
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
    ("raw", "expected", "invalid"),
    [
        ("warning", "WARNING", False),
        (" debug ", "DEBUG", False),
        (None, "INFO", True),
        ("", "INFO", True),
        ("loud", "INFO", True),
    ],
)
def test_normalize_log_level(
    raw: str | None, expected: str, *, invalid: bool
) -> None:
    """Normalize log levels and flag invalid inputs."""
    assert normalize_log_level(raw) == (expected, invalid)


def test_log_info_formats_and_passes_level() -> None:
    """log_info formats messages and emits INFO level."""
    logger = _FakeLogger()

    log_info(logger, "fetched %d pages for %s", 3, "octocat")

    assert logger.calls == [("INFO", "fetched 3 pages for octocat", None, False)]


def test_template_without_args_is_not_formatted() -> None:
    """A literal percent sign survives when no args are given."""
    logger = _FakeLogger()

    log_debug(logger, "100% done")

    assert logger.calls == [("DEBUG", "100% done", None, False)]


def test_log_warning_forwards_exc_info() -> None:
    """log_warning forwards exc_info to the logger."""
    logger = _FakeLogger()
    exc = ValueError("boom")

    log_warning(logger, "skipped %s", "org/a#7", exc_info=exc)

    assert logger.calls == [("WARNING", "skipped org/a#7", exc, False)]


def test_log_error_defaults_stack_info_false() -> None:
    """log_error defaults stack_info to False."""
    logger = _FakeLogger()

    log_error(logger, "error: %s", "oops")

    assert logger.calls == [("ERROR", "error: oops", None, False)]


@pytest.mark.parametrize(
    ("raw", "expected", "invalid"),
    [("DEBUG", "DEBUG", False), ("nope", "INFO", True)],
)
def test_configure_logging(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: str, *, invalid: bool
) -> None:
    """configure_logging normalizes the level before calling basicConfig."""
    captured: dict[str, object] = {}

    def fake_basic_config(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr("mergestats.logging.basicConfig", fake_basic_config)

    assert configure_logging(raw) == (expected, invalid)
    assert captured == {"level": expected, "force": False}
