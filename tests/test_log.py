"""Tests for logging helpers and GitHub Actions integration."""

from __future__ import annotations

import logging
import typing as typ

import pytest

from llm_docs.log import (
    ROOT_LOGGER,
    GitHubActionsFormatter,
    configure_logging,
    log_group,
    set_output,
)

if typ.TYPE_CHECKING:
    from pathlib import Path


def _record(level: int, message: str) -> logging.LogRecord:
    return logging.makeLogRecord(
        {"levelno": level, "levelname": logging.getLevelName(level), "msg": message}
    )


@pytest.mark.parametrize(
    ("level", "annotate", "expected"),
    [
        (logging.WARNING, True, "::warning::careful"),
        (logging.ERROR, True, "::error::careful"),
        (logging.DEBUG, True, "::debug::careful"),
        (logging.INFO, True, "careful"),
        (logging.WARNING, False, "WARNING: careful"),
        (logging.INFO, False, "careful"),
    ],
)
def test_formatter(level: int, annotate: bool, expected: str) -> None:  # noqa: FBT001
    """Workflow commands are used only when annotating."""
    formatter = GitHubActionsFormatter(annotate=annotate)
    assert formatter.format(_record(level, "careful")) == expected


def test_formatter_detects_actions(monkeypatch: pytest.MonkeyPatch) -> None:
    """Annotation defaults to whether ``GITHUB_ACTIONS`` is set."""
    assert GitHubActionsFormatter().annotate is False
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    assert GitHubActionsFormatter().annotate is True


def test_configure_logging_levels(monkeypatch: pytest.MonkeyPatch) -> None:
    """Verbose or ``DEBUG`` switches the package logger to debug."""
    logger = configure_logging()
    assert logger.name == ROOT_LOGGER
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1

    assert configure_logging(verbose=True).level == logging.DEBUG
    monkeypatch.setenv("DEBUG", "1")
    logger = configure_logging()
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1, "reconfiguring must not stack handlers"


def test_set_output_appends_to_github_output(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Outputs are appended as ``name=value`` lines."""
    output_file = tmp_path / "github_output"
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))

    set_output("files_generated", 3)
    set_output("llms_txt_path", tmp_path / "llms.txt")

    assert output_file.read_text(encoding="utf-8") == (
        f"files_generated=3\nllms_txt_path={tmp_path / 'llms.txt'}\n"
    )


def test_set_output_logs_without_github_output(caplog: pytest.LogCaptureFixture) -> None:
    """Locally the value is logged instead."""
    with caplog.at_level(logging.INFO, logger=ROOT_LOGGER):
        set_output("sections_count", 2)
    assert "Output sections_count=2" in caplog.text


def test_log_group_banner(caplog: pytest.LogCaptureFixture) -> None:
    """Outside Actions a group is a plain banner."""
    with caplog.at_level(logging.INFO, logger=ROOT_LOGGER), log_group("Parsing"):
        logging.getLogger(ROOT_LOGGER).info("inside")
    assert [record.getMessage() for record in caplog.records] == ["\n=== Parsing ===", "inside"]


def test_log_group_workflow_commands(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """Under Actions the group is opened and closed even on error."""
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    with caplog.at_level(logging.INFO, logger=ROOT_LOGGER):
        with pytest.raises(RuntimeError, match="boom"), log_group("Archive"):
            raise RuntimeError("boom")
    assert [record.getMessage() for record in caplog.records] == [
        "::group::Archive",
        "::endgroup::",
    ]
