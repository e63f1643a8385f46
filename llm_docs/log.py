"""Logging setup with GitHub Actions workflow-command annotations.

Modules log through ``logging.getLogger(__name__)``; the CLI calls
:func:`configure_logging` once. When ``GITHUB_ACTIONS`` is set, warnings,
errors and debug records are rendered as ``::warning::`` style workflow
commands so they surface as annotations in the Actions UI.

Examples
--------
>>> import logging
>>> from llm_docs.log import GitHubActionsFormatter
>>> record = logging.makeLogRecord(
...     {"levelno": logging.WARNING, "levelname": "WARNING", "msg": "careful"}
... )
>>> GitHubActionsFormatter(annotate=False).format(record)
'WARNING: careful'
"""

from __future__ import annotations

import contextlib
import logging
import os
import sys
import typing as typ
from pathlib import Path

if typ.TYPE_CHECKING:
    import collections.abc as cabc

ROOT_LOGGER = "llm_docs"

ANNOTATIONS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def running_in_github_actions() -> bool:
    """Return True when the process runs inside a GitHub Actions job."""
    return bool(os.getenv("GITHUB_ACTIONS"))


class GitHubActionsFormatter(logging.Formatter):
    """Format records as workflow commands or plain ``LEVEL: message`` lines."""

    def __init__(self, *, annotate: bool | None = None) -> None:
        super().__init__("%(message)s")
        self.annotate = running_in_github_actions() if annotate is None else annotate

    def format(self, record: logging.LogRecord) -> str:  # noqa: D102
        message = super().format(record)
        if self.annotate:
            command = ANNOTATIONS.get(record.levelno)
            return f"::{command}::{message}" if command else message
        if record.levelno == logging.INFO:
            return message
        return f"{record.levelname}: {message}"


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Debug output is enabled by ``verbose``, the ``DEBUG`` environment
    variable, or when running under GitHub Actions (where debug annotations
    are only shown with step debugging turned on).
    """
    logger = logging.getLogger(ROOT_LOGGER)
    debug = verbose or bool(os.getenv("DEBUG")) or running_in_github_actions()
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(GitHubActionsFormatter())
    logger.addHandler(handler)
    return logger


@contextlib.contextmanager
def log_group(title: str, logger: logging.Logger | None = None) -> cabc.Iterator[None]:
    """Wrap log output in a collapsible group (or a plain banner locally)."""
    target = logger or logging.getLogger(ROOT_LOGGER)
    if running_in_github_actions():
        target.info("::group::%s", title)
        try:
            yield
        finally:
            target.info("::endgroup::")
    else:
        target.info("\n=== %s ===", title)
        yield


def set_output(name: str, value: str | int | Path) -> None:
    """Publish a step output via ``$GITHUB_OUTPUT`` or log it locally."""
    output_file = os.getenv("GITHUB_OUTPUT")
    if output_file:
        with Path(output_file).open("a", encoding="utf-8") as handle:
            handle.write(f"{name}={value}\n")
    else:
        logging.getLogger(ROOT_LOGGER).info("Output %s=%s", name, value)


__all__ = [
    "GitHubActionsFormatter",
    "configure_logging",
    "log_group",
    "running_in_github_actions",
    "set_output",
]
