"""Utility helpers shared by the llm_docs configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path
from urllib.parse import urlsplit

from llm_docs._constants import ARCHIVE_FILENAMES

TRUE_VALUES = frozenset({"true", "1"})

ENVIRONMENT_KEYS: dict[str, str] = {
    "build_dir": "BUILD_DIR",
    "output_dir": "OUTPUT_DIR",
    "base_url": "BASE_URL",
    "product_name": "PRODUCT_NAME",
    "tagline": "TAGLINE",
    "sidebar_path": "SIDEBAR_PATH",
    "include_descriptions": "INCLUDE_DESCRIPTIONS",
    "strip_html": "STRIP_HTML",
    "inject_sidebar": "INJECT_SIDEBAR",
    "directory_indexes": "DIRECTORY_INDEXES",
    "archive_format": "ARCHIVE_FORMAT",
}
WORKSPACE_KEYS = ("WORKSPACE_DIR", "GITHUB_WORKSPACE")


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_bool(value: object | None, *, default: bool) -> bool:
    """Interpret ``value`` as a flag; only ``true``/``1`` strings are truthy."""
    match value:
        case None:
            return default
        case bool():
            return value
        case str() as text:
            if not text.strip():
                return default
            return text.strip().lower() in TRUE_VALUES
        case int():
            return value != 0
        case _:
            return default


def _resolve_path(value: object | None, default: str, workspace_dir: Path) -> Path:
    """Return ``value`` (or ``default``) resolved against ``workspace_dir``."""
    candidate = Path(_optional_str(value) or default).expanduser()
    if candidate.is_absolute():
        return candidate
    return (workspace_dir / candidate).resolve()


def _normalize_base_url(value: object | None) -> str:
    """Validate an absolute http(s) URL and drop a single trailing slash.

    Raises
    ------
    ValueError
        If ``value`` is missing or is not an absolute http(s) URL.
    """
    text = _optional_str(value)
    if not text:
        msg = "BASE_URL is required"
        raise ValueError(msg)
    parsed = urlsplit(text)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        msg = "BASE_URL must be a valid URL"
        raise ValueError(msg)
    return text.removesuffix("/")


def _require_text(value: object | None, label: str) -> str:
    """Return the stripped text of ``value`` or raise when it is blank."""
    text = _optional_str(value)
    if not text:
        msg = f"{label} is required"
        raise ValueError(msg)
    return text


def _archive_format(value: object | None) -> str:
    """Return a supported archive format name, defaulting to ``zip``."""
    text = (_optional_str(value) or "zip").lower()
    if text not in ARCHIVE_FILENAMES:
        known = ", ".join(sorted(ARCHIVE_FILENAMES))
        msg = f"archive format must be one of: {known}"
        raise ValueError(msg)
    return text


def _read_environment(environ: typ.Mapping[str, str]) -> dict[str, str]:
    """Collect configuration values from the plain environment variable names."""
    values: dict[str, str] = {}
    for key, env_name in ENVIRONMENT_KEYS.items():
        raw = environ.get(env_name)
        if raw is not None and raw != "":
            values[key] = raw
    for env_name in WORKSPACE_KEYS:
        workspace = environ.get(env_name)
        if workspace:
            values["workspace_dir"] = workspace
            break
    return values


__all__ = [
    "ENVIRONMENT_KEYS",
    "TRUE_VALUES",
    "WORKSPACE_KEYS",
    "_archive_format",
    "_normalize_base_url",
    "_optional_str",
    "_parse_bool",
    "_read_environment",
    "_require_text",
    "_resolve_path",
]
