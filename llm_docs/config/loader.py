"""Load run configuration from YAML, the environment and explicit overrides."""

from __future__ import annotations

import os
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _archive_format,
    _normalize_base_url,
    _optional_str,
    _parse_bool,
    _read_environment,
    _require_text,
    _resolve_path,
)
from .models import ConfigError, GeneratorConfig

CONFIG_FILE_KEY = "llm_docs"


def load_generator_config(
    path: Path | None = None,
    *,
    overrides: typ.Mapping[str, typ.Any] | None = None,
    environ: typ.Mapping[str, str] | None = None,
) -> GeneratorConfig:
    """Merge every configuration source and return a validated config.

    Parameters
    ----------
    path : Path or None, optional
        YAML file holding configuration values, either at the top level or
        under an ``llm_docs:`` key. ``None`` skips the file source.
    overrides : Mapping[str, Any] or None, optional
        Explicit values (typically CLI options); ``None`` entries are ignored.
    environ : Mapping[str, str] or None, optional
        Environment to read ``BASE_URL``, ``PRODUCT_NAME`` and friends from;
        defaults to ``os.environ``.

    Returns
    -------
    GeneratorConfig
        Configuration with defaults applied and paths resolved against the
        workspace directory.

    Raises
    ------
    FileNotFoundError
        If ``path`` is given but does not exist.
    TypeError
        If the YAML document is not a mapping.
    ConfigError
        If required values are missing or malformed.

    Examples
    --------
    >>> config = load_generator_config(
    ...     overrides={"base_url": "https://docs.example.com/", "product_name": "Acme"},
    ...     environ={},
    ... )
    >>> config.base_url
    'https://docs.example.com'
    """
    merged: dict[str, typ.Any] = {}
    if path is not None:
        merged.update(_read_config_file(path))
    merged.update(_read_environment(os.environ if environ is None else environ))
    if overrides:
        merged.update({key: value for key, value in overrides.items() if value is not None})
    return build_generator_config(merged)


def _read_config_file(path: Path) -> dict[str, typ.Any]:
    """Return the configuration mapping stored in the YAML file at ``path``."""
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    nested = loaded.get(CONFIG_FILE_KEY)
    if isinstance(nested, dict):
        return dict(nested)
    return dict(loaded)


def build_generator_config(raw: typ.Mapping[str, typ.Any]) -> GeneratorConfig:
    """Validate a merged mapping of raw values into a :class:`GeneratorConfig`.

    Every problem is collected first so a single :class:`ConfigError` lists
    all of them.
    """
    errors: list[str] = []
    workspace_dir = Path(_optional_str(raw.get("workspace_dir")) or Path.cwd())

    base_url = ""
    try:
        base_url = _normalize_base_url(raw.get("base_url"))
    except ValueError as exc:
        errors.append(f"  - base_url: {exc}")

    product_name = ""
    try:
        product_name = _require_text(raw.get("product_name"), "PRODUCT_NAME")
    except ValueError as exc:
        errors.append(f"  - product_name: {exc}")

    archive_format = "zip"
    try:
        archive_format = _archive_format(raw.get("archive_format"))
    except ValueError as exc:
        errors.append(f"  - archive_format: {exc}")

    if errors:
        msg = "Configuration validation failed:\n" + "\n".join(errors)
        raise ConfigError(msg)

    return GeneratorConfig(
        build_dir=_resolve_path(raw.get("build_dir"), "./build", workspace_dir),
        output_dir=_resolve_path(raw.get("output_dir"), "./llm-docs", workspace_dir),
        base_url=base_url,
        product_name=product_name,
        tagline=_optional_str(raw.get("tagline")) or "",
        sidebar_path=_resolve_path(
            raw.get("sidebar_path"), "./sidebars.yaml", workspace_dir
        ),
        include_descriptions=_parse_bool(
            raw.get("include_descriptions"), default=True
        ),
        strip_html=_parse_bool(raw.get("strip_html"), default=True),
        inject_sidebar=_parse_bool(raw.get("inject_sidebar"), default=False),
        directory_indexes=_parse_bool(raw.get("directory_indexes"), default=False),
        archive_format=archive_format,
        workspace_dir=workspace_dir,
    )


__all__ = ["build_generator_config", "load_generator_config"]
