"""Typed dataclasses describing llm_docs run configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from llm_docs._constants import ARCHIVE_FILENAMES, MARKDOWN_DIR


class ConfigError(ValueError):
    """Raised when the run configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class GeneratorConfig:
    """A fully resolved and validated generation configuration.

    Attributes
    ----------
    build_dir : Path
        Directory holding the rendered HTML site.
    output_dir : Path
        Directory receiving ``llms.txt``, ``llms-full.txt`` and ``markdown/``.
    base_url : str
        Absolute site URL without a trailing slash.
    product_name : str
        Product name used in document headers.
    tagline : str
        Optional line printed under the header.
    sidebar_path : Path
        Navigation description (YAML or JSON).
    include_descriptions : bool
        Append page descriptions to ``llms.txt`` entries.
    strip_html : bool
        Remove HTML tags left behind by the converter.
    inject_sidebar : bool
        Add an "LLM Resources" entry to the rendered site sidebar.
    directory_indexes : bool
        Write ``index.md`` listings for Markdown sub-directories.
    archive_format : str
        ``"zip"`` or ``"tar"`` (gzip-compressed).
    workspace_dir : Path
        Directory relative paths were resolved against.
    """

    build_dir: Path
    output_dir: Path
    base_url: str
    product_name: str
    tagline: str = ""
    sidebar_path: Path = Path("sidebars.yaml")
    include_descriptions: bool = True
    strip_html: bool = True
    inject_sidebar: bool = False
    directory_indexes: bool = False
    archive_format: str = "zip"
    workspace_dir: Path = dc.field(default_factory=Path.cwd)

    @property
    def markdown_dir(self) -> Path:
        """Return the directory that receives per-page Markdown files."""
        return self.output_dir / MARKDOWN_DIR

    @property
    def archive_path(self) -> Path:
        """Return the path of the Markdown archive for ``archive_format``."""
        return self.output_dir / ARCHIVE_FILENAMES[self.archive_format]


__all__ = ["ConfigError", "GeneratorConfig"]
