"""Cyclopts CLI entrypoint for producing LLM-oriented documentation artefacts.

The ``llm-docs`` console script turns a rendered Docusaurus site into
``llms.txt``, ``llms-full.txt``, a ``markdown/`` tree and a Markdown archive.
It is designed to run both locally and as a GitHub Actions step: every option
can also be supplied through an ``INPUT_*`` environment variable, and the
plain ``BASE_URL``/``PRODUCT_NAME``/... names are honoured as well.

Examples
--------
Generate the corpus from a local build:

>>> from llm_docs.cli import app
>>> app.run(
...     ["generate", "--base-url", "https://docs.example.com", "--product-name", "Acme"]
... )  # doctest: +SKIP

Check the links of an existing output tree:

>>> app.run(
...     ["validate-links", "--base-url", "https://docs.example.com"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import MARKDOWN_DIR
from .config import ConfigError, load_generator_config
from .errors import LlmDocsError
from .generators import check_markdown_links
from .log import configure_logging
from .pipeline import LlmDocsGenerator
from .sidebar_injector import inject_sidebar_links

if typ.TYPE_CHECKING:
    from .config import GeneratorConfig

DEFAULT_CONFIG = Path("llm-docs.yaml")
DEFAULT_OUTPUT_DIR = Path("llm-docs")

logger = logging.getLogger(__name__)

app = App(name="llm-docs", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _fail(exc: BaseException) -> typ.NoReturn:
    """Log a fatal error (traceback at debug level) and exit with status 1."""
    logger.error("%s", exc)
    logger.debug("Stack trace:", exc_info=exc)
    sys.exit(1)


def _resolve_config(
    config: Path | None, overrides: typ.Mapping[str, typ.Any]
) -> GeneratorConfig:
    """Load the run configuration; the default file is optional."""
    if config is None and DEFAULT_CONFIG.exists():
        config = DEFAULT_CONFIG
    return load_generator_config(config, overrides=overrides)


@app.command(help="Generate llms.txt, llms-full.txt and Markdown from a site build.")
def generate(  # noqa: PLR0913
    *,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to llm-docs.yaml", env_var="INPUT_CONFIG")
    ] = None,
    build_dir: typ.Annotated[
        Path | None,
        Parameter(help="Rendered site directory", env_var="INPUT_BUILD_DIR"),
    ] = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Directory for generated files", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    base_url: typ.Annotated[
        str | None,
        Parameter(help="Absolute URL of the published docs", env_var="INPUT_BASE_URL"),
    ] = None,
    product_name: typ.Annotated[
        str | None,
        Parameter(help="Product name used in headers", env_var="INPUT_PRODUCT_NAME"),
    ] = None,
    tagline: typ.Annotated[
        str | None, Parameter(help="Optional tagline", env_var="INPUT_TAGLINE")
    ] = None,
    sidebar_path: typ.Annotated[
        Path | None,
        Parameter(help="Navigation description (YAML/JSON)", env_var="INPUT_SIDEBAR_PATH"),
    ] = None,
    include_descriptions: typ.Annotated[
        bool | None,
        Parameter(
            help="Append page descriptions in llms.txt",
            env_var="INPUT_INCLUDE_DESCRIPTIONS",
        ),
    ] = None,
    strip_html: typ.Annotated[
        bool | None,
        Parameter(help="Strip leftover HTML tags", env_var="INPUT_STRIP_HTML"),
    ] = None,
    inject_sidebar: typ.Annotated[
        bool | None,
        Parameter(
            help="Add an LLM Resources entry to the site sidebar",
            env_var="INPUT_INJECT_SIDEBAR",
        ),
    ] = None,
    directory_indexes: typ.Annotated[
        bool | None,
        Parameter(
            help="Write index.md listings for Markdown directories",
            env_var="INPUT_DIRECTORY_INDEXES",
        ),
    ] = None,
    archive_format: typ.Annotated[
        typ.Literal["zip", "tar"] | None,
        Parameter(help="Archive format", env_var="INPUT_ARCHIVE_FORMAT"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Enable debug logging", env_var="INPUT_VERBOSE")
    ] = False,
) -> None:
    """Run the full generation pipeline.

    Options left unset fall back to the environment (``BASE_URL``,
    ``PRODUCT_NAME``...), then to the configuration file, then to built-in
    defaults.

    Returns
    -------
    None
        Writes the artefacts and prints one ``wrote <path>`` line per output.
        Exits with status 1 on configuration or pipeline errors.
    """
    configure_logging(verbose=verbose)
    overrides = {
        "build_dir": build_dir,
        "output_dir": output_dir,
        "base_url": base_url,
        "product_name": product_name,
        "tagline": tagline,
        "sidebar_path": sidebar_path,
        "include_descriptions": include_descriptions,
        "strip_html": strip_html,
        "inject_sidebar": inject_sidebar,
        "directory_indexes": directory_indexes,
        "archive_format": archive_format,
    }
    try:
        run_config = _resolve_config(config, overrides)
        result = LlmDocsGenerator(run_config).run()
    except (ConfigError, LlmDocsError, FileNotFoundError, TypeError) as exc:
        _fail(exc)

    for path in (
        result.llms_txt_path,
        result.llms_full_txt_path,
        result.markdown_archive_path,
    ):
        print(f"wrote {_format_path(path)}")
    print(
        f"{result.pages_processed} pages, {result.files_generated} markdown files, "
        f"{result.sections_count} sections"
    )


@app.command(help="Add the LLM Resources sidebar entry to rendered HTML pages.")
def inject_sidebar(
    *,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to llm-docs.yaml", env_var="INPUT_CONFIG")
    ] = None,
    build_dir: typ.Annotated[
        Path | None,
        Parameter(help="Rendered site directory", env_var="INPUT_BUILD_DIR"),
    ] = None,
    base_url: typ.Annotated[
        str | None,
        Parameter(help="Absolute URL of the published docs", env_var="INPUT_BASE_URL"),
    ] = None,
    product_name: typ.Annotated[
        str | None,
        Parameter(help="Product name used in headers", env_var="INPUT_PRODUCT_NAME"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Enable debug logging", env_var="INPUT_VERBOSE")
    ] = False,
) -> None:
    """Inject sidebar links into an existing build without regenerating."""
    configure_logging(verbose=verbose)
    overrides = {"build_dir": build_dir, "base_url": base_url, "product_name": product_name}
    try:
        run_config = _resolve_config(config, overrides)
        if not run_config.build_dir.is_dir():
            msg = f"Build directory not found: {run_config.build_dir}"
            raise FileNotFoundError(msg)
        injected = inject_sidebar_links(run_config)
    except (ConfigError, LlmDocsError, FileNotFoundError, TypeError) as exc:
        _fail(exc)
    print(f"updated {injected} HTML files")


@app.command(help="Report internal links in generated Markdown that do not resolve.")
def validate_links(
    *,
    base_url: typ.Annotated[
        str, Parameter(help="Absolute URL of the published docs", env_var="INPUT_BASE_URL")
    ],
    output_dir: typ.Annotated[
        Path,
        Parameter(help="Directory holding generated files", env_var="INPUT_OUTPUT_DIR"),
    ] = DEFAULT_OUTPUT_DIR,
    verbose: typ.Annotated[
        bool, Parameter(help="Enable debug logging", env_var="INPUT_VERBOSE")
    ] = False,
) -> None:
    """Check every file under ``{output_dir}/markdown`` and exit 1 on breakage."""
    configure_logging(verbose=verbose)
    markdown_dir = output_dir / MARKDOWN_DIR
    if not markdown_dir.is_dir():
        _fail(FileNotFoundError(f"Markdown directory not found: {markdown_dir}"))

    broken = check_markdown_links(markdown_dir, base_url.rstrip("/"))
    for file_path, links in sorted(broken.items()):
        for link in links:
            print(f"{file_path}: {link}")
    if broken:
        total = sum(len(links) for links in broken.values())
        logger.error("Found %d broken links in %d files", total, len(broken))
        sys.exit(1)
    print("all links resolve")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``llm-docs`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
