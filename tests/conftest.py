"""Shared fixtures for the llm_docs test-suite.

The fixtures build a miniature Docusaurus output tree under ``tmp_path``: a
handful of rendered doc pages (with breadcrumbs, edit links and a doc
sidebar, like the real theme emits), the pages Docusaurus writes that must
be ignored (``404.html``, ``search/`` and ``assets/``), and a matching
``sidebars.yaml`` navigation description.
"""

from __future__ import annotations

import logging
import typing as typ
from textwrap import dedent

import pytest

from llm_docs.config import build_generator_config
from llm_docs.config.helpers import ENVIRONMENT_KEYS, WORKSPACE_KEYS
from llm_docs.log import ROOT_LOGGER

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from llm_docs.config import GeneratorConfig

BASE_URL = "https://docs.example.com"

SIDEBAR_HTML = (
    '<aside class="theme-doc-sidebar-container"><nav aria-label="Docs sidebar">'
    '<ul class="theme-doc-sidebar-menu menu__list">'
    '<li class="menu__list-item"><a class="menu__link" href="/intro">Introduction</a></li>'
    "</ul></nav></aside>"
)

SIDEBARS_YAML = dedent(
    """
    docs:
      - intro
      - type: category
        label: Guides
        link:
          type: doc
          id: guides/index
        items:
          - guides/setup
          - type: category
            label: Advanced
            items:
              - guides/advanced/tuning
      - type: link
        label: GitHub
        href: https://github.com/acme/widget
      - missing/page
    """
).lstrip()


def docusaurus_page(
    title: str, body: str, *, description: str | None = None, sidebar: bool = True
) -> str:
    """Return a rendered page shaped like Docusaurus' classic theme output."""
    meta = f'<meta name="description" content="{description}">' if description else ""
    return (
        "<!DOCTYPE html><html><head>"
        f"<title>{title} | Acme Docs</title>{meta}</head><body>"
        '<div class="main-wrapper">'
        f"{SIDEBAR_HTML if sidebar else ''}"
        "<main><article>"
        '<nav class="theme-doc-breadcrumbs"><a href="/">Home</a></nav>'
        '<div class="theme-doc-markdown markdown">'
        f"<header><h1>{title}</h1></header>{body}</div>"
        '<footer class="theme-doc-footer">'
        '<a class="theme-edit-this-page" href="https://github.com/acme/widget">Edit</a>'
        "</footer></article></main></div></body></html>"
    )


SITE_PAGES: dict[str, str] = {
    "index.html": (
        "<!DOCTYPE html><html><head><title>Acme Docs</title></head><body>"
        "<main><h1>Welcome</h1><p>Acme home page.</p></main></body></html>"
    ),
    "intro.html": docusaurus_page(
        "Introduction",
        '<p>Start with <a href="./guides/setup">the setup guide</a>.</p>',
        description="What Acme is and why it exists.",
    ),
    "guides/index.html": docusaurus_page(
        "Guides", "<p>Task-oriented walkthroughs.</p>"
    ),
    "guides/setup.html": docusaurus_page(
        "Setup",
        '<p>Read <a href="../intro#goals">the intro</a> first.</p>'
        '<pre class="prism-code language-bash"><code>make install</code></pre>',
        description="Install Acme locally.",
    ),
    "guides/advanced/tuning.html": docusaurus_page(
        "Tuning",
        '<div class="theme-admonition theme-admonition-warning alert alert--warning">'
        '<div class="admonitionHeading_Gvgb">warning</div>'
        '<div class="admonitionContent_BuS1"><p>Benchmark first.</p></div></div>',
    ),
    "404.html": docusaurus_page("Page Not Found", "<p>Nothing here.</p>"),
    "search/index.html": docusaurus_page("Search", "<p>Search the docs.</p>"),
    "assets/fragment.html": "<p>asset</p>",
}


def write_site(build_dir: Path, pages: cabc.Mapping[str, str] = SITE_PAGES) -> Path:
    """Write ``pages`` below ``build_dir`` and return the directory."""
    for relative, html in pages.items():
        path = build_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
    return build_dir


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ambient CI and configuration variables out of the tests."""
    names = (
        *ENVIRONMENT_KEYS.values(),
        *WORKSPACE_KEYS,
        "GITHUB_ACTIONS",
        "GITHUB_OUTPUT",
        "DEBUG",
    )
    for name in names:
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(f"INPUT_{name}", raising=False)


@pytest.fixture(autouse=True)
def reset_package_logger() -> cabc.Iterator[None]:
    """Drop handlers that ``configure_logging`` attached during a test."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def build_dir(tmp_path: Path) -> Path:
    """Return a rendered site tree mirroring ``SITE_PAGES``."""
    return write_site(tmp_path / "build")


@pytest.fixture
def sidebar_path(tmp_path: Path) -> Path:
    """Return the navigation description for the fixture site."""
    path = tmp_path / "sidebars.yaml"
    path.write_text(SIDEBARS_YAML, encoding="utf-8")
    return path


@pytest.fixture
def make_config(tmp_path: Path) -> cabc.Callable[..., GeneratorConfig]:
    """Return a factory producing validated configs rooted at ``tmp_path``."""

    def _make(**overrides: typ.Any) -> GeneratorConfig:
        raw: dict[str, typ.Any] = {
            "workspace_dir": str(tmp_path),
            "build_dir": "build",
            "output_dir": "out",
            "sidebar_path": "sidebars.yaml",
            "base_url": BASE_URL,
            "product_name": "Acme",
        }
        raw.update(overrides)
        return build_generator_config(raw)

    return _make
