"""Add an "LLM Resources" category to the rendered site's doc sidebar.

The injector walks the HTML files of the build directory and appends a
sidebar category, rendered from ``templates/llm_resources.jinja``, that links
to ``llms.txt``, ``llms-full.txt`` and the Markdown archive. Files that
already mention the marker, or that have no doc sidebar, are left untouched,
so running the injector twice changes nothing the second time.

>>> from llm_docs.sidebar_injector import SidebarInjector
>>> SidebarInjector(config).run()  # doctest: +SKIP
12
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from bs4 import BeautifulSoup, Tag
from jinja2 import Environment, FileSystemLoader

from llm_docs._constants import LLMS_FULL_TXT, LLMS_TXT, SIDEBAR_MARKER, SIDEBAR_SELECTOR
from llm_docs.build_mapper import find_html_files

if typ.TYPE_CHECKING:
    from llm_docs.config import GeneratorConfig

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "llm_resources.jinja"


class SidebarInjector:
    """Inject links to the generated LLM artefacts into rendered HTML pages."""

    def __init__(
        self, config: GeneratorConfig, *, templates_dir: Path | None = None
    ) -> None:
        """Initialize the injector and render the sidebar fragment once.

        Parameters
        ----------
        config : GeneratorConfig
            Supplies the build directory, base URL and archive format.
        templates_dir : Path, optional
            Directory containing ``llm_resources.jinja``. Defaults to
            ``llm_docs/templates``.
        """
        self.config = config
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template(TEMPLATE_NAME)
        self.fragment = self.render_fragment()

    def render_fragment(self) -> str:
        """Return the sidebar ``<li>`` markup for the configured site."""
        resources = (LLMS_TXT, LLMS_FULL_TXT, self.config.archive_path.name)
        return self.template.render(
            marker=SIDEBAR_MARKER,
            base_url=self.config.base_url,
            resources=resources,
        )

    def run(self) -> int:
        """Inject into every eligible HTML file and return how many changed."""
        injected = 0
        for html_file in find_html_files(self.config.build_dir):
            try:
                if self.inject_file(html_file):
                    injected += 1
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Failed to inject sidebar into %s: %s", html_file, exc)

        logger.info("Injected LLM Resources sidebar into %d HTML files", injected)
        return injected

    def inject_file(self, html_file: Path) -> bool:
        """Append the fragment to ``html_file``'s sidebar; False means skipped."""
        html = html_file.read_text(encoding="utf-8")
        if SIDEBAR_MARKER in html:
            return False

        soup = BeautifulSoup(html, "html.parser")
        menu = soup.select_one(SIDEBAR_SELECTOR)
        if not isinstance(menu, Tag):
            return False

        fragment = BeautifulSoup(self.fragment, "html.parser")
        for node in list(fragment.contents):
            menu.append(node.extract())
        html_file.write_text(str(soup), encoding="utf-8")
        logger.debug("Injected sidebar into %s", html_file)
        return True


def inject_sidebar_links(config: GeneratorConfig) -> int:
    """Inject the sidebar category across ``config.build_dir``."""
    return SidebarInjector(config).run()


__all__ = ["SidebarInjector", "inject_sidebar_links"]
