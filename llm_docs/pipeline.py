"""End-to-end generation run.

:class:`LlmDocsGenerator` wires the navigation parser, build mapper and
generators together: it reads the rendered site under ``build_dir``, writes
``llms.txt``, ``llms-full.txt``, the ``markdown/`` tree and its archive under
``output_dir``, optionally injects the sidebar category into the site, and
publishes GitHub Actions step outputs.

Example
-------
>>> from llm_docs.config import load_generator_config
>>> from llm_docs.pipeline import LlmDocsGenerator
>>> result = LlmDocsGenerator(load_generator_config()).run()  # doctest: +SKIP
>>> result.files_generated  # doctest: +SKIP
42
"""

from __future__ import annotations

import logging
import time
import typing as typ

from llm_docs._constants import LLMS_FULL_TXT, LLMS_TXT
from llm_docs.build_mapper import build_discovered_docs, discover_pages_from_build, process_build
from llm_docs.errors import BuildDirectoryError
from llm_docs.generators import (
    calculate_directory_size,
    create_markdown_archive,
    create_markdown_tarball,
    generate_directory_indexes,
    generate_llms_full_txt,
    generate_llms_txt,
    generate_markdown_files,
)
from llm_docs.log import log_group, set_output
from llm_docs.models import GenerationResult
from llm_docs.parsers.navigation import count_pages, parse_navigation_file
from llm_docs.sidebar_injector import inject_sidebar_links

if typ.TYPE_CHECKING:
    from pathlib import Path

    from llm_docs.config import GeneratorConfig
    from llm_docs.models import ProcessedDocs

logger = logging.getLogger(__name__)


class LlmDocsGenerator:
    """Produce the LLM-oriented documentation corpus for one site build."""

    def __init__(self, config: GeneratorConfig) -> None:
        self.config = config

    def run(self) -> GenerationResult:
        """Execute every generation step and return the produced artefacts.

        Returns
        -------
        GenerationResult
            Output paths plus page, file and section counters.

        Raises
        ------
        BuildDirectoryError
            If ``build_dir`` does not exist.
        NavigationError
            If the navigation description exists but cannot be parsed.
        ArchiveError
            If the Markdown archive cannot be written.
        """
        config = self.config
        started = time.perf_counter()
        with log_group("Loading configuration"):
            logger.info("Build directory: %s", config.build_dir)
            logger.info("Output directory: %s", config.output_dir)
            logger.info("Base URL: %s", config.base_url)
            logger.info("Product name: %s", config.product_name)

        if not config.build_dir.is_dir():
            msg = f"Build directory not found: {config.build_dir}"
            raise BuildDirectoryError(msg)

        docs = self.collect_docs()
        logger.info("Processed %d documentation pages", docs.total_pages)
        config.output_dir.mkdir(parents=True, exist_ok=True)

        with log_group(f"Generating {LLMS_TXT}"):
            llms_txt_path = self._write(LLMS_TXT, generate_llms_txt(docs, config))
        with log_group(f"Generating {LLMS_FULL_TXT}"):
            llms_full_path = self._write(LLMS_FULL_TXT, generate_llms_full_txt(docs, config))

        with log_group("Generating markdown files"):
            files_generated = generate_markdown_files(docs, config)
            logger.info("Generated %d markdown files", files_generated)
            if config.directory_indexes:
                indexes = generate_directory_indexes(docs, config.markdown_dir)
                logger.info("Generated %d directory indexes", indexes)

        with log_group(f"Creating {config.archive_path.name} archive"):
            archive_path = self.write_archive()

        injected = 0
        if config.inject_sidebar:
            with log_group("Injecting LLM Resources into sidebar"):
                injected = inject_sidebar_links(config)

        result = GenerationResult(
            llms_txt_path=llms_txt_path,
            llms_full_txt_path=llms_full_path,
            markdown_archive_path=archive_path,
            markdown_dir=config.markdown_dir,
            files_generated=files_generated,
            sections_count=len(docs.sections),
            pages_processed=docs.total_pages,
            injected_files=injected,
        )
        publish_outputs(result)
        logger.info("Generation complete in %.2fs", time.perf_counter() - started)
        return result

    def collect_docs(self) -> ProcessedDocs:
        """Return enriched docs from the navigation file or build discovery."""
        config = self.config
        if config.sidebar_path.exists():
            with log_group("Parsing documentation structure"):
                logger.info("Using sidebar: %s", config.sidebar_path)
                sections = parse_navigation_file(config.sidebar_path)
                logger.info(
                    "Found %d top-level sections with %d pages",
                    len(sections),
                    count_pages(sections),
                )
            with log_group("Processing site build"):
                return process_build(config, sections)

        logger.warning(
            "Sidebar not found at %s, discovering pages from build", config.sidebar_path
        )
        with log_group("Discovering pages from build output"):
            pages = discover_pages_from_build(config.build_dir, config)
            logger.info("Discovered %d pages", len(pages))
            return build_discovered_docs(pages)

    def write_archive(self) -> Path:
        """Archive ``markdown/`` in the configured format."""
        config = self.config
        config.markdown_dir.mkdir(parents=True, exist_ok=True)
        logger.info(
            "Markdown directory size: %.2f KB",
            calculate_directory_size(config.markdown_dir) / 1024,
        )
        match config.archive_format:
            case "tar":
                return create_markdown_tarball(config.markdown_dir, config.archive_path)
            case _:
                return create_markdown_archive(config.markdown_dir, config.archive_path)

    def _write(self, filename: str, text: str) -> Path:
        output_path = self.config.output_dir / filename
        output_path.write_text(text, encoding="utf-8")
        logger.info("Generated: %s", filename)
        return output_path


def publish_outputs(result: GenerationResult) -> None:
    """Expose the run's artefacts as GitHub Actions step outputs."""
    set_output("llms_txt_path", result.llms_txt_path)
    set_output("llms_full_txt_path", result.llms_full_txt_path)
    set_output("markdown_zip_path", result.markdown_archive_path)
    set_output("files_generated", result.files_generated)
    set_output("sections_count", result.sections_count)


def generate(config: GeneratorConfig) -> GenerationResult:
    """Run :class:`LlmDocsGenerator` for ``config``."""
    return LlmDocsGenerator(config).run()


__all__ = ["LlmDocsGenerator", "generate", "publish_outputs"]
