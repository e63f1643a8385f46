"""Turn a rendered Docusaurus site into an LLM-friendly documentation corpus.

This package exposes the CLI entry points used by ``llm-docs`` (locally or as
a GitHub Actions step) to produce ``llms.txt``, ``llms-full.txt``, per-page
Markdown files and a Markdown archive from a static site build.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from llm_docs import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
