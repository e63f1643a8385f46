"""Load and validate llm_docs run configuration.

This subpackage merges an optional ``llm-docs.yaml`` file, the environment
variables read by the GitHub Action (``BASE_URL``, ``PRODUCT_NAME``,
``BUILD_DIR`` ...), and explicit CLI overrides into a single
:class:`GeneratorConfig`. The primary entry point is
:func:`load_generator_config`, which validates required fields, applies
defaults, and resolves paths against the workspace directory.

Examples
--------
>>> from pathlib import Path
>>> from llm_docs.config import load_generator_config
>>> config = load_generator_config(Path("llm-docs.yaml"))  # doctest: +SKIP
>>> config.markdown_dir  # doctest: +SKIP
PosixPath('/work/llm-docs/markdown')
"""

from .loader import build_generator_config, load_generator_config
from .models import ConfigError, GeneratorConfig

__all__ = [
    "ConfigError",
    "GeneratorConfig",
    "build_generator_config",
    "load_generator_config",
]
