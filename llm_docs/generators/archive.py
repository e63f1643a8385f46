"""Compress the ``markdown/`` directory into a downloadable archive.

Entries are stored under a top-level ``markdown/`` directory regardless of
where the source directory lives on disk, so unpacking the archive recreates
the same tree that the file emitter wrote.
"""

from __future__ import annotations

import logging
import tarfile
import typing as typ
import zipfile

from llm_docs._constants import MARKDOWN_DIR
from llm_docs.errors import ArchiveError

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

COMPRESSION_LEVEL = 9


def _archive_members(markdown_dir: Path) -> list[tuple[Path, str]]:
    """Return ``(path, arcname)`` pairs for every file under ``markdown_dir``."""
    if not markdown_dir.is_dir():
        msg = f"Markdown directory not found: {markdown_dir}"
        raise ArchiveError(msg)
    return [
        (path, f"{MARKDOWN_DIR}/{path.relative_to(markdown_dir).as_posix()}")
        for path in sorted(markdown_dir.rglob("*"))
        if path.is_file()
    ]


def create_markdown_archive(markdown_dir: Path, output_path: Path) -> Path:
    """Write a deflate-compressed ZIP of ``markdown_dir`` to ``output_path``.

    Raises
    ------
    ArchiveError
        If the source directory is missing or the archive cannot be written.
    """
    members = _archive_members(markdown_dir)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with zipfile.ZipFile(
            output_path,
            "w",
            compression=zipfile.ZIP_DEFLATED,
            compresslevel=COMPRESSION_LEVEL,
        ) as archive:
            for path, arcname in members:
                archive.write(path, arcname)
    except (OSError, zipfile.BadZipFile) as exc:
        msg = f"Failed to write archive {output_path}: {exc}"
        raise ArchiveError(msg) from exc

    size_kb = output_path.stat().st_size / 1024
    logger.info("Archive created: %.2f KB, %d files", size_kb, len(members))
    return output_path


def create_markdown_tarball(markdown_dir: Path, output_path: Path) -> Path:
    """Write a gzip-compressed tarball of ``markdown_dir`` to ``output_path``."""
    members = _archive_members(markdown_dir)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with tarfile.open(
            output_path, "w:gz", compresslevel=COMPRESSION_LEVEL
        ) as archive:
            for path, arcname in members:
                archive.add(path, arcname=arcname, recursive=False)
    except (OSError, tarfile.TarError) as exc:
        msg = f"Failed to write archive {output_path}: {exc}"
        raise ArchiveError(msg) from exc

    logger.info("Tarball created: %s, %d files", output_path.name, len(members))
    return output_path


def calculate_directory_size(dir_path: Path) -> int:
    """Return the total size in bytes of the files below ``dir_path``."""
    return sum(path.stat().st_size for path in dir_path.rglob("*") if path.is_file())


__all__ = [
    "calculate_directory_size",
    "create_markdown_archive",
    "create_markdown_tarball",
]
