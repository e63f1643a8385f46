"""Tests for the ``llm-docs`` command functions."""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import pytest

from llm_docs import cli
from llm_docs.models import GenerationResult

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture

BASE_URL = "https://docs.example.com"


@pytest.fixture
def workspace(
    build_dir: Path, sidebar_path: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Run commands from a directory holding ``build/`` and ``sidebars.yaml``."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_generate_writes_artefacts(workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """The generate command reports every artefact it wrote."""
    cli.generate(base_url=BASE_URL, product_name="Acme", output_dir=Path("out"))

    out = capsys.readouterr().out.splitlines()
    assert out == [
        "wrote out/llms.txt",
        "wrote out/llms-full.txt",
        "wrote out/markdown.zip",
        "4 pages, 4 markdown files, 1 sections",
    ]
    assert (workspace / "out" / "markdown" / "guides" / "setup.md").is_file()


def test_generate_reads_default_config_file(
    workspace: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``llm-docs.yaml`` in the working directory is picked up automatically."""
    (workspace / "llm-docs.yaml").write_text(
        f"llm_docs:\n  base_url: {BASE_URL}\n  product_name: Acme\n  archive_format: tar\n",
        encoding="utf-8",
    )
    cli.generate()

    assert "wrote llm-docs/markdown.tar.gz" in capsys.readouterr().out
    llms_txt = (workspace / "llm-docs" / "llms.txt").read_text(encoding="utf-8")
    assert llms_txt.startswith("# Acme Documentation")
    assert f"{BASE_URL}/markdown.tar.gz" in llms_txt
    assert not (workspace / "llm-docs" / "markdown.zip").exists()


def test_generate_fails_on_invalid_config(
    workspace: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Configuration errors exit with status 1 and a readable message."""
    with caplog.at_level(logging.ERROR, logger="llm_docs"), pytest.raises(SystemExit) as excinfo:
        cli.generate(product_name="Acme")
    assert excinfo.value.code == 1
    assert "BASE_URL is required" in caplog.text


def test_generate_fails_without_build_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """A missing build directory aborts the run."""
    monkeypatch.chdir(tmp_path)
    with caplog.at_level(logging.ERROR, logger="llm_docs"), pytest.raises(SystemExit) as excinfo:
        cli.generate(base_url=BASE_URL, product_name="Acme")
    assert excinfo.value.code == 1
    assert "Build directory not found" in caplog.text


def test_generate_passes_options_through(
    workspace: Path, mocker: MockerFixture, capsys: pytest.CaptureFixture[str]
) -> None:
    """CLI options become configuration overrides."""
    result = GenerationResult(
        llms_txt_path=workspace / "llms.txt",
        llms_full_txt_path=workspace / "llms-full.txt",
        markdown_archive_path=workspace / "markdown.tar.gz",
        markdown_dir=workspace / "markdown",
        files_generated=2,
        sections_count=1,
        pages_processed=2,
    )
    generator = mocker.patch("llm_docs.cli.LlmDocsGenerator")
    generator.return_value.run.return_value = result

    cli.generate(
        base_url=f"{BASE_URL}/",
        product_name="Acme",
        tagline="Widgets",
        archive_format="tar",
        directory_indexes=True,
        include_descriptions=False,
    )

    config = generator.call_args.args[0]
    assert config.base_url == BASE_URL
    assert config.tagline == "Widgets"
    assert config.archive_format == "tar"
    assert config.directory_indexes is True
    assert config.include_descriptions is False
    assert "2 pages, 2 markdown files, 1 sections" in capsys.readouterr().out


def test_inject_sidebar_command(workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """The standalone command updates sidebar pages only."""
    cli.inject_sidebar(base_url=BASE_URL, product_name="Acme")
    assert capsys.readouterr().out.strip() == "updated 4 HTML files"


def test_inject_sidebar_requires_build_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Injecting into a missing build directory fails."""
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as excinfo:
        cli.inject_sidebar(base_url=BASE_URL, product_name="Acme")
    assert excinfo.value.code == 1


def test_validate_links_passes_for_generated_tree(
    workspace: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Links produced by the generator resolve inside the tree."""
    cli.generate(base_url=BASE_URL, product_name="Acme", output_dir=Path("out"))
    capsys.readouterr()

    cli.validate_links(base_url=BASE_URL, output_dir=Path("out"))
    assert capsys.readouterr().out.strip() == "all links resolve"


def test_validate_links_reports_broken_links(
    workspace: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Broken links are listed per file and the command exits 1."""
    cli.generate(base_url=BASE_URL, product_name="Acme", output_dir=Path("out"))
    (workspace / "out" / "markdown" / "extra.md").write_text(
        f"See [the FAQ]({BASE_URL}/faq.md).\n", encoding="utf-8"
    )
    capsys.readouterr()

    with pytest.raises(SystemExit) as excinfo:
        cli.validate_links(base_url=BASE_URL, output_dir=Path("out"))

    assert excinfo.value.code == 1
    assert capsys.readouterr().out.splitlines() == ["extra.md: /faq.md"]


def test_validate_links_requires_markdown_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Without generated Markdown there is nothing to validate."""
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as excinfo:
        cli.validate_links(base_url=BASE_URL)
    assert excinfo.value.code == 1
