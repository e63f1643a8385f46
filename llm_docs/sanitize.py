r"""String helpers shared by the parsers and generators.

Every function here is a pure transform over ``str``: title-casing of
identifiers, anchor slugs, blank-line cleanup, and HTML-tag stripping that
leaves Markdown code spans alone.

Example
-------
>>> from llm_docs.sanitize import doc_id_to_title, strip_html_tags
>>> doc_id_to_title("getting-started/first_steps")
'First Steps'
>>> strip_html_tags("Use <b>`<br>`</b> here")
'Use `<br>` here'
"""

from __future__ import annotations

import re

WORD_START_PATTERN = re.compile(r"\b\w")
CAMEL_BOUNDARY_PATTERN = re.compile(r"([a-z])([A-Z])")
SEPARATOR_PATTERN = re.compile(r"[-_]")
HTML_TAG_PATTERN = re.compile(r"<[^>]*>")
BLANK_RUN_PATTERN = re.compile(r"\n{3,}")
# Fenced blocks first so a fence is never mistaken for inline code.
CODE_SPAN_PATTERN = re.compile(r"(```[\s\S]*?```|`[^`\n]+`)")


def _capitalize_words(text: str) -> str:
    """Upper-case the first character of each word, leaving the rest intact."""
    return WORD_START_PATTERN.sub(lambda match: match.group(0).upper(), text)


def doc_id_to_title(doc_id: str) -> str:
    """Derive a display title from the last segment of a doc id.

    Parameters
    ----------
    doc_id : str
        Slash-delimited document identifier such as ``"guides/quick-start"``.

    Returns
    -------
    str
        Title-cased words of the final segment (``"Quick Start"``).
    """
    last_segment = doc_id.split("/")[-1] or doc_id
    return _capitalize_words(SEPARATOR_PATTERN.sub(" ", last_segment))


def format_section_label(name: str) -> str:
    """Turn a sidebar key such as ``apiReference`` into ``Api Reference``."""
    spaced = CAMEL_BOUNDARY_PATTERN.sub(r"\1 \2", SEPARATOR_PATTERN.sub(" ", name))
    return _capitalize_words(spaced)


def clean_markdown(content: str) -> str:
    """Collapse runs of blank lines and trim surrounding whitespace."""
    return BLANK_RUN_PATTERN.sub("\n\n", content).strip()


def strip_html_tags(content: str) -> str:
    """Remove HTML tags that sit outside fenced blocks and inline code.

    The text is split on code spans and only the prose segments are
    stripped, so a tag-like sequence can never swallow a code span that sits
    between a stray ``<`` and ``>``. Running the function on its own output
    returns the same text.
    """
    segments = CODE_SPAN_PATTERN.split(content)
    return "".join(
        segment if index % 2 else HTML_TAG_PATTERN.sub("", segment)
        for index, segment in enumerate(segments)
    )


def slugify(text: str) -> str:
    """Return the anchor slug used by table-of-contents links."""
    slug = re.sub(r"[^a-z0-9\s-]", "", text.lower())
    slug = re.sub(r"\s+", "-", slug)
    return re.sub(r"-+", "-", slug).strip()


__all__ = [
    "clean_markdown",
    "doc_id_to_title",
    "format_section_label",
    "slugify",
    "strip_html_tags",
]
