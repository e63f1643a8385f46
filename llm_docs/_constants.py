"""Common literal values used across llm_docs.

These constants keep output filenames and markers centralized so the
generators, the sidebar injector, and tests can import the same values without
drifting. Intended for internal use within the llm_docs package.

Examples
--------
>>> from llm_docs import _constants
>>> _constants.LLMS_TXT
'llms.txt'
>>> _constants.ARCHIVE_FILENAMES["tar"]
'markdown.tar.gz'
"""

LLMS_TXT = "llms.txt"
LLMS_FULL_TXT = "llms-full.txt"
MARKDOWN_DIR = "markdown"
MARKDOWN_ZIP = "markdown.zip"
MARKDOWN_TARBALL = "markdown.tar.gz"
ARCHIVE_FILENAMES = {"zip": MARKDOWN_ZIP, "tar": MARKDOWN_TARBALL}

SIDEBAR_MARKER = "LLM Resources"
SIDEBAR_SELECTOR = "ul.theme-doc-sidebar-menu.menu__list"

IGNORED_HTML_FILES = frozenset({"404.html"})
IGNORED_BUILD_DIRS = frozenset({"search", "assets"})

DESCRIPTION_MAX_LENGTH = 100
UNTITLED = "Untitled"
