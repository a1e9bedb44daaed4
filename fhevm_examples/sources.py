"""Example source files.

A registry entry points at a contract and a test file that may not have been
written yet.  :func:`read_source` reports either a :class:`FoundSource`
carrying the exact text or a :class:`MissingSource`; both tools match on the
two cases explicitly.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Union

from pydantic import BaseModel

from fhevm_examples.utils import FilesystemError


class FoundSource(BaseModel):
    """A source file that exists, with its verbatim text."""

    path: Path
    text: str

    @property
    def name(self) -> str:
        return self.path.name


class MissingSource(BaseModel):
    """A declared source file that does not exist on disk."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.name


SourceFile = Union[FoundSource, MissingSource]


def source_exists(path: str | Path) -> bool:
    """Whether a declared source has been written, without reading it.

    Raises:
        FilesystemError: If something other than a regular file sits at *path*.
    """
    file_path = Path(path)
    if file_path.is_file():
        return True
    if file_path.exists():
        raise FilesystemError(file_path, "Source path is not a regular file")
    return False


def read_source(path: str | Path) -> SourceFile:
    """Read a source file, reporting absence as a value rather than an error.

    The text is decoded as UTF-8 with newlines left untouched.

    Raises:
        FilesystemError: If the path exists but cannot be read.
    """
    file_path = Path(path)
    if not source_exists(file_path):
        return MissingSource(path=file_path)
    try:
        with file_path.open("r", encoding="utf-8", newline="") as fh:
            text = fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise FilesystemError(file_path, f"Cannot read source file ({exc})") from exc
    return FoundSource(path=file_path, text=text)


# ---------------------------------------------------------------------------
# Doc-comment extraction
# ---------------------------------------------------------------------------

_DOC_COMMENT_RE = re.compile(r"/\*\*(.*?)\*/", re.DOTALL)
_LINE_PREFIX_RE = re.compile(r"^\s*\*?\s?")

_LANGUAGES: dict[str, str] = {
    ".sol": "solidity",
    ".ts": "typescript",
    ".js": "javascript",
    ".json": "json",
    ".py": "python",
}


def extract_doc_comments(text: str) -> list[str]:
    """Return the ``/** ... */`` blocks of *text* with comment markers removed.

    Leading ``*`` gutters are stripped from every line, blank edge lines are
    dropped, and empty blocks are skipped.  Order follows the source.
    """
    comments: list[str] = []
    for match in _DOC_COMMENT_RE.finditer(text):
        lines = [_LINE_PREFIX_RE.sub("", line).rstrip() for line in match.group(1).splitlines()]
        while lines and not lines[0]:
            lines.pop(0)
        while lines and not lines[-1]:
            lines.pop()
        if lines:
            comments.append("\n".join(lines))
    return comments


def code_language(path: str | Path) -> str:
    """Markdown fence language for a source path (empty when unknown)."""
    return _LANGUAGES.get(Path(path).suffix.lower(), "")
