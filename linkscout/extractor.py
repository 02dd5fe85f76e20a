"""Extract links from documents of various formats."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath

from linkscout.html import extract_html
from linkscout.markdown import extract_markdown
from linkscout.plaintext import RawUri, extract_plaintext

_MARKDOWN_SUFFIXES = frozenset({"md", "markdown"})
_HTML_SUFFIXES = frozenset({"html"})


class FileType(Enum):
    """The format of a document."""

    MARKDOWN = "markdown"
    HTML = "html"
    PLAINTEXT = "plaintext"

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> FileType:
        """Guess the file type from a path's extension."""
        suffix = PurePath(path).suffix.lower().lstrip(".")
        if suffix in _MARKDOWN_SUFFIXES:
            return cls.MARKDOWN
        if suffix in _HTML_SUFFIXES:
            return cls.HTML
        return cls.PLAINTEXT


@dataclass(frozen=True)
class InputContent:
    """A document's content together with its type and origin."""

    content: str
    file_type: FileType
    source: str | None = None

    @classmethod
    def from_string(cls, content: str, file_type: FileType) -> InputContent:
        """Wrap a string of the given type that has no particular origin."""
        return cls(content=content, file_type=file_type)


@dataclass(frozen=True)
class Extractor:
    """Extracts links from Markdown, HTML and plain text.

    With ``include_verbatim`` set, links inside code blocks and other
    preformatted content are extracted too.
    """

    include_verbatim: bool = False

    def extract(self, input_content: InputContent) -> list[RawUri]:
        """Extract unparsed links from a document, in document order."""
        file_type = input_content.file_type
        if file_type is FileType.MARKDOWN:
            return extract_markdown(input_content.content, self.include_verbatim)
        if file_type is FileType.HTML:
            return extract_html(input_content.content, self.include_verbatim)
        return extract_plaintext(input_content.content)