"""Extract links and fragments from Markdown documents."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from markdown_it import MarkdownIt
from markdown_it.token import Token

from linkscout.html import extract_html, extract_html_fragments
from linkscout.plaintext import RawUri, extract_plaintext

_TEXT_TOKENS = frozenset({"text", "text_special"})
_HTML_TOKENS = frozenset({"html_block", "html_inline"})
_CODE_BLOCK_TOKENS = frozenset({"fence", "code_block"})
_HEADING_ATTRIBUTES = re.compile(r"\s*\{([^{}]*)\}\s*$")


class _Parser(MarkdownIt):
    """CommonMark parser that keeps link destinations exactly as written."""

    def validateLink(self, url: str) -> bool:  # noqa: N802
        return True

    def normalizeLink(self, url: str) -> str:  # noqa: N802
        return url


_PARSER = _Parser("commonmark")


def _walk(tokens: Iterable[Token]) -> Iterator[Token]:
    """Yield tokens and their children in document order."""
    for token in tokens:
        yield token
        if token.children:
            yield from _walk(token.children)


def extract_markdown(text: str, include_verbatim: bool) -> list[RawUri]:
    """Extract unparsed links from a Markdown string, in document order.

    Links inside code blocks and inline code are skipped unless
    ``include_verbatim`` is set.
    """
    links: list[RawUri] = []
    for token in _walk(_PARSER.parse(text)):
        kind = token.type
        if kind == "link_open":
            href = str(token.attrGet("href") or "")
            links.append(RawUri(href, element="a", attribute="href"))
        elif kind == "image":
            src = str(token.attrGet("src") or "")
            links.append(RawUri(src, element="img", attribute="src"))
        elif kind in _CODE_BLOCK_TOKENS:
            if include_verbatim:
                links.extend(extract_plaintext(token.content))
        elif kind in _TEXT_TOKENS:
            links.extend(extract_plaintext(token.content))
        elif kind in _HTML_TOKENS:
            links.extend(extract_html(token.content, include_verbatim))
        elif kind == "code_inline":
            if include_verbatim:
                links.extend(extract_plaintext(token.content))
    return links


def into_kebab_case(text: str) -> str:
    """Convert heading text into a kebab-case identifier."""
    chars = []
    for char in text:
        if char.isalnum() or char in "_-":
            chars.append(char.lower() if char.isascii() else char)
        elif char.isspace():
            chars.append("-")
    return "".join(chars)


class HeadingIdGenerator:
    """Generates unique heading identifiers the way GitHub does."""

    def __init__(self) -> None:
        self._counter: dict[str, int] = {}

    def generate(self, heading: str) -> str:
        """Return a unique identifier for ``heading``."""
        base = into_kebab_case(heading)
        count = self._counter.get(base, 0)
        self._counter[base] = count + 1
        return f"{base}-{count}" if count else base


def _split_heading_attributes(heading: str) -> tuple[str, str | None]:
    """Strip a trailing ``{#id .class}`` block, returning text and id."""
    match = _HEADING_ATTRIBUTES.search(heading)
    if match is None:
        return heading, None
    heading_id = None
    for part in match.group(1).split():
        if part.startswith("#") and len(part) > 1:
            heading_id = part[1:]
    return heading[: match.start()], heading_id


def extract_markdown_fragments(text: str) -> set[str]:
    """Extract fragment identifiers from a Markdown string.

    Headings yield GitHub-style kebab-case identifiers. A heading with an
    explicit ``{#id}`` attribute yields that id as well. HTML ``id``
    attributes are included too.
    """
    fragments: set[str] = set()
    generator = HeadingIdGenerator()
    in_heading = False
    heading_parts: list[str] = []

    for token in _walk(_PARSER.parse(text)):
        kind = token.type
        if kind == "heading_open":
            in_heading = True
            heading_parts.clear()
        elif kind == "heading_close":
            heading, heading_id = _split_heading_attributes("".join(heading_parts))
            if heading_id is not None:
                fragments.add(heading_id)
            if heading:
                fragments.add(generator.generate(heading))
            heading_parts.clear()
            in_heading = False
        elif kind in _TEXT_TOKENS:
            if in_heading:
                heading_parts.append(token.content)
        elif kind in _HTML_TOKENS:
            fragments |= extract_html_fragments(token.content)
    return fragments