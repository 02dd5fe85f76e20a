"""Find links and e-mail addresses in plain text."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class RawUri:
    """An unparsed link as found in a document.

    ``element`` and ``attribute`` name the HTML element and attribute the link
    came from, if any.
    """

    text: str
    element: str | None = None
    attribute: str | None = None


_URL_START = re.compile(r"(?<![A-Za-z0-9+.\-])[A-Za-z][A-Za-z0-9+.\-]*://")
_URL_STOP = frozenset('<>"`')
_TRAILING = frozenset(".,:;?!'")
_CLOSERS = {")": "(", "]": "[", "}": "{"}

_LOCAL_CHAR = r"[\w!#$%&'*+\-/=?^`{|}~.]"
_LABEL = r"[^\W_]+(?:-+[^\W_]+)*"
_EMAIL = re.compile(
    rf"(?<!{_LOCAL_CHAR})(?P<local>{_LOCAL_CHAR}+)@(?P<domain>{_LABEL}(?:\.{_LABEL})+)"
)


def _url_end(text: str, start: int) -> int:
    """Return the end of a URL whose body starts at ``start``."""
    depth = {"(": 0, "[": 0, "{": 0}
    end = start
    for position, char in enumerate(text[start:], start=start):
        if char.isspace() or char in _URL_STOP or not char.isprintable():
            break
        if char in _TRAILING:
            continue
        if char in depth:
            depth[char] += 1
        elif char in _CLOSERS:
            opener = _CLOSERS[char]
            if depth[opener] == 0:
                break
            depth[opener] -= 1
        end = position + 1
    return end


def _url_spans(text: str) -> Iterator[tuple[int, int]]:
    position = 0
    while match := _URL_START.search(text, position):
        end = _url_end(text, match.end())
        if end > match.end():
            yield match.start(), end
            position = end
        else:
            position = match.end()


def _email_spans(text: str) -> Iterator[tuple[int, int]]:
    for match in _EMAIL.finditer(text):
        local = match.group("local")
        trimmed = local.lstrip(".")
        if not trimmed or trimmed.endswith("."):
            continue
        yield match.start() + len(local) - len(trimmed), match.end()


def find_emails(text: str) -> Iterator[str]:
    """Yield the e-mail addresses found in ``text``, in order."""
    for start, end in _email_spans(text):
        yield text[start:end]


def find_links(text: str) -> Iterator[str]:
    """Yield URLs and e-mail addresses found in ``text``, in order of position.

    URLs must carry a scheme. Trailing punctuation and unbalanced closing
    brackets are not part of a URL. E-mail addresses inside URLs are ignored.
    """
    urls = list(_url_spans(text))
    emails = [
        (start, end)
        for start, end in _email_spans(text)
        if not any(start < url_end and url_start < end for url_start, url_end in urls)
    ]
    for start, end in sorted(urls + emails):
        yield text[start:end]


def extract_plaintext(text: str) -> list[RawUri]:
    """Extract unparsed links from plain text."""
    return [RawUri(link) for link in find_links(text)]