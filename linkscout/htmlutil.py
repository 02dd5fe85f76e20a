"""Helpers shared by the HTML link extractors."""

from __future__ import annotations

from linkscout.plaintext import find_emails

_VERBATIM_ELEMENTS = frozenset(
    {
        "code",
        "kbd",
        "listing",
        "noscript",
        "plaintext",
        "pre",
        "samp",
        "script",
        "textarea",
        "var",
        "xmp",
    }
)


def is_email_link(text: str) -> bool:
    """Return whether ``text`` is exactly an e-mail address, with or without ``mailto:``."""
    email = next(find_emails(text), None)
    if email is None:
        return False
    return text.removeprefix("mailto:") == email


def is_verbatim_elem(name: str) -> bool:
    """Return whether the element holds preformatted (verbatim) content."""
    return name in _VERBATIM_ELEMENTS