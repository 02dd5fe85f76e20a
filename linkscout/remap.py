"""Rules that map URLs matching a pattern to a different URL.

Rules are checked in order and only the first matching rule is applied.
Every rule is tried against every URL, so large rule sets cost time.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from urllib.parse import urlsplit, urlunsplit

Rule = tuple["re.Pattern[str]", str]

_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*:")
_SPECIAL_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})
_SHORT_NAMED_GROUP = re.compile(r"(?<!\\)\(\?<(?=[A-Za-z_])")
_GROUP_NAME = re.compile(r"[_0-9A-Za-z]+")
_STRIPPED = "".join(chr(code) for code in range(0x21))


class InvalidUrlRemap(ValueError):
    """A remapping rule is malformed or produced an invalid URL."""


def _compile(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(_SHORT_NAMED_GROUP.sub("(?P<", pattern))


def _parse_url(text: str) -> str:
    """Validate an absolute URL and return it in normalised form."""
    text = text.strip(_STRIPPED)
    if not _SCHEME.match(text):
        raise ValueError(f"not an absolute URL: {text!r}")
    parts = urlsplit(text)
    scheme = parts.scheme.lower()
    netloc, path = parts.netloc, parts.path
    if any(char.isspace() for char in netloc):
        raise ValueError(f"invalid host in URL: {text!r}")
    if scheme in _SPECIAL_SCHEMES:
        userinfo, at, host = netloc.rpartition("@")
        if not host:
            raise ValueError(f"missing host in URL: {text!r}")
        netloc = f"{userinfo}{at}{host.lower()}"
        parts.port  # raises ValueError for a malformed port
        path = path or "/"
    return urlunsplit((scheme, netloc, path, parts.query, parts.fragment))


@dataclass(frozen=True)
class _GroupRef:
    key: int | str


def _parse_template(template: str) -> list[str | _GroupRef]:
    """Split a ``$name`` / ``${name}`` replacement template into pieces."""
    pieces: list[str | _GroupRef] = []
    literal: list[str] = []
    position = 0
    while (dollar := template.find("$", position)) >= 0:
        literal.append(template[position:dollar])
        rest = dollar + 1
        if template.startswith("$", rest):
            literal.append("$")
            position = rest + 1
            continue
        if template.startswith("{", rest):
            close = template.find("}", rest + 1)
            name = template[rest + 1 : close] if close >= 0 else ""
            next_position = close + 1
        else:
            match = _GROUP_NAME.match(template, rest)
            name = match.group() if match else ""
            next_position = match.end() if match else rest
        if not name:
            literal.append("$")
            position = rest
            continue
        pieces.append("".join(literal))
        literal = []
        is_index = name.isascii() and name.isdigit()
        pieces.append(_GroupRef(int(name) if is_index else name))
        position = next_position
    literal.append(template[position:])
    pieces.append("".join(literal))
    return pieces


def _group_text(match: re.Match[str], key: int | str) -> str:
    try:
        return match.group(key) or ""
    except IndexError:
        return ""


def _expander(template: str):
    pieces = _parse_template(template)

    def expand(match: re.Match[str]) -> str:
        return "".join(
            _group_text(match, piece.key) if isinstance(piece, _GroupRef) else piece
            for piece in pieces
        )

    return expand


class Remaps:
    """An ordered set of ``(pattern, replacement)`` remapping rules.

    Patterns may be compiled expressions or pattern strings. Replacements
    refer to capture groups as ``$1``, ``$name`` or ``${name}``; ``$$`` is a
    literal dollar sign.
    """

    def __init__(self, patterns: Iterable[tuple[str | re.Pattern[str], str]] = ()):
        self._rules: list[Rule] = [
            (_compile(pattern), replacement) for pattern, replacement in patterns
        ]

    @classmethod
    def from_strings(cls, remaps: Iterable[str]) -> Remaps:
        """Build rules from strings of the form ``REGEX URL``.

        Raises InvalidUrlRemap for a string that is not two whitespace
        separated parts, and re.error for an invalid pattern.
        """
        rules = []
        for remap in remaps:
            params = remap.split()
            if len(params) != 2:
                raise InvalidUrlRemap(
                    "Cannot parse into URI remapping, must be a Regex pattern "
                    f"and a URL separated by whitespaces: {remap}"
                )
            pattern, replacement = params
            rules.append((_compile(pattern), replacement))
        return cls(rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __getitem__(self, index: int) -> Rule:
        return self._rules[index]

    def __repr__(self) -> str:
        rules = [(pattern.pattern, replacement) for pattern, replacement in self._rules]
        return f"Remaps({rules!r})"

    def remap(self, original: str) -> str:
        """Apply the first matching rule to ``original``.

        Returns the normalised original URL if no rule matches. Raises
        InvalidUrlRemap if the rule produces an invalid URL.
        """
        url = _parse_url(original)
        for pattern, replacement in self._rules:
            if pattern.search(url):
                after = pattern.sub(_expander(replacement), url)
                try:
                    return _parse_url(after)
                except ValueError as exc:
                    raise InvalidUrlRemap(
                        "The remapping pattern must produce a valid URL, "
                        f"but it is not: {after}"
                    ) from exc
        return url