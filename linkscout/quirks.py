"""Site-specific adjustments applied to requests before they are sent."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from urllib.parse import parse_qsl, urlsplit

_CRATES_PATTERN = re.compile(r"^(https?://)?(www\.)?crates.io")
_YOUTUBE_PATTERN = re.compile(r"^(https?://)?(www\.)?(youtube\.com)")
_YOUTUBE_SHORT_PATTERN = re.compile(r"^(https?://)?(www\.)?(youtu\.?be)")


@dataclass(frozen=True)
class Request:
    """An outgoing HTTP request: its URL, method and headers."""

    url: str
    method: str = "GET"
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Quirk:
    """A rewrite applied to requests whose URL matches ``pattern``."""

    pattern: re.Pattern[str]
    rewrite: Callable[[Request], Request]


def _with_header(request: Request, name: str, value: str) -> Request:
    headers = {
        key: val for key, val in request.headers.items() if key.lower() != name.lower()
    }
    headers[name] = value
    return replace(request, headers=headers)


def _query(request: Request) -> dict[str, str]:
    return dict(parse_qsl(urlsplit(request.url).query, keep_blank_values=True))


def _thumbnail_url(video_id: str) -> str:
    return f"https://img.youtube.com/vi/{video_id}/0.jpg"


def _crates_rewrite(request: Request) -> Request:
    return _with_header(request, "Accept", "text/html")


def _youtube_rewrite(request: Request) -> Request:
    if urlsplit(request.url).path != "/watch":
        return request
    video_id = _query(request).get("v")
    if video_id is None:
        return request
    return replace(request, url=_thumbnail_url(video_id))


def _youtube_short_rewrite(request: Request) -> Request:
    # Short links carry the video id as their path.
    video_id = urlsplit(request.url).path.lstrip("/")
    if not video_id:
        return request
    return replace(request, url=_thumbnail_url(video_id))


def _default_quirks() -> list[Quirk]:
    return [
        Quirk(_CRATES_PATTERN, _crates_rewrite),
        Quirk(_YOUTUBE_PATTERN, _youtube_rewrite),
        Quirk(_YOUTUBE_SHORT_PATTERN, _youtube_short_rewrite),
    ]


class Quirks:
    """An ordered list of quirks; only the first matching one is applied."""

    def __init__(self, quirks: Iterable[Quirk] | None = None) -> None:
        self._quirks = list(quirks) if quirks is not None else _default_quirks()

    def __repr__(self) -> str:
        return f"Quirks({[quirk.pattern.pattern for quirk in self._quirks]!r})"

    def apply(self, request: Request) -> Request:
        """Return the request rewritten by the first quirk whose pattern matches."""
        for quirk in self._quirks:
            if quirk.pattern.search(request.url):
                return quirk.rewrite(request)
        return request