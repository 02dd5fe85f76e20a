"""Decide which links should be checked and which should be skipped."""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from urllib.parse import urlsplit, urlunsplit

_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*:")
_SPECIAL_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})
_STRIPPED = "".join(chr(code) for code in range(0x21))

# Reserved example second-level domains (RFC 2606, section 3). They should
# not be dereferenced as they are not meant to have content.
EXAMPLE_DOMAINS = frozenset({"example.com", "example.org", "example.net", "example.edu"})

# Reserved example top-level domains (RFC 2606, section 2).
EXAMPLE_TLDS = frozenset({".test", ".example", ".invalid", ".localhost"})

# Twitter requires an account to view tweets.
UNSUPPORTED_DOMAINS = frozenset({"twitter.com"})

# Well-known false positives, skipped unless explicitly included.
FALSE_POSITIVE_PATTERNS = (
    r"^https?://schemas.openxmlformats.org",
    r"^https?://schemas.zune.net",
    r"^https?://www.w3.org/1999/xhtml",
    r"^https?://www.w3.org/1999/xlink",
    r"^https?://www.w3.org/2000/svg",
    r"^https?://ogp.me/ns#",
    r"^https?://schemas.microsoft.com",
    r"^https?://(.*)/xmlrpc.php$",
)

_FALSE_POSITIVES = tuple(re.compile(pattern) for pattern in FALSE_POSITIVE_PATTERNS)


@dataclass(frozen=True)
class Uri:
    """A parsed, normalised absolute URI."""

    url: str

    def __str__(self) -> str:
        return self.url

    def _host(self) -> str | None:
        return urlsplit(self.url).hostname or None

    def _ip(self) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
        host = self._host()
        if host is None:
            return None
        try:
            return ipaddress.ip_address(host)
        except ValueError:
            return None

    def domain(self) -> str | None:
        """Return the host name, or None if there is none or it is an IP address."""
        if self._ip() is not None:
            return None
        return self._host()

    def scheme(self) -> str:
        """Return the lower-case scheme."""
        return urlsplit(self.url).scheme

    def path(self) -> str:
        """Return the path component."""
        return urlsplit(self.url).path

    def is_mail(self) -> bool:
        """Return whether this is a ``mailto:`` address."""
        return self.scheme() == "mailto"

    def is_loopback(self) -> bool:
        """Return whether the host is a loopback IPv4 or IPv6 address."""
        ip = self._ip()
        return ip is not None and ip.is_loopback

    def is_private(self) -> bool:
        """Return whether the host is a private IPv4 address."""
        ip = self._ip()
        return isinstance(ip, ipaddress.IPv4Address) and ip.is_private and not (
            ip.is_loopback or ip.is_link_local
        )

    def is_link_local(self) -> bool:
        """Return whether the host is a link-local IPv4 address."""
        ip = self._ip()
        return isinstance(ip, ipaddress.IPv4Address) and ip.is_link_local


def parse_uri(text: str) -> Uri:
    """Parse an absolute URI, raising ValueError if it is not valid."""
    text = text.strip(_STRIPPED)
    if not _SCHEME.match(text):
        raise ValueError(f"not an absolute URI: {text!r}")
    parts = urlsplit(text)
    scheme = parts.scheme.lower()
    netloc, path = parts.netloc, parts.path
    if any(char.isspace() for char in netloc):
        raise ValueError(f"invalid host in URI: {text!r}")
    if scheme in _SPECIAL_SCHEMES:
        userinfo, at, host = netloc.rpartition("@")
        if not host:
            raise ValueError(f"missing host in URI: {text!r}")
        netloc = f"{userinfo}{at}{host.lower()}"
        parts.port  # raises ValueError for a malformed port
        path = path or "/"
    return Uri(urlunsplit((scheme, netloc, path, parts.query, parts.fragment)))


def _compile_all(patterns: Iterable[str | re.Pattern[str]]) -> tuple[re.Pattern[str], ...]:
    return tuple(
        pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)
        for pattern in patterns
    )


class Excludes:
    """Patterns of links that are excluded from checking."""

    def __init__(self, patterns: Iterable[str | re.Pattern[str]] = ()):
        self.patterns = _compile_all(patterns)

    def __repr__(self) -> str:
        return f"Excludes({[p.pattern for p in self.patterns]!r})"

    def is_match(self, text: str) -> bool:
        """Return whether any pattern matches somewhere in ``text``."""
        return any(pattern.search(text) for pattern in self.patterns)

    def is_empty(self) -> bool:
        """Return whether no patterns are defined."""
        return not self.patterns


class Includes:
    """Patterns of links that are explicitly included for checking."""

    def __init__(self, patterns: Iterable[str | re.Pattern[str]] = ()):
        self.patterns = _compile_all(patterns)

    def __repr__(self) -> str:
        return f"Includes({[p.pattern for p in self.patterns]!r})"

    def is_match(self, text: str) -> bool:
        """Return whether any pattern matches somewhere in ``text``."""
        return any(pattern.search(text) for pattern in self.patterns)

    def is_empty(self) -> bool:
        """Return whether no patterns are defined."""
        return not self.patterns


def is_false_positive(text: str) -> bool:
    """Return whether ``text`` is a well-known false positive."""
    return any(pattern.search(text) for pattern in _FALSE_POSITIVES)


def is_example_domain(uri: Uri) -> bool:
    """Return whether the URI points at a reserved example domain (RFC 2606)."""
    domain = uri.domain()
    if domain is not None:
        _, dot, parent = domain.partition(".")
        if domain in EXAMPLE_DOMAINS or (dot and parent in EXAMPLE_DOMAINS):
            return True
        return any(domain.endswith(tld) for tld in EXAMPLE_TLDS)
    if uri.is_mail():
        path = uri.path()
        return any(path.endswith(example) for example in EXAMPLE_DOMAINS)
    return False


def is_unsupported_domain(uri: Uri) -> bool:
    """Return whether the URI points at a domain known not to be checkable."""
    domain = uri.domain()
    if domain is None:
        return False
    return any(domain.endswith(unsupported) for unsupported in UNSUPPORTED_DOMAINS)


@dataclass
class Filter:
    """Decides whether a URI should be checked or skipped.

    Includes take precedence over excludes. With ``check_example_domains``
    set, reserved example domains are not skipped.
    """

    includes: Includes | None = None
    excludes: Excludes | None = None
    schemes: set[str] = field(default_factory=set)
    exclude_private_ips: bool = False
    exclude_link_local_ips: bool = False
    exclude_loopback_ips: bool = False
    include_mail: bool = False
    check_example_domains: bool = False

    def is_mail_excluded(self, uri: Uri) -> bool:
        """Return whether the URI is an e-mail address and mail is not checked."""
        return uri.is_mail() and not self.include_mail

    def is_ip_excluded(self, uri: Uri) -> bool:
        """Return whether the URI's IP address belongs to an excluded range."""
        return (
            (self.exclude_loopback_ips and uri.is_loopback())
            or (self.exclude_private_ips and uri.is_private())
            or (self.exclude_link_local_ips and uri.is_link_local())
        )

    def is_host_excluded(self, uri: Uri) -> bool:
        """Return whether the host is ``localhost`` while loopback is excluded."""
        return self.exclude_loopback_ips and uri.domain() == "localhost"

    def is_scheme_excluded(self, uri: Uri) -> bool:
        """Return whether the URI's scheme is not among the allowed schemes."""
        if not self.schemes:
            return False
        return uri.scheme() not in self.schemes

    def _includes_empty(self) -> bool:
        return self.includes is None or self.includes.is_empty()

    def _excludes_empty(self) -> bool:
        return self.excludes is None or self.excludes.is_empty()

    def _includes_match(self, text: str) -> bool:
        return self.includes is not None and self.includes.is_match(text)

    def _excludes_match(self, text: str) -> bool:
        return self.excludes is not None and self.excludes.is_match(text)

    def is_excluded(self, uri: Uri) -> bool:
        """Return whether the URI should be skipped."""
        if (
            self.is_scheme_excluded(uri)
            or self.is_host_excluded(uri)
            or self.is_ip_excluded(uri)
            or self.is_mail_excluded(uri)
            or (not self.check_example_domains and is_example_domain(uri))
            or is_unsupported_domain(uri)
        ):
            return True

        text = uri.url

        if self._includes_empty():
            if self._excludes_empty():
                return is_false_positive(text)
        elif self._includes_match(text):
            return False

        return (
            is_false_positive(text)
            or self._excludes_empty()
            or self._excludes_match(text)
        )