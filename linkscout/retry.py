"""Decide whether a failed request is worth retrying."""

from __future__ import annotations

import http.client
import urllib.error
from collections.abc import Iterator
from http import HTTPStatus

_RETRYABLE_CLIENT_ERRORS = frozenset(
    {HTTPStatus.REQUEST_TIMEOUT, HTTPStatus.TOO_MANY_REQUESTS}
)


def should_retry_status(status: int) -> bool:
    """Return whether a response with this HTTP status code should be retried.

    Server errors, request timeouts and rate limiting are retried; everything
    else is not.
    """
    if 500 <= status <= 599:
        return True
    return status in _RETRYABLE_CLIENT_ERRORS


def should_retry_io(error: OSError) -> bool:
    """Return whether an I/O error is transient: a reset, abort or timeout."""
    return isinstance(
        error, (ConnectionResetError, ConnectionAbortedError, TimeoutError)
    )


def _chain(error: BaseException) -> Iterator[BaseException]:
    """Yield the error and the errors that caused it, without repeats."""
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if isinstance(current, urllib.error.URLError) and isinstance(
            current.reason, BaseException
        ):
            current = current.reason
        else:
            current = current.__cause__ or current.__context__


def should_retry_error(error: BaseException) -> bool:
    """Return whether a request that failed with ``error`` should be retried.

    Timeouts, connections reset or aborted mid-way and responses cut short
    are retried. HTTP errors are judged by their status code. The error's
    causes are examined too.
    """
    for err in _chain(error):
        if isinstance(err, urllib.error.HTTPError):
            return should_retry_status(err.code)
        if isinstance(err, http.client.IncompleteRead):
            return True
        if isinstance(err, urllib.error.URLError):
            continue
        if isinstance(err, OSError):
            return should_retry_io(err)
    return False