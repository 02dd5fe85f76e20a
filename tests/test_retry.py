import errno
import http.client
import socket
import urllib.error
from http import HTTPStatus

import pytest

from linkscout.retry import should_retry_error, should_retry_io, should_retry_status


@pytest.mark.parametrize(
    "status",
    [
        HTTPStatus.INTERNAL_SERVER_ERROR,
        HTTPStatus.BAD_GATEWAY,
        HTTPStatus.SERVICE_UNAVAILABLE,
        HTTPStatus.GATEWAY_TIMEOUT,
        HTTPStatus.REQUEST_TIMEOUT,
        HTTPStatus.TOO_MANY_REQUESTS,
    ],
)
def test_retryable_statuses(status):
    assert should_retry_status(status) is True


@pytest.mark.parametrize(
    "status",
    [
        HTTPStatus.OK,
        HTTPStatus.NO_CONTENT,
        HTTPStatus.MOVED_PERMANENTLY,
        HTTPStatus.BAD_REQUEST,
        HTTPStatus.FORBIDDEN,
        HTTPStatus.NOT_FOUND,
        HTTPStatus.CONTINUE,
    ],
)
def test_non_retryable_statuses(status):
    assert should_retry_status(status) is False


def test_all_server_errors_are_retried():
    assert all(should_retry_status(code) for code in range(500, 600))


def test_client_errors_mostly_not_retried():
    retried = {code for code in range(400, 500) if should_retry_status(code)}
    assert retried == {HTTPStatus.REQUEST_TIMEOUT, HTTPStatus.TOO_MANY_REQUESTS}


@pytest.mark.parametrize(
    "error",
    [
        ConnectionResetError(),
        ConnectionAbortedError(),
        TimeoutError(),
        socket.timeout(),
        OSError(errno.ECONNRESET, "reset"),
    ],
)
def test_transient_io_errors(error):
    assert should_retry_io(error) is True


@pytest.mark.parametrize(
    "error",
    [ConnectionRefusedError(), FileNotFoundError(), PermissionError(), OSError("x")],
)
def test_permanent_io_errors(error):
    assert should_retry_io(error) is False


def test_timeout_error_is_retried():
    assert should_retry_error(TimeoutError("timed out")) is True


def test_connection_refused_is_not_retried():
    assert should_retry_error(ConnectionRefusedError()) is False


def test_incomplete_read_is_retried():
    assert should_retry_error(http.client.IncompleteRead(b"partial", 10)) is True


def test_remote_disconnected_is_retried():
    assert should_retry_error(http.client.RemoteDisconnected("closed")) is True


def test_unrelated_error_is_not_retried():
    assert should_retry_error(ValueError("bad")) is False


def test_cause_is_examined():
    try:
        try:
            raise ConnectionResetError()
        except ConnectionResetError as inner:
            raise RuntimeError("wrapped") from inner
    except RuntimeError as outer:
        assert should_retry_error(outer) is True


def test_url_error_reason_is_examined():
    assert should_retry_error(urllib.error.URLError(socket.timeout())) is True
    assert should_retry_error(urllib.error.URLError(ConnectionRefusedError())) is False
    assert should_retry_error(urllib.error.URLError("unknown host")) is False


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (HTTPStatus.SERVICE_UNAVAILABLE, True),
        (HTTPStatus.TOO_MANY_REQUESTS, True),
        (HTTPStatus.NOT_FOUND, False),
    ],
)
def test_http_error_uses_status(status, expected):
    error = urllib.error.HTTPError("https://example.com", status, "msg", None, None)
    assert should_retry_error(error) is expected
    assert should_retry_error(error) is should_retry_status(status)