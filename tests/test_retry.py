"""Tests for orderdaily.utils.retry.retry_call."""

from unittest.mock import MagicMock, patch

import pytest

from orderdaily.errors import ServerError
from orderdaily.utils.retry import retry_call


def test_returns_first_success_without_retry() -> None:
    func = MagicMock(return_value="ok")
    assert retry_call(func, 1, key="v") == "ok"
    func.assert_called_once_with(1, key="v")


def test_single_retry_after_listed_exception() -> None:
    func = MagicMock(side_effect=[ServerError(500, "http://x"), "ok"])
    assert retry_call(func, exceptions=(ServerError,)) == "ok"
    assert func.call_count == 2


def test_reraises_last_exception_when_attempts_exhausted() -> None:
    func = MagicMock(side_effect=ServerError(500, "http://x"))
    with pytest.raises(ServerError):
        retry_call(func, exceptions=(ServerError,), attempts=2)
    assert func.call_count == 2


def test_unlisted_exception_is_not_retried() -> None:
    func = MagicMock(side_effect=KeyError("nope"))
    with pytest.raises(KeyError):
        retry_call(func, exceptions=(ServerError,))
    func.assert_called_once()


def test_waits_between_attempts() -> None:
    func = MagicMock(side_effect=[ServerError(500, "http://x"), "ok"])
    with patch("orderdaily.utils.retry.time.sleep") as sleep:
        retry_call(func, exceptions=(ServerError,), wait=1.5)
    sleep.assert_called_once_with(1.5)


def test_immediate_retry_does_not_sleep() -> None:
    func = MagicMock(side_effect=[ServerError(500, "http://x"), "ok"])
    with patch("orderdaily.utils.retry.time.sleep") as sleep:
        retry_call(func, exceptions=(ServerError,))
    sleep.assert_not_called()


def test_attempts_must_be_positive() -> None:
    with pytest.raises(ValueError):
        retry_call(MagicMock(), attempts=0)


def test_final_attempt_exception_propagates() -> None:
    first, last = ServerError(500, "http://a"), ServerError(500, "http://b")
    func = MagicMock(side_effect=[first, ServerError(500, "http://x"), last])
    with patch("orderdaily.utils.retry.time.sleep") as sleep:
        with pytest.raises(ServerError) as excinfo:
            retry_call(func, exceptions=(ServerError,), attempts=3, wait=0.5)
    assert excinfo.value is last
    assert func.call_count == 3
    assert sleep.call_count == 2


def test_single_attempt_never_retries() -> None:
    func = MagicMock(side_effect=ServerError(500, "http://x"))
    with pytest.raises(ServerError):
        retry_call(func, exceptions=(ServerError,), attempts=1)
    func.assert_called_once()
