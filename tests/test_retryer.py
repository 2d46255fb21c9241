from unittest import mock

import pytest

from nhostcli.retryer import BasicRetryer


class _TestError(Exception):
    pass


def _recorder(fail_until):
    calls = []

    def func(attempt):
        calls.append(attempt)
        if len(calls) < fail_until:
            raise _TestError("test error")
        return attempt

    return func, calls


@mock.patch("nhostcli.retryer.time.sleep")
def test_success_first_attempt(sleep):
    func, calls = _recorder(fail_until=0)
    result = BasicRetryer(3, 1).retry(func)
    assert result == 1
    assert calls == [1]
    sleep.assert_not_called()


@mock.patch("nhostcli.retryer.time.sleep")
def test_success_after_three_attempts(sleep):
    func, calls = _recorder(fail_until=3)
    result = BasicRetryer(5, 1).retry(func)
    assert result == 3
    assert calls == [1, 2, 3]
    assert sum(c.args[0] for c in sleep.call_args_list) == 3


@mock.patch("nhostcli.retryer.time.sleep")
def test_fail_after_four_attempts(sleep):
    func, calls = _recorder(fail_until=100)
    with pytest.raises(_TestError):
        BasicRetryer(4, 1).retry(func)
    assert calls == [1, 2, 3, 4]
    assert sum(c.args[0] for c in sleep.call_args_list) == 6


@mock.patch("nhostcli.retryer.time.sleep")
def test_delay_never_negative(sleep):
    func, calls = _recorder(fail_until=100)
    with pytest.raises(_TestError):
        BasicRetryer(3, 5).retry(func)
    assert calls == [1, 2, 3]
    assert all(c.args[0] >= 0 for c in sleep.call_args_list)


def test_single_attempt_failure_raises():
    func, calls = _recorder(fail_until=100)
    with pytest.raises(_TestError):
        BasicRetryer(1, 1).retry(func)
    assert calls == [1]