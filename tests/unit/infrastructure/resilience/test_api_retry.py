import asyncio
import pytest
import httpx
from unittest.mock import AsyncMock, MagicMock

from musiccli.domain.events.api_events import ApiCallFailed, ApiCallInitiated, ApiCallSucceeded, RetryScheduled
from musiccli.infrastructure.http.errors import ECONNABORTED, ERR_NETWORK, MusicApiError
from musiccli.infrastructure.resilience.api_retry import ApiRetryService
from musiccli.infrastructure.resilience.retry_policy import RetryPolicy


def network_error(method: str = "GET") -> MusicApiError:
    return MusicApiError("connection refused", code=ERR_NETWORK, method=method, url="http://music.test/api/x")


def response_error(status: int, method: str = "GET") -> MusicApiError:
    request = httpx.Request(method, "http://music.test/api/x")
    return MusicApiError.from_response(httpx.Response(status, request=request))


@pytest.fixture
def retry_service(fake_sleep):
    return ApiRetryService(policy=RetryPolicy(), sleep=fake_sleep)


@pytest.mark.parametrize("failures", [0, 1, 2, 3])
def test_succeeds_after_n_network_failures(retry_service, sleeps, failures):
    func = AsyncMock(side_effect=[network_error() for _ in range(failures)] + ["body"])

    result = asyncio.run(retry_service.execute_with_retry(func, "descriptor", endpoint_name="/x"))

    assert result == "body"
    assert func.await_count == failures + 1
    assert sleeps == [1.0, 2.0, 3.0][:failures]


def test_gives_up_after_four_attempts_with_linear_delays(retry_service, sleeps):
    errors = [network_error() for _ in range(4)]
    func = AsyncMock(side_effect=errors)

    with pytest.raises(MusicApiError) as exc_info:
        asyncio.run(retry_service.execute_with_retry(func, "descriptor"))

    assert func.await_count == 4
    assert sleeps == [1.0, 2.0, 3.0]
    # Last observed error propagates unchanged.
    assert exc_info.value is errors[-1]


def test_same_arguments_on_every_attempt(retry_service):
    func = AsyncMock(side_effect=[network_error(), "ok"])

    asyncio.run(retry_service.execute_with_retry(func, "descriptor", flag=True))

    assert [c.args for c in func.await_args_list] == [("descriptor",), ("descriptor",)]
    assert all(c.kwargs == {"flag": True} for c in func.await_args_list)


@pytest.mark.parametrize("error", [response_error(404), response_error(400), response_error(500, method="POST")])
def test_non_retryable_error_fails_after_one_attempt(retry_service, sleeps, error):
    func = AsyncMock(side_effect=error)

    with pytest.raises(MusicApiError):
        asyncio.run(retry_service.execute_with_retry(func))

    assert func.await_count == 1
    assert sleeps == []


def test_timeout_is_retried(retry_service):
    timeout = MusicApiError("timed out", code=ECONNABORTED, method="POST")
    func = AsyncMock(side_effect=[timeout, "ok"])

    assert asyncio.run(retry_service.execute_with_retry(func)) == "ok"
    assert func.await_count == 2


def test_unexpected_exception_propagates_immediately(retry_service):
    func = AsyncMock(side_effect=KeyError("boom"))

    with pytest.raises(KeyError):
        asyncio.run(retry_service.execute_with_retry(func))

    assert func.await_count == 1


def test_zero_retries_policy(fake_sleep, sleeps):
    service = ApiRetryService(policy=RetryPolicy(retries=0), sleep=fake_sleep)
    func = AsyncMock(side_effect=network_error())

    with pytest.raises(MusicApiError):
        asyncio.run(service.execute_with_retry(func))

    assert func.await_count == 1
    assert sleeps == []


def test_events_emitted_in_order(fake_sleep):
    events = []
    service = ApiRetryService(policy=RetryPolicy(retries=1), event_listener=events.append, sleep=fake_sleep)
    func = AsyncMock(side_effect=[network_error(), "ok"])

    asyncio.run(service.execute_with_retry(func, endpoint_name="/lyric"))

    assert [type(e) for e in events] == [ApiCallInitiated, RetryScheduled, ApiCallInitiated, ApiCallSucceeded]
    assert events[1].attempt_number == 1
    assert events[1].delay_seconds == 1.0
    assert events[1].error_code == ERR_NETWORK
    assert events[3].attempts == 2
    assert all(e.endpoint == "/lyric" for e in events)


def test_failed_event_carries_status(fake_sleep):
    events = []
    service = ApiRetryService(policy=RetryPolicy(), event_listener=events.append, sleep=fake_sleep)
    func = AsyncMock(side_effect=response_error(404))

    with pytest.raises(MusicApiError):
        asyncio.run(service.execute_with_retry(func, endpoint_name="/songlist"))

    failed = events[-1]
    assert isinstance(failed, ApiCallFailed)
    assert failed.status_code == 404
    assert failed.attempts == 1


def test_listener_errors_do_not_break_the_call(fake_sleep):
    listener = MagicMock(side_effect=RuntimeError("listener down"))
    service = ApiRetryService(event_listener=listener, sleep=fake_sleep)
    func = AsyncMock(return_value="ok")

    assert asyncio.run(service.execute_with_retry(func)) == "ok"
    assert listener.call_count == 2
