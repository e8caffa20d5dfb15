import pytest
import httpx
from typer.testing import CliRunner
from types import SimpleNamespace
from typing import Callable, List

from musiccli.infrastructure.api.music_client import MusicApiClient
from musiccli.infrastructure.cli.display import ConsoleDisplay
from musiccli.infrastructure.config import settings
from musiccli.infrastructure.http.client_config import DEFAULT_TIMEOUT_MS, ClientConfig
from musiccli.infrastructure.resilience.api_retry import ApiRetryService
from musiccli.infrastructure.resilience.retry_policy import RetryPolicy

BASE_URL = "http://music.test/api"


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture
def sleeps() -> List[float]:
    """Backoff delays requested by the retry service, in seconds."""
    return []


@pytest.fixture
def fake_sleep(sleeps):
    """Records the delay instead of suspending, so tests never wait."""
    async def _sleep(delay: float) -> None:
        sleeps.append(delay)
    return _sleep


@pytest.fixture
def sent_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def ok_handler(sent_requests):
    """Transport handler answering every request with a small JSON body."""
    def handler(request: httpx.Request) -> httpx.Response:
        sent_requests.append(request)
        return httpx.Response(200, json={"code": 0, "path": request.url.path})
    return handler


@pytest.fixture
def make_client(fake_sleep) -> Callable[..., MusicApiClient]:
    """Builds a MusicApiClient over httpx.MockTransport with instant backoff."""
    def _make(handler, policy: RetryPolicy = None, event_listener=None,
              timeout_ms: int = DEFAULT_TIMEOUT_MS) -> MusicApiClient:
        config = ClientConfig(base_url=BASE_URL, timeout_ms=timeout_ms, retry_policy=policy or RetryPolicy())
        retry_service = ApiRetryService(
            policy=config.retry_policy,
            event_listener=event_listener,
            sleep=fake_sleep,
        )
        return MusicApiClient(
            config,
            transport=httpx.MockTransport(handler),
            retry_service=retry_service,
        )
    return _make


@pytest.fixture
def test_config():
    """Pins configuration for the test and clears it afterwards."""
    settings.set_config_for_testing({"api.base_url": BASE_URL})
    yield
    settings.clear_test_config()


@pytest.fixture
def cli_transport(mocker, ok_handler):
    """Patches the client built by main.py so it talks to a MockTransport.

    Returns a holder whose `handler` attribute can be swapped per test; the
    clients built so far are collected in `clients`.
    """
    holder = SimpleNamespace(handler=ok_handler, clients=[])
    real_client = MusicApiClient

    def _build(config):
        client = real_client(config, transport=httpx.MockTransport(lambda request: holder.handler(request)))
        holder.clients.append(client)
        return client

    mocker.patch("musiccli.main.MusicApiClient", side_effect=_build)
    mocker.patch("musiccli.main.setup_logging")
    mocker.patch("musiccli.main.load_configuration")
    return holder


@pytest.fixture
def mock_console_display(mocker):
    """Mocks the ConsoleDisplay to capture output easily."""
    mock = mocker.MagicMock(spec=ConsoleDisplay)
    mocker.patch("musiccli.main.ConsoleDisplay", return_value=mock)
    return mock
