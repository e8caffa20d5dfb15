"""Concrete implementation of the MusicApi interface over HTTP.

Each operation builds one RequestDescriptor and sends it through the retry
service; response bodies are returned as received.
"""

import logging
from typing import Any, Mapping, Optional

import httpx

from musiccli.domain.interfaces.music_api import MusicApi
from musiccli.domain.models.common import (
    QueryParams, RequestDescriptor, SingerMid, SongId, SongMid, SonglistId, params_or_empty
)
from musiccli.infrastructure.http.client_config import ClientConfig
from musiccli.infrastructure.http.dispatcher import RequestDispatcher
from musiccli.infrastructure.resilience.api_retry import ApiRetryService, EventListener

logger = logging.getLogger(__name__)


class MusicApiClient(MusicApi):
    """HTTP implementation of the music service endpoint catalog."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        retry_service: Optional[ApiRetryService] = None,
        event_listener: Optional[EventListener] = None,
    ):
        """Initializes the client.

        Args:
            config: Shared client configuration (defaults to ClientConfig()).
            transport: Optional httpx transport override.
            retry_service: Optional pre-built retry service; built from
                config.retry_policy when omitted.
            event_listener: Optional listener for request lifecycle events.
        """
        self.config = config or ClientConfig()
        self.dispatcher = RequestDispatcher(self.config, transport=transport)
        self.retry_service = retry_service or ApiRetryService(
            policy=self.config.retry_policy,
            event_listener=event_listener,
        )
        logger.info(f"MusicApiClient initialized for base URL: {self.config.base_url}")

    async def __aenter__(self) -> "MusicApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.dispatcher.aclose()

    async def _get(self, path: str, params: Optional[QueryParams] = None) -> Any:
        descriptor = RequestDescriptor(path=path, params=params_or_empty(params))
        return await self.retry_service.execute_with_retry(
            self.dispatcher.send, descriptor, endpoint_name=path
        )

    # --- Endpoint Catalog ---

    async def get_recommend_playlists(self) -> Any:
        return await self._get("/recommend/playlist/u")

    async def get_songlist_detail(self, songlist_id: Optional[SonglistId]) -> Any:
        return await self._get("/songlist", {"id": songlist_id})

    async def get_banners(self) -> Any:
        return await self._get("/recommend/banner")

    async def search(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._get("/search", params_or_empty(params))

    async def get_song_url(self, song_id: Optional[SongId]) -> Any:
        return await self._get("/song/url", {"id": song_id})

    async def get_singer_albums(
        self,
        singermid: Optional[SingerMid],
        page_no: int = 1,
        page_size: int = 20,
    ) -> Any:
        return await self._get(
            "/singer/album",
            {"singermid": singermid, "pageNo": page_no, "pageSize": page_size},
        )

    async def get_singer_detail(self, singermid: Optional[SingerMid]) -> Any:
        return await self._get("/singer/songs", {"singermid": singermid})

    async def get_song_detail(self, songmid: Optional[SongMid]) -> Any:
        return await self._get("/song/detail", {"songmid": songmid})

    async def get_lyric(self, songmid: Optional[SongMid]) -> Any:
        return await self._get("/lyric", {"songmid": songmid})
