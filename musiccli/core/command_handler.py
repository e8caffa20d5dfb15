"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py), calls the matching
MusicApi operation, and hands the response body or the error to the UI.
"""

import logging
from typing import Any, Awaitable, Dict, Optional

from musiccli.domain.interfaces.music_api import MusicApi
from musiccli.domain.interfaces.user_interface import UserInterface
from musiccli.domain.models.common import SingerMid, SongId, SongMid, SonglistId
from musiccli.infrastructure.http.errors import MusicApiError

logger = logging.getLogger(__name__)


class CommandHandler:
    """Handles incoming commands and delegates to the music API client.

    Every handle_* coroutine returns True when the response body was
    displayed and False when the call failed.
    """

    def __init__(self, music_api: MusicApi, ui: UserInterface):
        self.music_api = music_api
        self.ui = ui

    async def _run(self, label: str, call: Awaitable[Any]) -> bool:
        try:
            body = await call
        except MusicApiError as e:
            logger.error(f"{label} failed: {e!r}")
            detail = f" (HTTP {e.status_code})" if e.status_code is not None else ""
            self.ui.display_error(f"{label} failed{detail}: {e}")
            return False
        self.ui.display_json(body)
        return True

    async def handle_recommend_playlists(self) -> bool:
        logger.info("Handling 'playlists' command")
        return await self._run("Recommended playlists", self.music_api.get_recommend_playlists())

    async def handle_songlist_detail(self, songlist_id: str) -> bool:
        logger.info(f"Handling 'playlist' command for id: {songlist_id}")
        return await self._run("Playlist detail", self.music_api.get_songlist_detail(SonglistId(songlist_id)))

    async def handle_banners(self) -> bool:
        logger.info("Handling 'banners' command")
        return await self._run("Banners", self.music_api.get_banners())

    async def handle_search(self, key: str, extra_params: Optional[Dict[str, str]] = None) -> bool:
        params: Dict[str, Any] = {"key": key}
        params.update(extra_params or {})
        logger.info(f"Handling 'search' command with params: {params}")
        return await self._run("Search", self.music_api.search(params))

    async def handle_song_url(self, song_id: str) -> bool:
        logger.info(f"Handling 'song-url' command for id: {song_id}")
        return await self._run("Song URL", self.music_api.get_song_url(SongId(song_id)))

    async def handle_singer_albums(self, singermid: str, page_no: int = 1, page_size: int = 20) -> bool:
        logger.info(f"Handling 'singer-albums' command for {singermid} (page {page_no}, size {page_size})")
        return await self._run(
            "Singer albums",
            self.music_api.get_singer_albums(SingerMid(singermid), page_no=page_no, page_size=page_size),
        )

    async def handle_singer_songs(self, singermid: str) -> bool:
        logger.info(f"Handling 'singer-songs' command for {singermid}")
        return await self._run("Singer songs", self.music_api.get_singer_detail(SingerMid(singermid)))

    async def handle_song_detail(self, songmid: str) -> bool:
        logger.info(f"Handling 'song' command for {songmid}")
        return await self._run("Song detail", self.music_api.get_song_detail(SongMid(songmid)))

    async def handle_lyric(self, songmid: str) -> bool:
        logger.info(f"Handling 'lyric' command for {songmid}")
        return await self._run("Lyric", self.music_api.get_lyric(SongMid(songmid)))
