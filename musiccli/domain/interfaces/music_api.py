"""Interface for the music service endpoint catalog.

Defines the contract for the named operations exposed to callers. Each
operation issues one logical GET request and returns the upstream response
body unparsed.
"""

import abc
from typing import Any, Mapping, Optional

from musiccli.domain.models.common import SingerMid, SongId, SongMid, SonglistId


class MusicApi(abc.ABC):
    """Abstract Base Class for music service interactions."""

    @abc.abstractmethod
    async def get_recommend_playlists(self) -> Any:
        """Fetches the recommended playlists."""
        pass

    @abc.abstractmethod
    async def get_songlist_detail(self, songlist_id: Optional[SonglistId]) -> Any:
        """Fetches the detail of one playlist."""
        pass

    @abc.abstractmethod
    async def get_banners(self) -> Any:
        """Fetches the home page banners."""
        pass

    @abc.abstractmethod
    async def search(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Searches the catalog.

        Args:
            params: Query parameters, forwarded unmodified.
        """
        pass

    @abc.abstractmethod
    async def get_song_url(self, song_id: Optional[SongId]) -> Any:
        """Fetches the play URL of a song."""
        pass

    @abc.abstractmethod
    async def get_singer_albums(
        self,
        singermid: Optional[SingerMid],
        page_no: int = 1,
        page_size: int = 20,
    ) -> Any:
        """Fetches one page of a singer's albums."""
        pass

    @abc.abstractmethod
    async def get_singer_detail(self, singermid: Optional[SingerMid]) -> Any:
        """Fetches a singer's songs."""
        pass

    @abc.abstractmethod
    async def get_song_detail(self, songmid: Optional[SongMid]) -> Any:
        """Fetches the detail of a song."""
        pass

    @abc.abstractmethod
    async def get_lyric(self, songmid: Optional[SongMid]) -> Any:
        """Fetches the lyrics of a song."""
        pass
