"""Music service endpoint catalog."""

from musiccli.infrastructure.api.music_client import MusicApiClient

__all__ = ["MusicApiClient"]
