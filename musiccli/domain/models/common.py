"""Defines common Value Objects used across the client.

These objects represent identifiers and request shapes sent to the music
service, ensuring consistency between the endpoint catalog, the dispatcher
and the retry layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, NewType, Optional, Union

# === Identifiers ===

# Using NewType for semantic clarity, although they are plain values at runtime.
SonglistId = NewType("SonglistId", str)   # Playlist (songlist) id
SongId = NewType("SongId", str)           # Song id used by /song/url
SongMid = NewType("SongMid", str)         # Song "mid" used by detail and lyric endpoints
SingerMid = NewType("SingerMid", str)     # Singer "mid"

# === Request Shapes ===

QueryValue = Union[str, int, float, bool, None]
QueryParams = Dict[str, QueryValue]

IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "PUT", "DELETE"})


@dataclass(frozen=True)
class RequestDescriptor:
    """One logical request: method, path relative to the base URL, query params.

    Params whose value is None are treated as absent and never serialized.
    """
    path: str
    params: Mapping[str, Any] = field(default_factory=dict)
    method: str = "GET"

    def query_params(self) -> Dict[str, Any]:
        """Returns the params that will actually appear in the query string."""
        return {key: value for key, value in self.params.items() if value is not None}


def params_or_empty(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Returns a copy of the caller mapping, or an empty dict for None."""
    return dict(params) if params else {}
