"""Data models for SR P3 playlist responses."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

P3_CHANNEL_NAME = "P3"
P3_CHANNEL_ID = 565

QUERY_TYPE_CURRENT = "current"
QUERY_TYPE_DATE_RANGE = "date-range"


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass(frozen=True)
class Song:
    """One playlist entry as returned to the caller.

    Attributes:
        title: Song title ("Unknown Title" when missing upstream)
        artist: Artist name ("Unknown Artist" when missing upstream)
        start_time_utc: Start time as reported by the API (ISO 8601)
        stop_time_utc: Stop time as reported by the API (ISO 8601)
        id: Synthetic "song-<index>" id (date-range listings only)
        composer: Composer name (optional)
        album_name: Album name (optional)
        record_label: Record label (optional)
        duration: Whole seconds between start and stop, None when unknown
        description: Free-text description (optional)
    """

    title: str
    artist: str
    start_time_utc: str
    stop_time_utc: str
    id: Optional[str] = None
    composer: Optional[str] = None
    album_name: Optional[str] = None
    record_label: Optional[str] = None
    duration: Optional[int] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the public camelCase keys, omitting absent fields."""
        return _drop_none(
            {
                "id": self.id,
                "title": self.title,
                "artist": self.artist,
                "composer": self.composer,
                "albumName": self.album_name,
                "recordLabel": self.record_label,
                "startTimeUTC": self.start_time_utc,
                "stopTimeUTC": self.stop_time_utc,
                "duration": self.duration,
                "description": self.description,
            }
        )


@dataclass
class QueryMetadata:
    """Metadata describing how a playlist response was produced."""

    timestamp: str
    query_type: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    artist_filter: Optional[str] = None
    limit: Optional[int] = None
    channel: str = P3_CHANNEL_NAME
    channel_id: int = P3_CHANNEL_ID

    def to_dict(self) -> Dict[str, Any]:
        query = _drop_none(
            {
                "type": self.query_type,
                "startDate": self.start_date,
                "endDate": self.end_date,
                "artistFilter": self.artist_filter,
                "limit": self.limit,
            }
        )
        return {
            "channel": self.channel,
            "channelId": self.channel_id,
            "timestamp": self.timestamp,
            "query": query,
        }


@dataclass
class PlaylistResponse:
    """Songs plus query metadata and any non-fatal warnings or errors."""

    songs: List[Song]
    metadata: QueryMetadata
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable form; ``errors`` is only present when non-empty."""
        result: Dict[str, Any] = {
            "songs": [song.to_dict() for song in self.songs],
            "metadata": self.metadata.to_dict(),
        }
        if self.errors:
            result["errors"] = list(self.errors)
        return result
