"""Playlist query orchestration.

PlaylistService composes the rate-limited client, the date resolver and the
normalizer into the two public operations. Both operations always return a
PlaylistResponse: failures are folded into its ``errors`` list.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List

from .client import SRApiClient
from .dates import isoformat_utc, resolve_date_range, utc_now
from .exceptions import EmptyUpstreamPayloadError, SRP3Error
from .models import (
    QUERY_TYPE_CURRENT,
    QUERY_TYPE_DATE_RANGE,
    PlaylistResponse,
    QueryMetadata,
    Song,
)
from .normalize import first_song, normalize_songs
from .schemas import SearchPlaylistInput

logger = logging.getLogger(__name__)

NO_CURRENT_SONGS = "No songs found in the current playlist"
UNEXPECTED_CURRENT_ERROR = "An unexpected error occurred while fetching the current playlist"
UNEXPECTED_SEARCH_ERROR = "An unexpected error occurred while searching the playlist"


def filter_by_artist(songs: List[Song], artist_filter: str) -> List[Song]:
    """Keep songs whose artist contains ``artist_filter`` (case-insensitive).

    Examples:
        >>> songs = [Song("a", "Taylor Swift", "", ""), Song("b", "Drake", "", "")]
        >>> [s.artist for s in filter_by_artist(songs, "taylor swift")]
        ['Taylor Swift']
    """
    needle = artist_filter.casefold()
    return [song for song in songs if needle in song.artist.casefold()]


def _playlist_node(tree: Any) -> Dict[str, Any]:
    """Extract ``sr.playlist`` from a decoded tree.

    Raises:
        EmptyUpstreamPayloadError: If there is no playlist node
    """
    sr = tree.get("sr") if isinstance(tree, dict) else None
    playlist = sr.get("playlist") if isinstance(sr, dict) else None
    if not isinstance(playlist, dict):
        raise EmptyUpstreamPayloadError()
    return playlist


def _error_message(error: Exception, fallback: str) -> str:
    """User-facing message for an error caught at the boundary."""
    if isinstance(error, SRP3Error):
        return error.message
    return fallback


class PlaylistService:
    """Executes playlist queries against Sveriges Radio P3.

    Attributes:
        client: SRApiClient (or compatible) used for fetching
    """

    def __init__(self, client: SRApiClient, clock: Callable[[], datetime] = utc_now):
        """Initialize service.

        Args:
            client: SR API client
            clock: Source of the current UTC time (injectable for tests)
        """
        self.client = client
        self._clock = clock

    async def get_current_playlist(self) -> PlaylistResponse:
        """Previous, current and next song on P3, in that order.

        Returns:
            PlaylistResponse; never raises
        """
        try:
            tree = await self.client.get_current_playlist()
            timestamp = isoformat_utc(self._clock())
            playlist = _playlist_node(tree)

            slots = [
                first_song(playlist.get("previoussong"), timestamp),
                first_song(playlist.get("song"), timestamp),
                first_song(playlist.get("nextsong"), timestamp),
            ]
            songs = [song for song in slots if song is not None]

            errors = []
            if not songs:
                errors.append(NO_CURRENT_SONGS)

            logger.info(f"Current playlist: {len(songs)} songs")
            return PlaylistResponse(
                songs=songs,
                metadata=QueryMetadata(timestamp=timestamp, query_type=QUERY_TYPE_CURRENT),
                errors=errors,
            )

        except Exception as e:
            if isinstance(e, SRP3Error):
                logger.error(f"Current playlist failed: {e.message}")
            else:
                logger.exception("Unexpected error in get_current_playlist")

            return PlaylistResponse(
                songs=[],
                metadata=QueryMetadata(
                    timestamp=isoformat_utc(self._clock()),
                    query_type=QUERY_TYPE_CURRENT,
                ),
                errors=[_error_message(e, UNEXPECTED_CURRENT_ERROR)],
            )

    async def search_playlist_by_date(self, query: SearchPlaylistInput) -> PlaylistResponse:
        """Songs played on P3 on a date or within a date range.

        Args:
            query: Validated search arguments

        Returns:
            PlaylistResponse; never raises
        """
        try:
            date_range = resolve_date_range(query.date, now=self._clock())

            tree = await self.client.get_playlist_by_date_range(date_range.start_iso, date_range.end_iso)
            timestamp = isoformat_utc(self._clock())
            playlist = _playlist_node(tree)

            songs = normalize_songs(playlist.get("song"), timestamp, with_ids=True)

            errors = []
            if query.artist_filter:
                original_count = len(songs)
                songs = filter_by_artist(songs, query.artist_filter)

                if not songs and original_count > 0:
                    errors.append(
                        f'No songs found matching artist filter: "{query.artist_filter}". '
                        f"Found {original_count} total songs in the date range."
                    )

            # Upstream order is kept as-is (presumed chronological)
            songs = songs[: query.limit]

            logger.info(f"Date search {date_range.start_iso} - {date_range.end_iso}: {len(songs)} songs")
            return PlaylistResponse(
                songs=songs,
                metadata=QueryMetadata(
                    timestamp=timestamp,
                    query_type=QUERY_TYPE_DATE_RANGE,
                    start_date=date_range.start_iso,
                    end_date=date_range.end_iso,
                    artist_filter=query.artist_filter,
                    limit=query.limit,
                ),
                errors=errors,
            )

        except Exception as e:
            if isinstance(e, SRP3Error):
                logger.error(f"Playlist search for {query.date!r} failed: {e.message}")
            else:
                logger.exception("Unexpected error in search_playlist_by_date")

            return PlaylistResponse(
                songs=[],
                metadata=QueryMetadata(
                    timestamp=isoformat_utc(self._clock()),
                    query_type=QUERY_TYPE_DATE_RANGE,
                    artist_filter=query.artist_filter,
                    limit=query.limit,
                ),
                errors=[_error_message(e, UNEXPECTED_SEARCH_ERROR)],
            )
