"""Normalize decoded SR API XML into Song records.

xmltodict decodes a repeated element as a list but a single element as a
plain dict, so the same ``<song>`` node can arrive in either shape. Everything
in this module coerces through ``as_list`` before touching records.
"""

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from dateutil.parser import isoparse

from .models import Song

logger = logging.getLogger(__name__)

UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_ARTIST = "Unknown Artist"


def as_list(node: Any) -> List[Any]:
    """Coerce an absent, single or repeated XML node into a list.

    Examples:
        >>> as_list(None)
        []
        >>> as_list({"title": "Song"})
        [{'title': 'Song'}]
        >>> as_list([{"title": "A"}, {"title": "B"}])
        [{'title': 'A'}, {'title': 'B'}]
    """
    if node is None or node == "":
        return []
    if isinstance(node, list):
        return node
    return [node]


def _text(record: Any, key: str) -> Optional[str]:
    """Return the stripped text of a child element, or None if empty/missing."""
    if not isinstance(record, dict):
        return None

    value = record.get(key)
    # Elements carrying attributes decode as {"@attr": ..., "#text": ...}
    if isinstance(value, dict):
        value = value.get("#text")
    if value is None:
        return None

    value = str(value).strip()
    return value or None


def _parse_instant(value: str) -> Optional[datetime]:
    try:
        parsed = isoparse(value)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def compute_duration(start_time: str, stop_time: str) -> Optional[int]:
    """Whole seconds between two ISO 8601 instants.

    Returns None unless both parse and stop is strictly after start.
    """
    start = _parse_instant(start_time)
    stop = _parse_instant(stop_time)
    if start is None or stop is None or stop <= start:
        return None
    return int((stop - start).total_seconds())


def parse_song(record: Any, fallback_time: str, song_id: Optional[str] = None) -> Song:
    """Convert one decoded ``<song>`` record into a Song.

    Args:
        record: Decoded XML record (dict of child element values)
        fallback_time: ISO 8601 instant used for missing start/stop times
        song_id: Optional synthetic id to attach

    Returns:
        Song with defaults filled in
    """
    start_time = _text(record, "starttimeutc") or fallback_time
    stop_time = _text(record, "stoptimeutc") or fallback_time

    return Song(
        id=song_id,
        title=_text(record, "title") or UNKNOWN_TITLE,
        artist=_text(record, "artist") or UNKNOWN_ARTIST,
        composer=_text(record, "composer"),
        album_name=_text(record, "albumname"),
        record_label=_text(record, "recordlabel"),
        start_time_utc=start_time,
        stop_time_utc=stop_time,
        duration=compute_duration(start_time, stop_time),
        description=_text(record, "description"),
    )


def first_song(node: Any, fallback_time: str) -> Optional[Song]:
    """Parse the first record of a slot such as ``previoussong``, if any."""
    records = as_list(node)
    if not records:
        return None
    return parse_song(records[0], fallback_time)


def normalize_songs(node: Any, fallback_time: str, with_ids: bool = False) -> List[Song]:
    """Normalize a ``song`` node into an ordered list of Songs.

    Args:
        node: Absent, single or repeated decoded ``<song>`` node
        fallback_time: ISO 8601 instant used for missing start/stop times
        with_ids: Attach "song-<index>" ids in upstream order

    Returns:
        Songs in the order the API returned them
    """
    songs = [
        parse_song(record, fallback_time, song_id=f"song-{index}" if with_ids else None)
        for index, record in enumerate(as_list(node))
    ]
    logger.debug(f"Normalized {len(songs)} songs")
    return songs
