"""Tests for XML record normalization into Song models."""

import pytest

from sr_p3_mcp.models import Song
from sr_p3_mcp.normalize import (
    UNKNOWN_ARTIST,
    UNKNOWN_TITLE,
    as_list,
    compute_duration,
    first_song,
    normalize_songs,
    parse_song,
)
from tests.conftest import decode, playlist_xml, song_xml

FALLBACK = "2025-01-10T12:00:00.000Z"


class TestAsList:
    """Coercion of absent / single / repeated nodes."""

    @pytest.mark.parametrize("node", [None, ""])
    def test_absent(self, node):
        assert as_list(node) == []

    def test_single(self):
        record = {"title": "Song"}
        assert as_list(record) == [record]

    def test_list_unchanged(self):
        records = [{"title": "A"}, {"title": "B"}]
        assert as_list(records) is records


class TestParseSong:
    """Field extraction and defaults."""

    def test_full_record(self, rightnow_tree):
        record = rightnow_tree["sr"]["playlist"]["previoussong"]

        song = parse_song(record, FALLBACK)

        assert song == Song(
            title="Espresso",
            artist="Sabrina Carpenter",
            composer="Sabrina Carpenter",
            album_name="Short n' Sweet",
            record_label="Island",
            start_time_utc="2025-01-10T11:52:00Z",
            stop_time_utc="2025-01-10T11:54:55Z",
            duration=175,
            description="Sabrina Carpenter - Espresso",
        )

    def test_missing_fields_use_defaults(self):
        song = parse_song({}, FALLBACK)

        assert song.title == UNKNOWN_TITLE
        assert song.artist == UNKNOWN_ARTIST
        assert song.start_time_utc == FALLBACK
        assert song.stop_time_utc == FALLBACK
        assert song.duration is None
        assert song.id is None

    def test_empty_elements_use_defaults(self):
        """<title/> decodes to None."""
        song = parse_song(decode("<song><title/><artist>  </artist></song>")["song"], FALLBACK)

        assert song.title == UNKNOWN_TITLE
        assert song.artist == UNKNOWN_ARTIST

    def test_text_with_attributes(self):
        record = decode('<song><title lang="sv">Sommartider</title><artist>Gyllene Tider</artist></song>')["song"]

        song = parse_song(record, FALLBACK)

        assert song.title == "Sommartider"

    def test_numeric_looking_title_stays_text(self):
        record = decode("<song><title>1999</title><artist>Prince</artist></song>")["song"]

        assert parse_song(record, FALLBACK).title == "1999"

    def test_song_id(self):
        assert parse_song({}, FALLBACK, song_id="song-3").id == "song-3"

    def test_song_is_immutable(self):
        song = parse_song({}, FALLBACK)

        with pytest.raises(AttributeError):
            song.title = "Changed"


class TestDuration:
    """Duration is whole seconds, only for stop strictly after start."""

    def test_positive(self):
        assert compute_duration("2024-12-15T10:00:00Z", "2024-12-15T10:03:00Z") == 180

    def test_fractional_seconds_floored(self):
        assert compute_duration("2024-12-15T10:00:00.000Z", "2024-12-15T10:00:59.900Z") == 59

    def test_equal_times_absent_not_zero(self):
        assert compute_duration("2024-12-15T10:00:00Z", "2024-12-15T10:00:00Z") is None

    def test_stop_before_start_absent(self):
        record = {"starttimeutc": "2024-12-15T10:05:00Z", "stoptimeutc": "2024-12-15T10:00:00Z"}

        song = parse_song(record, FALLBACK)

        assert song.duration is None
        assert song.stop_time_utc == "2024-12-15T10:00:00Z"

    def test_unparseable_time_absent(self):
        record = {"starttimeutc": "yesterday-ish", "stoptimeutc": "2024-12-15T10:00:00Z"}

        song = parse_song(record, FALLBACK)

        assert song.duration is None
        assert song.start_time_utc == "yesterday-ish"


class TestNormalizeSongs:
    """Whole <song> node normalization."""

    def test_absent_node(self):
        assert normalize_songs(None, FALLBACK) == []

    def test_single_record(self):
        tree = decode(playlist_xml(song_xml("Only One", "Solo")))

        songs = normalize_songs(tree["sr"]["playlist"]["song"], FALLBACK, with_ids=True)

        assert len(songs) == 1
        assert songs[0].title == "Only One"
        assert songs[0].id == "song-0"

    def test_many_records_keep_order(self, search_tree):
        songs = normalize_songs(search_tree["sr"]["playlist"]["song"], FALLBACK, with_ids=True)

        assert [song.title for song in songs] == ["Anti-Hero", "Rich Man", "Karma"]
        assert [song.id for song in songs] == ["song-0", "song-1", "song-2"]
        assert songs[2].artist == "Taylor Swift & HAIM"

    def test_without_ids(self, search_tree):
        songs = normalize_songs(search_tree["sr"]["playlist"]["song"], FALLBACK)

        assert all(song.id is None for song in songs)


class TestFirstSong:
    def test_missing_slot(self):
        assert first_song(None, FALLBACK) is None

    def test_takes_first_of_repeated_slot(self):
        records = [{"title": "First"}, {"title": "Second"}]

        assert first_song(records, FALLBACK).title == "First"


def test_song_to_dict_uses_public_keys():
    song = Song(
        title="Birds of a Feather",
        artist="Billie Eilish",
        start_time_utc="2025-01-10T11:55:00Z",
        stop_time_utc="2025-01-10T11:58:30Z",
        album_name="Hit Me Hard and Soft",
        duration=210,
    )

    assert song.to_dict() == {
        "title": "Birds of a Feather",
        "artist": "Billie Eilish",
        "albumName": "Hit Me Hard and Soft",
        "startTimeUTC": "2025-01-10T11:55:00Z",
        "stopTimeUTC": "2025-01-10T11:58:30Z",
        "duration": 210,
    }
