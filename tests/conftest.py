"""Test configuration and shared fixtures for SR P3 MCP Server tests.

All tests use a mocked SR API client or an httpx.MockTransport to avoid
depending on the real Sveriges Radio API, and a fixed clock for date logic.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import xmltodict

FIXED_NOW = datetime(2025, 1, 10, 12, 0, 0, tzinfo=timezone.utc)


RIGHTNOW_XML = """<?xml version="1.0" encoding="utf-8"?>
<sr>
  <copyright>Copyright Sveriges Radio 2025. All rights reserved.</copyright>
  <playlist>
    <previoussong>
      <title>Espresso</title>
      <description>Sabrina Carpenter - Espresso</description>
      <artist>Sabrina Carpenter</artist>
      <composer>Sabrina Carpenter</composer>
      <albumname>Short n' Sweet</albumname>
      <recordlabel>Island</recordlabel>
      <starttimeutc>2025-01-10T11:52:00Z</starttimeutc>
      <stoptimeutc>2025-01-10T11:54:55Z</stoptimeutc>
    </previoussong>
    <song>
      <title>Birds of a Feather</title>
      <artist>Billie Eilish</artist>
      <albumname>Hit Me Hard and Soft</albumname>
      <starttimeutc>2025-01-10T11:55:00Z</starttimeutc>
      <stoptimeutc>2025-01-10T11:58:30Z</stoptimeutc>
    </song>
    <nextsong>
      <title>Die With A Smile</title>
      <artist>Lady Gaga &amp; Bruno Mars</artist>
      <starttimeutc>2025-01-10T11:58:30Z</starttimeutc>
      <stoptimeutc>2025-01-10T12:02:40Z</stoptimeutc>
    </nextsong>
    <channel id="565" name="P3" />
  </playlist>
</sr>
"""


def song_xml(title, artist, start="2024-12-15T10:00:00Z", stop="2024-12-15T10:03:00Z"):
    """Render one <song> element."""
    return (
        "<song>"
        f"<title>{title}</title>"
        f"<artist>{artist}</artist>"
        f"<starttimeutc>{start}</starttimeutc>"
        f"<stoptimeutc>{stop}</stoptimeutc>"
        "</song>"
    )


def playlist_xml(*songs):
    """Render a getplaylistbychannelid document containing the given <song> elements."""
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        "<sr><copyright>Copyright Sveriges Radio</copyright>"
        f"<playlist>{''.join(songs)}<channel id=\"565\" name=\"P3\" /></playlist>"
        "</sr>"
    )


def decode(xml):
    """Decode XML the same way SRApiClient does."""
    return xmltodict.parse(xml)


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def fixed_now():
    """Reference 'now' for date logic: 2025-01-10T12:00:00Z."""
    return FIXED_NOW


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def mock_sr_client():
    """Create a mocked SRApiClient for testing.

    Returns:
        MagicMock: Mocked SRApiClient with async methods
    """
    client = MagicMock()
    client.get_current_playlist = AsyncMock()
    client.get_playlist_by_date_range = AsyncMock()
    return client


@pytest.fixture
def rightnow_tree():
    """Decoded 'rightnow' response with previous, current and next song."""
    return decode(RIGHTNOW_XML)


@pytest.fixture
def search_tree():
    """Decoded date-range response with three songs."""
    return decode(
        playlist_xml(
            song_xml("Anti-Hero", "Taylor Swift", "2024-12-15T10:00:00Z", "2024-12-15T10:03:20Z"),
            song_xml("Rich Man", "Drake", "2024-12-15T10:03:20Z", "2024-12-15T10:06:00Z"),
            song_xml("Karma", "Taylor Swift &amp; HAIM", "2024-12-15T10:06:00Z", "2024-12-15T10:09:25Z"),
        )
    )
