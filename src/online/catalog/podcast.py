"""
Podcast feed data.

Selects the messages that belong in a ministry's podcast and assembles the
data the feed template consumes. Rendering the feed is left to the template.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

from online.catalog.catalog import Catalog
from online.catalog.message import Message, SizeResolver
from online.catalog.ministry import Ministry
from online.catalog.view import View

DEFAULT_DAYS = 180
DEFAULT_PLAYLIST = "service"

PODCAST_TITLE = "Word of Life Ministries: Sunday"
PODCAST_DESCRIPTION = "Podcast of Word of Life Ministries Sunday services"


def select_podcast_messages(
    catalog: Catalog,
    ministry: Ministry = Ministry.WORD_OF_LIFE,
    days: int = DEFAULT_DAYS,
    playlist: str = DEFAULT_PLAYLIST,
    today: date | None = None,
) -> list[Message]:
    """Pick the public messages of a ministry's playlist from the last few days.

    Args:
        catalog: Catalog to select from
        ministry: Ministry the podcast is for
        days: How many days of history to include
        playlist: Playlist a message must be in
        today: Reference date (defaults to today)

    Returns:
        Matching messages, oldest first
    """
    cutoff = (today or date.today()) - timedelta(days=days)

    messages = [
        msg
        for msg in catalog.messages
        if msg.ministry is ministry
        and msg.visibility is View.PUBLIC
        and not msg.date.is_zero()
        and msg.date.value >= cutoff
        and playlist in msg.playlist
    ]
    return sorted(messages, key=lambda m: m.date)


def podcast_item(msg: Message, resolver: SizeResolver | None = None) -> dict[str, Any]:
    """Per-message data for a feed entry."""
    return {
        "name": msg.name,
        "description": f"{msg.name} ({msg.date.display()})",
        "date": str(msg.date),
        "speakers": msg.speaker_string(),
        "audio_url": msg.audio_url(),
        "audio_size": msg.audio_size(resolver),
    }


def podcast_context(
    catalog: Catalog,
    ministry: Ministry = Ministry.WORD_OF_LIFE,
    days: int = DEFAULT_DAYS,
    playlist: str = DEFAULT_PLAYLIST,
    today: date | None = None,
) -> dict[str, Any]:
    """Data handed to the podcast feed template."""
    today = today or date.today()
    return {
        "title": PODCAST_TITLE,
        "description": PODCAST_DESCRIPTION,
        "copyright_year": today.year,
        "messages": select_podcast_messages(catalog, ministry, days, playlist, today),
    }
