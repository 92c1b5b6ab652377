"""
Messages: single recorded teaching events.

A message is one media event (audio + video recording) with its metadata.
It may name the series it belongs to, but assembling series out of those
references is the catalog's job.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

import requests

from online.catalog.dateonly import DateOnly
from online.catalog.message_type import MessageType
from online.catalog.ministry import Ministry
from online.catalog.reference import SeriesReference
from online.catalog.resource import OnlineResource
from online.catalog.view import View

logger = logging.getLogger(__name__)

# Production-pipeline states that may stand in place of an audio/video URL
MEDIA_STATES = frozenset(
    {
        "-",
        "n/a",
        "n/e",
        "abrogated",
        "in progress",
        "exporting",
        "exported",
        "editing",
        "edited",
        "rendering",
        "rendered",
        "uploading",
    }
)

DEFAULT_HEAD_TIMEOUT = 10

SizeResolver = Callable[[str], int]


def is_url(value: str) -> bool:
    return "://" in value


def head_content_length(url: str, timeout: float = DEFAULT_HEAD_TIMEOUT) -> int:
    """Ask the server for the size of a file.

    Args:
        url: URL of the file
        timeout: Request timeout in seconds

    Returns:
        Content-Length in bytes, or -1 if it could not be determined
    """
    try:
        resp = requests.head(url, timeout=timeout, allow_redirects=True)
    except requests.RequestException:
        logger.warning("Could not get file size of %s", url, exc_info=True)
        return -1

    if resp.status_code != 200:
        logger.warning(
            "Unsuccessful status code getting file size of %s: %d", url, resp.status_code
        )
        return -1

    length = resp.headers.get("Content-Length", "")
    try:
        return int(length)
    except ValueError:
        logger.warning("Could not parse the file size '%s' of %s", length, url)
        return -1


class CachingSizeResolver:
    """Size resolver that remembers successful lookups."""

    def __init__(self, resolver: SizeResolver = head_content_length):
        self.resolver = resolver
        self._sizes: dict[str, int] = {}

    def __call__(self, url: str) -> int:
        if url in self._sizes:
            return self._sizes[url]
        size = self.resolver(url)
        if size >= 0:
            self._sizes[url] = size
        return size


@dataclass
class Message:
    """One recorded message. Date and name are required."""

    date: DateOnly = field(default_factory=DateOnly)
    name: str = ""
    description: str = ""
    speakers: list[str] = field(default_factory=list)
    ministry: Ministry | None = None
    type: MessageType | None = None
    visibility: View | None = None
    series: list[SeriesReference] = field(default_factory=list)
    playlist: list[str] = field(default_factory=list)
    audio: str = ""
    video: str = ""
    resources: list[OnlineResource] = field(default_factory=list)

    _initialized: bool = field(default=False, repr=False, compare=False)

    def initialize(self) -> None:
        """Prepare a freshly loaded message for use.

        Audio and video that are production states rather than URLs are
        cleared. Runs once.
        """
        if self._initialized:
            return
        if not is_url(self.audio):
            self.audio = ""
        if not is_url(self.video):
            self.video = ""
        self._initialized = True

    def copy(self) -> Message:
        return copy.deepcopy(self)

    # Media

    def audio_url(self) -> str:
        return self.audio if is_url(self.audio) else ""

    def video_url(self) -> str:
        return self.video if is_url(self.video) else ""

    def has_audio(self) -> bool:
        return bool(self.audio_url())

    def has_video(self) -> bool:
        return bool(self.video_url())

    def audio_size(self, resolver: SizeResolver | None = None) -> int:
        """Size of the audio file in bytes.

        Args:
            resolver: Callable mapping a URL to its size (defaults to an HTTP HEAD)

        Returns:
            0 if there is no audio URL, -1 if the size could not be determined
        """
        url = self.audio_url()
        if not url:
            return 0
        resolver = resolver or head_content_length
        try:
            return resolver(url)
        except Exception:
            logger.warning("Size lookup failed for %s", url, exc_info=True)
            return -1

    def transcript_url(self, ext: str = ".text") -> str:
        """URL of the transcript stored beside the audio file in xscript/."""
        url = self.audio_url()
        if not url:
            return ""
        if not ext.startswith("."):
            ext = "." + ext

        url = url.replace(".mp3", ext, 1)
        slash = url.rfind("/")
        return url[: slash + 1] + "xscript/" + url[slash + 1 :]

    # Display

    def speaker_string(self) -> str:
        return ", ".join(self.speakers)

    def date_string(self, today: date | None = None) -> str:
        if self.date.is_zero():
            return ""
        today = today or date.today()
        if self.date.value > today:
            return "Scheduled for " + self.date.display()
        return self.date.display()

    # Series references

    def find_series_reference(self, name: str) -> SeriesReference | None:
        """Return the first reference to the named series, or None."""
        for ref in self.series:
            if ref.name == name:
                return ref
        return None

    def in_series(self, name: str) -> bool:
        return self.find_series_reference(name) is not None

    def is_stand_alone(self) -> bool:
        """True when the message is its own series (no real series references)."""
        return all(ref.is_stand_alone() for ref in self.series)
