"""
Series: ordered collections of messages.

A series holds its raw (persisted) fields plus derived state that is built
by attaching messages and normalizing for a view. Only the raw fields are
ever serialized.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from online.catalog.dateonly import DateOnly
from online.catalog.message import Message
from online.catalog.ministry import Ministry
from online.catalog.reference import SeriesReference
from online.catalog.resource import OnlineResource
from online.catalog.view import View, is_visible_in_view
from online.core.hashing import compute_hash

logger = logging.getLogger(__name__)

STAND_ALONE_ID_PREFIX = "SAM-"


class SeriesState(Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"


def series_index(message: Message, name: str) -> int:
    """Index of a message within the named series (0 if hidden or absent)."""
    ref = message.find_series_reference(name)
    if ref is None or ref.index < 0:
        return 0
    return ref.index


def sort_by_series_index(messages: Iterable[Message], name: str) -> list[Message]:
    """Order messages by their index in a series.

    Positive indexes come first in ascending order, then index 0 messages
    in their original order. The sort is stable.
    """

    def key(msg: Message) -> tuple[int, int]:
        index = series_index(msg, name)
        return (0, index) if index > 0 else (1, 0)

    return sorted(messages, key=key)


@dataclass
class Series:
    """A series of messages (or a booklet, which is a series without messages)."""

    id: str = ""
    name: str = ""
    description: str = ""
    booklets: list[OnlineResource] = field(default_factory=list)
    resources: list[OnlineResource] = field(default_factory=list)
    visibility: View | None = None
    jacket: str = ""
    thumbnail: str = ""
    start_date: DateOnly = field(default_factory=DateOnly)
    end_date: DateOnly = field(default_factory=DateOnly)

    # Derived state, rebuilt by attach() and normalize()
    view: View = field(default=View.RAW, init=False, repr=False, compare=False)
    speakers: list[str] = field(default_factory=list, init=False, repr=False, compare=False)
    all_resources: list[OnlineResource] = field(
        default_factory=list, init=False, repr=False, compare=False
    )
    _messages: list[Message] = field(default_factory=list, init=False, repr=False, compare=False)
    _view_messages: list[Message] = field(
        default_factory=list, init=False, repr=False, compare=False
    )
    _normalized: bool = field(default=False, init=False, repr=False, compare=False)

    @classmethod
    def from_message(cls, message: Message) -> Series:
        """Build the stand-alone series for a single message.

        The series holds a copy of the message whose only reference is to
        the new series at index 1. The source message is not modified.
        """
        seri = cls(
            id=STAND_ALONE_ID_PREFIX + compute_hash(message.name),
            name=message.name,
            description=message.description,
            resources=copy.deepcopy(message.resources),
            visibility=message.visibility,
            start_date=message.date,
            end_date=message.date,
        )
        member = message.copy()
        member.series = [SeriesReference(seri.name, 1)]
        seri.attach([member])
        return seri

    # Messages

    @property
    def messages(self) -> list[Message]:
        """All attached messages, regardless of view."""
        return list(self._messages)

    def attach(self, messages: Iterable[Message]) -> None:
        """Attach messages to the series and normalize for the raw view.

        The date window is reset to the span of the attached messages.
        """
        self._messages = sort_by_series_index(messages, self.name)
        self.normalize(View.RAW)

    def messages_in_view(self) -> list[Message]:
        """Messages visible in the current view, in series order."""
        return list(self._view_messages)

    def normalize(self, view: View) -> None:
        """Rebuild derived state for a view.

        Args:
            view: View to build for; RAW keeps every attached message
        """
        if view is View.RAW:
            visible = list(self._messages)
        else:
            visible = [m for m in self._messages if is_visible_in_view(m.visibility, view)]
        self._view_messages = sort_by_series_index(visible, self.name)

        if self._view_messages:
            dates = [m.date for m in self._view_messages if not m.date.is_zero()]
            self.start_date = min(dates) if dates else DateOnly()
            self.end_date = max(dates) if dates else DateOnly()

        self.speakers = []
        for msg in self._view_messages:
            for speaker in msg.speakers:
                if speaker not in self.speakers:
                    self.speakers.append(speaker)

        self.all_resources = []
        seen: set[str] = set()
        candidates = list(self.resources)
        for msg in self._view_messages:
            candidates.extend(msg.resources)
        for resource in candidates:
            if resource.url in seen:
                continue
            seen.add(resource.url)
            self.all_resources.append(resource)

        self.view = view
        self._normalized = True

    def view_of(self, view: View) -> Series:
        """Return a copy normalized for a view. This series is left untouched."""
        seri = self.copy()
        seri.normalize(view)
        return seri

    def copy(self) -> Series:
        return copy.deepcopy(self)

    # Identity

    def get_id(self) -> str:
        """Return the series ID, generating one from the name if needed.

        A generated ID is cached on the series. A series without messages
        cannot generate an ID and gets an empty string.
        """
        if self.id:
            return self.id

        if not self._current_messages():
            logger.warning("Tried to generate an ID for series '%s' with no messages", self.name)
            return ""

        self.id = self.ministry().id_prefix + compute_hash(self.name)
        return self.id

    def view_id(self, view: View) -> str:
        """ID for a view of the series. Non-public views get an extra hash."""
        base = self.get_id()
        if view is View.PUBLIC:
            return base
        return base + "-" + compute_hash(base + view.value)

    # Queries

    def _current_messages(self) -> list[Message]:
        return self._view_messages if self._normalized else self._messages

    def ministry(self) -> Ministry:
        messages = self._current_messages()
        if not messages or messages[0].ministry is None:
            return Ministry.UNKNOWN
        return messages[0].ministry

    def is_booklet(self) -> bool:
        return bool(self.booklets) and not self.id and not self._messages

    @property
    def effective_visibility(self) -> View:
        """Visibility used for filtering. A series without one is private."""
        if self.visibility is None or self.visibility is View.UNKNOWN:
            return View.PRIVATE
        return self.visibility

    @property
    def state(self) -> SeriesState:
        if self.start_date.is_zero():
            return SeriesState.NOT_STARTED
        if self.end_date.is_zero():
            return SeriesState.IN_PROGRESS
        return SeriesState.COMPLETE

    # Display

    def date_string(self) -> str:
        state = self.state
        if state is SeriesState.NOT_STARTED:
            return "Coming Soon"
        start, end = self.start_date, self.end_date
        if state is SeriesState.IN_PROGRESS:
            return "Started " + start.display()

        if start == end:
            return start.display()
        if start.year != end.year:
            return f"{start.display()} - {end.display()}"
        month = start.value.strftime("%b")
        if start.value.month == end.value.month:
            return f"{month} {start.value.day}-{end.value.day}, {end.year}"
        return f"{month} {start.value.day} - {end.display()}"

    def speaker_string(self) -> str:
        return ", ".join(self.speakers)


# Filters and sorts


def filter_series_by_ministry(corpus: Iterable[Series], *ministries: Ministry) -> list[Series]:
    """Keep the series whose ministry is one of those given."""
    return [seri for seri in corpus if seri.ministry() in ministries]


def filter_series_by_view(corpus: Iterable[Series], view: View) -> list[Series]:
    """Build the series visible in a view.

    A series is kept when its own visibility is accessible in the view and
    at least one of its messages is. The returned series are copies
    normalized for the view, so they only carry visible messages.
    """
    result = []
    for seri in corpus:
        if not seri.effective_visibility.is_visible_in(view):
            continue
        candidate = seri.view_of(view)
        if not candidate.messages_in_view():
            continue
        result.append(candidate)
    return result


def sort_series_by_name(corpus: Iterable[Series]) -> list[Series]:
    return sorted(corpus, key=lambda s: s.name.lower())


def sort_series_oldest_first(corpus: Iterable[Series]) -> list[Series]:
    return sorted(corpus, key=lambda s: (s.start_date, s.name.lower()))


def sort_series_newest_first(corpus: Iterable[Series]) -> list[Series]:
    return sorted(corpus, key=lambda s: (s.start_date, s.name.lower()), reverse=True)
