"""Categories of recorded messages."""

from __future__ import annotations

from enum import Enum


class MessageType(Enum):
    MESSAGE = "message"  # a teaching or preached message
    PRAYER = "prayer"  # prayer for someone or something
    SONG = "song"
    SPECIAL_EVENT = "special-event"  # wedding, funeral, child dedication, etc
    TESTIMONY = "testimony"  # someone testifying about something God has done
    TRAINING = "training"  # leadership or ministry training
    WORD = "word"  # prophecy, encouragement or other utterance
    MINISTRY_TIME = "ministry-time"  # individual prayer, normally at the end of service
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, text: str | None) -> MessageType:
        """Parse a message type, tolerating case and space variants."""
        key = " ".join((text or "").strip().lower().split()).replace(" ", "-")
        try:
            return cls(key)
        except ValueError:
            return cls.UNKNOWN
