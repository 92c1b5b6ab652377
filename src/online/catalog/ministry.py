"""Ministries that present messages."""

from __future__ import annotations

from enum import Enum


class Ministry(Enum):
    """Organizational sub-unit responsible for a message or series."""

    WORD_OF_LIFE = "wol"
    CORE = "core"  # Center Of Relationship Experience
    THE_BRIDGE_OUTREACH = "tbo"
    ASK_THE_PASTOR = "ask-pastor"
    FAITH_AND_FREEDOM = "faith-freedom"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, text: str | None) -> Ministry:
        """Parse a ministry name or alias, case-insensitively."""
        return _ALIASES.get((text or "").strip().lower(), cls.UNKNOWN)

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def id_prefix(self) -> str:
        """Prefix of generated series identifiers."""
        return _ID_PREFIXES.get(self, "ID-")


ALL_MINISTRIES = [
    Ministry.WORD_OF_LIFE,
    Ministry.THE_BRIDGE_OUTREACH,
    Ministry.CORE,
    Ministry.ASK_THE_PASTOR,
    Ministry.FAITH_AND_FREEDOM,
]

_ALIASES = {
    "wol": Ministry.WORD_OF_LIFE,
    "word of life": Ministry.WORD_OF_LIFE,
    "core": Ministry.CORE,
    "tbo": Ministry.THE_BRIDGE_OUTREACH,
    "ask-pastor": Ministry.ASK_THE_PASTOR,
    "ask pastor": Ministry.ASK_THE_PASTOR,
    "ask the pastor": Ministry.ASK_THE_PASTOR,
    "askthepastor": Ministry.ASK_THE_PASTOR,
    "faith-freedom": Ministry.FAITH_AND_FREEDOM,
    "faithandfreedom": Ministry.FAITH_AND_FREEDOM,
    "faith and freedom": Ministry.FAITH_AND_FREEDOM,
}

_DESCRIPTIONS = {
    Ministry.WORD_OF_LIFE: "Word of Life",
    Ministry.CORE: "C.O.R.E.",
    Ministry.THE_BRIDGE_OUTREACH: "The Bridge Outreach",
    Ministry.ASK_THE_PASTOR: "Ask the Pastor",
    Ministry.FAITH_AND_FREEDOM: "Faith & Freedom",
    Ministry.UNKNOWN: "(Unknown Ministry)",
}

_ID_PREFIXES = {
    Ministry.WORD_OF_LIFE: "WOLS-",
    Ministry.CORE: "CORE-",
    Ministry.ASK_THE_PASTOR: "ATP-",
    Ministry.FAITH_AND_FREEDOM: "FandF-",
    Ministry.THE_BRIDGE_OUTREACH: "TBO-",
}
