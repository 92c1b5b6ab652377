"""
References from a message to the series it belongs to.

A reference is just data: whether the named series exists, and whether the
index makes sense, is decided later by the catalog and the validator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Reserved series name for a message that is its own one-message series
STAND_ALONE_NAME = "SAM"


@dataclass
class SeriesReference:
    """Name of a series plus the message's index (track) within it.

    The first index in a series is 1. Index 0 means the message belongs to
    the series but is hidden and sorts after the numbered messages.
    """

    name: str
    index: int = 0

    def is_stand_alone(self) -> bool:
        return self.name.strip().upper() == STAND_ALONE_NAME

    @classmethod
    def parse_many(cls, names: str, indexes: str) -> list[SeriesReference]:
        """Parse parallel semicolon-separated name and index cells.

        Missing indexes repeat the last parsed index; illegal ones become 0.

        Args:
            names: e.g. "Faith; Hope; Love"
            indexes: e.g. "1; 2; 1"

        Returns:
            One reference per non-blank name, in order
        """
        index_list = []
        for raw in (indexes or "").split(";"):
            raw = raw.strip()
            try:
                index_list.append(int(raw))
            except ValueError:
                if raw:
                    logger.warning("Encountered illegal track number '%s'", raw)
                index_list.append(0)

        references = []
        for position, name in enumerate((names or "").split(";")):
            name = name.strip()
            if not name:
                continue
            index = index_list[position] if position < len(index_list) else index_list[-1]
            references.append(cls(name=name, index=index))
        return references
