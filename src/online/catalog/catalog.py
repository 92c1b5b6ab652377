"""
The catalog: root aggregate of all series and messages.

Messages name the series they belong to. Preparing the catalog resolves
those references (attaching messages to their series) and creates a
one-message series for every stand-alone message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from online.catalog.message import Message
from online.catalog.reference import SeriesReference
from online.catalog.series import Series, sort_by_series_index
from online.catalog.view import View

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """A catalog could not be read or written."""


@dataclass
class Catalog:
    """All online content: explicit series plus messages."""

    created: datetime | None = None
    series: list[Series] = field(default_factory=list)
    messages: list[Message] = field(default_factory=list)

    # Derived state, rebuilt by prepare()
    message_series: list[Series] = field(
        default_factory=list, init=False, repr=False, compare=False
    )
    all_series: list[Series] = field(default_factory=list, init=False, repr=False, compare=False)
    _prepared: bool = field(default=False, init=False, repr=False, compare=False)

    # Lookup

    def find_series_by_name(self, name: str) -> Series | None:
        """Find a series by exact name.

        Searches stand-alone series too once the catalog is prepared.
        """
        corpus = self.all_series if self._prepared else self.series
        for seri in corpus:
            if seri.name == name:
                return seri
        return None

    def find_messages_in_series(self, name: str) -> list[Message]:
        """Get copies of the messages in a series, in series order.

        Each returned message only carries the reference to the requested
        series, so its index is unambiguous.
        """
        found = []
        for msg in self.messages:
            ref = msg.find_series_reference(name)
            if ref is None:
                continue
            member = msg.copy()
            member.series = [SeriesReference(ref.name, ref.index)]
            found.append(member)
        return sort_by_series_index(found, name)

    # Preparation

    def initialize_messages(self) -> None:
        for msg in self.messages:
            msg.initialize()

    def attach_messages_to_series(self) -> None:
        """Attach every message to the explicit series it references.

        References to undefined series are left for the validator.
        """
        for seri in self.series:
            seri.attach(self.find_messages_in_series(seri.name))
            logger.debug(
                "Attached %d messages to series '%s'", len(seri.messages), seri.name
            )

    def synthesize_stand_alone_series(self) -> None:
        """Create a one-message series for each stand-alone message."""
        self.message_series = [
            Series.from_message(msg) for msg in self.messages if msg.is_stand_alone()
        ]
        self.all_series = self.series + self.message_series

    def prepare(self) -> None:
        """Attach messages and synthesize stand-alone series. Runs once."""
        if self._prepared:
            return
        self.attach_messages_to_series()
        self.synthesize_stand_alone_series()
        self._prepared = True

    @property
    def is_prepared(self) -> bool:
        return self._prepared

    # Views

    def view_of(self, view: View) -> list[Series]:
        """Snapshot of the catalog's series for a view.

        Returns normalized copies of every series visible in the view that
        still has a visible message (booklets are kept as they are). The
        catalog itself is not modified.
        """
        self.prepare()
        result = []
        for seri in self.all_series:
            if not seri.effective_visibility.is_visible_in(view):
                continue
            candidate = seri.view_of(view)
            if candidate.messages_in_view() or candidate.is_booklet():
                result.append(candidate)
        return result
