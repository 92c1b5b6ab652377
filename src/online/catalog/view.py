"""
Visibility of series and messages.

Visibilities form an accessibility order: public ⊂ partner ⊂ private. A
viewer authorized for a view sees everything whose visibility is at or
below that view. Raw (unedited) content counts as private, and the raw
view itself sees everything.
"""

from __future__ import annotations

from enum import Enum


class View(Enum):
    """Visibility of a series or message, and the view a catalog is built for."""

    RAW = "raw"  # undetermined or unedited
    PUBLIC = "public"  # available to anyone
    PARTNER = "partner"  # available to covenant partners
    PRIVATE = "private"  # not to be displayed online to anyone
    UNKNOWN = "unknown"  # could not be parsed

    @classmethod
    def parse(cls, text: str | None) -> View:
        """Parse a visibility. Unrecognized text becomes UNKNOWN."""
        return _ALIASES.get((text or "").strip().lower(), cls.UNKNOWN)

    @property
    def level(self) -> int | None:
        """Position in the accessibility order, None if not accessible."""
        return _LEVELS.get(self)

    def is_visible_in(self, view: View) -> bool:
        """Report whether content with this visibility is accessible in a view."""
        if view is View.RAW:
            return True
        mine, theirs = self.level, view.level
        if mine is None or theirs is None:
            return False
        return mine <= theirs


_ALIASES = {
    "public": View.PUBLIC,
    "partner": View.PARTNER,
    "protected": View.PARTNER,
    "private": View.PRIVATE,
    "raw": View.RAW,
}

_LEVELS = {
    View.PUBLIC: 1,
    View.PARTNER: 2,
    View.PRIVATE: 3,
    View.RAW: 3,
}

# Views that a published catalog can be generated for
PUBLISHED_VIEWS = (View.PUBLIC, View.PARTNER)


def is_visible_in_view(visibility: View | None, view: View) -> bool:
    """Accessibility relation that tolerates a missing visibility."""
    if visibility is None:
        return view is View.RAW
    return visibility.is_visible_in(view)
