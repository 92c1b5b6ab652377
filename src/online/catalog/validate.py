"""
Catalog validation.

Validation never raises. Every check runs to completion and writes what it
finds into an IndentingReport; the caller gets back a single ok flag and
decides whether problems are fatal.
"""

from __future__ import annotations

import logging

from online.catalog.catalog import Catalog
from online.catalog.message import MEDIA_STATES, Message, is_url
from online.catalog.message_type import MessageType
from online.catalog.ministry import Ministry
from online.catalog.series import Series
from online.catalog.view import View
from online.core.report import IndentingReport, ReportLevel

logger = logging.getLogger(__name__)

# Visibilities that do not need a fully described record
_UNPUBLISHED = (View.RAW, View.PRIVATE)


def validate(
    catalog: Catalog,
    level: ReportLevel = ReportLevel.SILENT,
    log: logging.Logger | None = None,
) -> tuple[bool, IndentingReport]:
    """Validate an entire catalog.

    Args:
        catalog: Catalog to check (normally already prepared)
        level: Where report lines are mirrored as they are written
        log: Logger for ReportLevel.LOG

    Returns:
        Tuple of (ok, report). ok is False if any problem was reported.
    """
    report = IndentingReport(level, log)
    ok = True

    ok = validate_series_names(catalog, report) and ok
    ok = validate_message_series(catalog, report) and ok
    ok = validate_message_series_index(catalog, report) and ok

    with report.section("Series"):
        for seri in catalog.series:
            ok = validate_series(seri, report) and ok

    with report.section("Messages"):
        for msg in catalog.messages:
            ok = validate_message(msg, report) and ok

    logger.debug("Validation finished with %d problem lines", report.size)
    return ok, report


def validate_series_names(catalog: Catalog, report: IndentingReport) -> bool:
    """Check that no two series share a name."""
    valid = True
    names = sorted(seri.name for seri in catalog.series)

    with report.section("Series names"):
        for first, second in zip(names, names[1:]):
            if first == second:
                valid = False
                report.printf("There are multiple series with the name '%s'", first)

    return valid


def validate_message_series(catalog: Catalog, report: IndentingReport) -> bool:
    """Check that every series a message references exists.

    Only explicit series count: messages are never attached to the
    synthetic series of a stand-alone message. References to stand-alone
    messages are skipped.
    """
    valid = True
    defined = {seri.name for seri in catalog.series}

    with report.section("Message series references"):
        for msg in catalog.messages:
            for ref in msg.series:
                if ref.is_stand_alone():
                    continue
                if ref.name not in defined:
                    valid = False
                    report.printf(
                        "Message '%s' references series named '%s' which cannot be found",
                        msg.name,
                        ref.name,
                    )

    return valid


def validate_message_series_index(catalog: Catalog, report: IndentingReport) -> bool:
    """Check that series indexes run 1, 2, ... k with only zeros after them."""
    valid = True

    with report.section("Series indexes"):
        for seri in catalog.series:
            msgs = catalog.find_messages_in_series(seri.name)

            # positive indexes sort first, so msgs[0] holds the lowest one
            if msgs and msgs[0].series[0].index > 1:
                valid = False
                report.printf(
                    "Series '%s' first message '%s' has index %d",
                    seri.name,
                    msgs[0].name,
                    msgs[0].series[0].index,
                )

            for pos in range(len(msgs) - 1):
                first, second = msgs[pos], msgs[pos + 1]
                index1 = first.series[0].index
                index2 = second.series[0].index
                # zeros sort to the end and are not numbered
                if index2 == 0:
                    break
                if index1 == index2:
                    valid = False
                    report.printf(
                        "Series '%s' has at least two messages with index %d: '%s' and '%s'",
                        seri.name,
                        index1,
                        first.name,
                        second.name,
                    )
                elif index2 > index1 + 1:
                    valid = False
                    report.printf(
                        "Series '%s' has a gap between indexes %d ('%s') and %d ('%s')",
                        seri.name,
                        index1,
                        first.name,
                        index2,
                        second.name,
                    )

    return valid


def validate_series(seri: Series, report: IndentingReport) -> bool:
    """Check a single series record."""
    valid = True

    with report.section(f"Series '{seri.name}'"):
        if not seri.name:
            valid = False
            report.printf("Has no name")

        if not seri.id and not seri.is_booklet() and seri.visibility not in _UNPUBLISHED:
            valid = False
            report.printf("Has no ID")

        for booklet in seri.booklets:
            if not booklet.has_url():
                valid = False
                report.printf(
                    "Booklet '%s' does not contain a valid URL: '%s'", booklet.name, booklet.url
                )

    return valid


def validate_message(msg: Message, report: IndentingReport) -> bool:
    """Check a single message record.

    The section title carries the date so unnamed messages can be found.
    """
    valid = True

    with report.section(f"Message {msg.date} '{msg.name}'"):
        if msg.date.is_zero():
            valid = False
            report.printf("Has no date")

        if not msg.name:
            valid = False
            report.printf("Has no name")

        if msg.ministry is None:
            valid = False
            report.printf("No ministry")
        elif msg.ministry is Ministry.UNKNOWN:
            valid = False
            report.printf("Unknown ministry")

        if msg.visibility is None:
            valid = False
            report.printf("No visibility")
        elif msg.visibility is View.UNKNOWN:
            valid = False
            report.printf("Unknown visibility")

        if msg.visibility not in _UNPUBLISHED:
            if msg.type is None:
                valid = False
                report.printf("No type")
            elif msg.type is MessageType.UNKNOWN:
                valid = False
                report.printf("Unknown type")

        if not _is_media_valid(msg.audio):
            valid = False
            report.printf("Audio isn't valid: '%s'", msg.audio)

        if not _is_media_valid(msg.video):
            valid = False
            report.printf("Video isn't valid: '%s'", msg.video)

        for resource in msg.resources:
            if not resource.has_url():
                valid = False
                report.printf(
                    "Resource '%s' does not contain a valid URL: '%s'", resource.name, resource.url
                )

    return valid


def _is_media_valid(value: str) -> bool:
    """Media must be a URL, a production state, or empty."""
    if not value:
        return True
    return is_url(value) or value.strip().lower() in MEDIA_STATES
