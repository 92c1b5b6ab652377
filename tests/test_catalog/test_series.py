"""Tests for online.catalog.series module."""

import pytest

from online.catalog.dateonly import DateOnly
from online.catalog.message import Message
from online.catalog.ministry import Ministry
from online.catalog.reference import SeriesReference
from online.catalog.resource import OnlineResource
from online.catalog.series import (
    Series,
    SeriesState,
    filter_series_by_ministry,
    filter_series_by_view,
    sort_series_by_name,
    sort_series_newest_first,
    sort_series_oldest_first,
)
from online.catalog.view import View


def _msg(name, index, series="SERIES", visibility=View.PUBLIC, **kwargs):
    return Message(
        name=name,
        series=[SeriesReference(series, index)],
        visibility=visibility,
        **kwargs,
    )


def _series(*messages, name="SERIES", **kwargs):
    seri = Series(name=name, **kwargs)
    seri.attach(messages)
    return seri


class TestFromMessage:
    """Tests for Series.from_message."""

    def _message(self, series=None):
        return Message(
            date=DateOnly.of(2006, 7, 8),
            name="A MESSAGE",
            description="A DESCRIPTION",
            visibility=View.PARTNER,
            speakers=["OLLIE", "SVEN"],
            resources=[
                OnlineResource(url="http://ollie.png", name="Ollie Portrait"),
                OnlineResource(url="http://sven.png", name="Sven Portrait"),
            ],
            series=series or [],
        )

    def test_stand_alone_message(self):
        """Test building a series out of a stand-alone message."""
        msg = self._message()

        seri = Series.from_message(msg)

        assert seri.id.startswith("SAM-")
        assert seri.name == "A MESSAGE"
        assert seri.description == "A DESCRIPTION"
        assert seri.visibility is View.PARTNER
        assert seri.start_date == DateOnly.of(2006, 7, 8)
        assert seri.end_date == DateOnly.of(2006, 7, 8)
        assert seri.state is SeriesState.COMPLETE
        assert seri.speakers == ["OLLIE", "SVEN"]
        assert seri.booklets == []
        assert [r.name for r in seri.resources] == ["Ollie Portrait", "Sven Portrait"]

        messages = seri.messages
        assert len(messages) == 1
        assert messages[0].name == "A MESSAGE"
        assert messages[0].series == [SeriesReference("A MESSAGE", 1)]

    def test_source_message_untouched(self):
        """Test that the series holds a copy of the message."""
        msg = self._message(series=[SeriesReference("OTHER", 2), SeriesReference("SAM", 1)])

        seri = Series.from_message(msg)

        assert seri.messages[0] is not msg
        assert len(msg.series) == 2
        assert seri.messages[0].series == [SeriesReference("A MESSAGE", 1)]

    def test_id_from_name(self):
        """Test that the stand-alone ID is the hash of the name."""
        seri = Series.from_message(Message(name="SERIES"))
        assert seri.id == "SAM-MTA1OTgwMDE3Ng"


class TestNormalize:
    """Tests for Series.normalize."""

    def test_sorting(self):
        """Test index order with hidden messages last."""
        seri = _series(_msg("MSG2", 2), _msg("MSG0", 0), _msg("MSG1", 1))

        seri.normalize(View.PUBLIC)

        assert [m.name for m in seri.messages_in_view()] == ["MSG1", "MSG2", "MSG0"]

    def test_zero_indexes_keep_order(self):
        """Test that hidden messages keep their original order."""
        seri = _series(_msg("Z1", 0), _msg("ONE", 1), _msg("Z2", 0), _msg("Z3", 0))

        seri.normalize(View.PUBLIC)

        assert [m.name for m in seri.messages_in_view()] == ["ONE", "Z1", "Z2", "Z3"]

    def test_stable(self):
        """Test that normalizing twice gives the same order."""
        seri = _series(_msg("B", 1), _msg("A", 1), _msg("C", 0))

        seri.normalize(View.PUBLIC)
        first = [m.name for m in seri.messages_in_view()]
        seri.normalize(View.PUBLIC)

        assert [m.name for m in seri.messages_in_view()] == first == ["B", "A", "C"]

    def test_dates(self):
        """Test that the window spans the visible messages."""
        seri = _series(
            _msg("MSG2", 2, date=DateOnly.of(2021, 6, 8)),
            _msg("MSG0", 0, date=DateOnly.of(2021, 6, 15)),
            _msg("MSG1", 1, date=DateOnly.of(2021, 6, 1)),
            _msg("UNDATED", 3),
        )

        seri.normalize(View.PUBLIC)

        assert seri.start_date == DateOnly.of(2021, 6, 1)
        assert seri.end_date == DateOnly.of(2021, 6, 15)

    def test_speakers(self):
        """Test speakers in index order with duplicates removed."""
        seri = _series(
            _msg("MSG0", 0, speakers=["Sven"]),
            _msg("MSG1", 1, speakers=["Tim", "Sam"]),
            _msg("MSG2", 2, speakers=["Ollie", "Tim"]),
        )

        seri.normalize(View.PUBLIC)

        assert seri.speakers == ["Tim", "Sam", "Ollie", "Sven"]
        assert seri.speaker_string() == "Tim, Sam, Ollie, Sven"

    def test_resources(self):
        """Test series resources first, then message resources by index, first URL wins."""
        seri = _series(
            _msg(
                "MSG2",
                2,
                resources=[
                    OnlineResource(url="https://notes", name="Second Study Notes"),
                    OnlineResource(url="https://aside", name="Sidetrack"),
                ],
            ),
            _msg("MSG0", 0, resources=[OnlineResource(url="https://skizzle", name="Skizzle")]),
            _msg(
                "MSG1", 1, resources=[OnlineResource(url="https://notes", name="First Study Notes")]
            ),
            resources=[OnlineResource(url="https://series/notes.pdf", name="Series Notes")],
        )

        seri.normalize(View.PUBLIC)

        assert [r.name for r in seri.all_resources] == [
            "Series Notes",
            "First Study Notes",
            "Sidetrack",
            "Skizzle",
        ]
        assert [r.name for r in seri.resources] == ["Series Notes"]

    def test_view_filter(self):
        """Test that only messages visible in the view are kept."""
        seri = _series(
            _msg("PUB", 1),
            _msg("PART", 2, visibility=View.PARTNER),
            _msg("PRIV", 3, visibility=View.PRIVATE),
            _msg("RAW", 4, visibility=View.RAW),
        )

        seri.normalize(View.PARTNER)
        assert seri.view is View.PARTNER
        assert [m.name for m in seri.messages_in_view()] == ["PUB", "PART"]

        seri.normalize(View.RAW)
        assert seri.view is View.RAW
        assert len(seri.messages_in_view()) == 4

    def test_view_monotonic(self):
        """Test that wider views never lose messages."""
        seri = _series(
            _msg("PUB", 1),
            _msg("PART", 2, visibility=View.PARTNER),
            _msg("PRIV", 3, visibility=View.PRIVATE),
            _msg("UNK", 4, visibility=View.UNKNOWN),
        )

        names = {}
        for view in [View.PUBLIC, View.PARTNER, View.PRIVATE, View.RAW]:
            names[view] = {m.name for m in seri.view_of(view).messages_in_view()}

        assert names[View.PUBLIC] <= names[View.PARTNER] <= names[View.PRIVATE] <= names[View.RAW]
        assert "UNK" in names[View.RAW]
        assert "UNK" not in names[View.PRIVATE]

    def test_view_of_leaves_original(self):
        """Test that view_of works on a copy."""
        seri = _series(_msg("PUB", 1), _msg("PRIV", 2, visibility=View.PRIVATE))

        public = seri.view_of(View.PUBLIC)

        assert [m.name for m in public.messages_in_view()] == ["PUB"]
        assert seri.view is View.RAW
        assert len(seri.messages_in_view()) == 2

    def test_no_messages_keeps_window(self):
        """Test that a series without messages keeps its stored dates."""
        seri = Series(
            name="BOOKLET",
            start_date=DateOnly.of(2020, 1, 1),
            end_date=DateOnly.of(2020, 2, 1),
        )

        seri.normalize(View.PUBLIC)

        assert seri.start_date == DateOnly.of(2020, 1, 1)
        assert seri.end_date == DateOnly.of(2020, 2, 1)


class TestSeriesId:
    """Tests for series identifiers."""

    def test_no_message(self):
        """Test that an ID cannot be generated without messages."""
        assert Series(name="SERIES").get_id() == ""

    @pytest.mark.parametrize(
        "ministry,expected",
        [
            (Ministry.UNKNOWN, "ID-MTA1OTgwMDE3Ng"),
            (None, "ID-MTA1OTgwMDE3Ng"),
            (Ministry.WORD_OF_LIFE, "WOLS-MTA1OTgwMDE3Ng"),
            (Ministry.ASK_THE_PASTOR, "ATP-MTA1OTgwMDE3Ng"),
            (Ministry.CORE, "CORE-MTA1OTgwMDE3Ng"),
            (Ministry.FAITH_AND_FREEDOM, "FandF-MTA1OTgwMDE3Ng"),
            (Ministry.THE_BRIDGE_OUTREACH, "TBO-MTA1OTgwMDE3Ng"),
        ],
    )
    def test_generated(self, ministry, expected):
        """Test IDs generated from the ministry and name."""
        seri = _series(_msg("MESSAGE", 1, ministry=ministry))
        assert seri.get_id() == expected

    def test_cached(self):
        """Test that a generated ID is stored and stable."""
        seri = _series(_msg("MESSAGE", 1, ministry=Ministry.WORD_OF_LIFE))

        first = seri.get_id()

        assert seri.id == first
        assert seri.get_id() == first

    def test_explicit(self):
        """Test that an explicit ID wins."""
        seri = _series(_msg("MESSAGE", 1, ministry=Ministry.FAITH_AND_FREEDOM), id="MY-ID")
        assert seri.get_id() == "MY-ID"

    def test_view_id(self):
        """Test that non-public views get distinct IDs."""
        seri = _series(_msg("MESSAGE", 1, ministry=Ministry.WORD_OF_LIFE))

        base = seri.get_id()
        public = seri.view_id(View.PUBLIC)
        partner = seri.view_id(View.PARTNER)
        private = seri.view_id(View.PRIVATE)

        assert public == base
        assert partner.startswith(base + "-")
        assert len({public, partner, private}) == 3


class TestQueries:
    """Tests for series queries and display."""

    def test_ministry(self):
        """Test that the ministry comes from the first message."""
        assert Series(name="S").ministry() is Ministry.UNKNOWN
        seri = _series(
            _msg("B", 2, ministry=Ministry.CORE),
            _msg("A", 1, ministry=Ministry.WORD_OF_LIFE),
        )
        assert seri.ministry() is Ministry.WORD_OF_LIFE

    def test_booklet(self):
        """Test which series are booklets."""
        booklet = [OnlineResource(url="http://blah")]

        assert not Series(name="SERIES").is_booklet()
        assert Series(name="SERIES", booklets=booklet).is_booklet()
        assert not Series(name="SERIES", id="MY-ID", booklets=booklet).is_booklet()
        assert not _series(Message(name="MESSAGE"), booklets=booklet).is_booklet()

    @pytest.mark.parametrize(
        "start,end,expected",
        [
            (None, None, "Coming Soon"),
            ((2006, 7, 8), None, "Started Jul 8, 2006"),
            ((2006, 7, 8), (2008, 9, 1), "Jul 8, 2006 - Sep 1, 2008"),
            ((2006, 7, 8), (2006, 9, 1), "Jul 8 - Sep 1, 2006"),
            ((2006, 7, 8), (2006, 7, 21), "Jul 8-21, 2006"),
            ((2006, 7, 8), (2006, 7, 8), "Jul 8, 2006"),
        ],
    )
    def test_date_string(self, start, end, expected):
        """Test the displayed date range."""
        seri = Series(
            name="SERIES",
            start_date=DateOnly.of(*start) if start else DateOnly(),
            end_date=DateOnly.of(*end) if end else DateOnly(),
        )
        assert seri.date_string() == expected

    def test_state(self):
        """Test the state derived from the window."""
        assert Series().state is SeriesState.NOT_STARTED
        assert Series(start_date=DateOnly.of(2021, 1, 1)).state is SeriesState.IN_PROGRESS
        assert (
            Series(start_date=DateOnly.of(2021, 1, 1), end_date=DateOnly.of(2021, 2, 1)).state
            is SeriesState.COMPLETE
        )

    def test_copy(self):
        """Test that a copy shares no lists with the original."""
        seri = _series(
            _msg("A", 1, speakers=["VERN"]), booklets=[OnlineResource(url="https://b.pdf")]
        )

        cpy = seri.copy()
        cpy.booklets.append(OnlineResource(url="https://c.pdf"))
        cpy.speakers.append("MARY")
        cpy.messages_in_view()[0].name = "CHANGED"

        assert len(seri.booklets) == 1
        assert seri.speakers == ["VERN"]
        assert seri.messages_in_view()[0].name == "A"


class TestFilters:
    """Tests for filtering series."""

    def test_by_ministry(self):
        """Test filtering by one or more ministries."""
        corpus = [
            _series(_msg("A", 1, series="S1", ministry=Ministry.WORD_OF_LIFE), name="S1"),
            _series(_msg("B", 1, series="S2", ministry=Ministry.CORE), name="S2"),
            _series(_msg("C", 1, series="S3", ministry=Ministry.WORD_OF_LIFE), name="S3"),
        ]

        assert [s.name for s in filter_series_by_ministry(corpus, Ministry.WORD_OF_LIFE)] == [
            "S1",
            "S3",
        ]
        assert filter_series_by_ministry(corpus, Ministry.THE_BRIDGE_OUTREACH) == []
        assert len(filter_series_by_ministry(corpus, Ministry.WORD_OF_LIFE, Ministry.CORE)) == 3
        assert filter_series_by_ministry([], Ministry.CORE) == []

    def test_by_view_series_visibility(self):
        """Test that the series' own visibility must be visible."""
        views = [View.PUBLIC, View.PARTNER, View.PRIVATE, View.RAW]
        corpus = [
            _series(
                Message(name=f"MSG-{i}", visibility=View.PUBLIC),
                name=f"SERIES-{i}",
                visibility=view,
            )
            for i, view in enumerate(views, start=1)
        ]

        public = filter_series_by_view(corpus, View.PUBLIC)
        assert [s.name for s in public] == ["SERIES-1"]
        assert public[0].view is View.PUBLIC

        partner = filter_series_by_view(corpus, View.PARTNER)
        assert [s.name for s in partner] == ["SERIES-1", "SERIES-2"]

        private = filter_series_by_view(corpus, View.PRIVATE)
        assert [s.name for s in private] == ["SERIES-1", "SERIES-2", "SERIES-3", "SERIES-4"]

    def test_by_view_drops_empty(self):
        """Test that series with no visible messages are dropped."""
        corpus = [
            _series(
                Message(name="MSG-A", visibility=View.RAW),
                Message(name="MSG-B", visibility=View.PRIVATE),
                name="SERIES-1",
                visibility=View.PUBLIC,
            ),
            _series(
                Message(name="MSG-C", visibility=View.PARTNER),
                name="SERIES-2",
                visibility=View.PUBLIC,
            ),
        ]

        assert filter_series_by_view(corpus, View.PUBLIC) == []

    def test_by_view_normalizes(self):
        """Test that filtered series are normalized for the view."""
        corpus = [
            _series(
                _msg(
                    "MSG-A", 2, series="SERIES-1",
                    speakers=["VERN"], date=DateOnly.of(2021, 3, 4),
                ),
                _msg(
                    "MSG-B", 3, series="SERIES-1", visibility=View.PRIVATE,
                    speakers=["MARY"], date=DateOnly.of(2021, 3, 11),
                ),
                _msg(
                    "MSG-C", 1, series="SERIES-1", visibility=View.PARTNER,
                    speakers=["DAVE"], date=DateOnly.of(2021, 3, 18),
                ),
                name="SERIES-1",
                visibility=View.PUBLIC,
            )
        ]

        seri = filter_series_by_view(corpus, View.PUBLIC)[0]
        assert seri.speakers == ["VERN"]
        assert seri.start_date == seri.end_date == DateOnly.of(2021, 3, 4)
        assert [m.name for m in seri.messages_in_view()] == ["MSG-A"]

        seri = filter_series_by_view(corpus, View.PARTNER)[0]
        assert seri.speakers == ["DAVE", "VERN"]
        assert seri.start_date == DateOnly.of(2021, 3, 4)
        assert seri.end_date == DateOnly.of(2021, 3, 18)
        assert [m.name for m in seri.messages_in_view()] == ["MSG-C", "MSG-A"]

        seri = filter_series_by_view(corpus, View.PRIVATE)[0]
        assert seri.speakers == ["DAVE", "VERN", "MARY"]
        assert [m.name for m in seri.messages_in_view()] == ["MSG-C", "MSG-A", "MSG-B"]

        # the corpus itself is untouched
        assert corpus[0].view is View.RAW


class TestSorts:
    """Tests for sorting series."""

    @pytest.fixture
    def corpus(self):
        return [
            Series(name="CHARLIE-SERIES", start_date=DateOnly.of(2001, 1, 1)),
            Series(name="ALFA-SERIES", start_date=DateOnly.of(2001, 2, 1)),
            Series(name="BRAVO-SERIES", start_date=DateOnly.of(2001, 3, 1)),
        ]

    def test_by_name(self, corpus):
        """Test sorting by name."""
        assert [s.name for s in sort_series_by_name(corpus)] == [
            "ALFA-SERIES",
            "BRAVO-SERIES",
            "CHARLIE-SERIES",
        ]

    def test_oldest_first(self, corpus):
        """Test sorting by start date, oldest first."""
        assert [s.name for s in sort_series_oldest_first(corpus)] == [
            "CHARLIE-SERIES",
            "ALFA-SERIES",
            "BRAVO-SERIES",
        ]

    def test_newest_first(self, corpus):
        """Test sorting by start date, newest first."""
        assert [s.name for s in sort_series_newest_first(corpus)] == [
            "BRAVO-SERIES",
            "ALFA-SERIES",
            "CHARLIE-SERIES",
        ]
