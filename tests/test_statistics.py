"""Tests für die Kennzahlen-Berechnung (Aggregator)."""

from datetime import datetime, timedelta
from typing import Optional

import pytest

from analysis.statistics import (
    Statistics,
    aggregate,
    build_status_histogram,
    empty_statistics,
    parse_record_date,
    select_upcoming_courses,
)
from config.defaults import STATUS_COLORS, STATUS_LABELS
from models.course import Course, CourseStatus
from models.enrollment import Enrollment
from models.instructor import Instructor
from models.participant import Participant
from models.room import Room


NOW = datetime(2026, 10, 19, 12, 0, 0)
_COUNTER = iter(range(1, 100_000))


# ─── Testdaten-Hilfsfunktionen ────────────────────────────────────────────────

def _rid() -> str:
    return f"rec{next(_COUNTER):05d}"


def _course(
    status: Optional[str] = None,
    price: Optional[float] = None,
    start: Optional[str] = None,
    title: Optional[str] = None,
) -> Course:
    fields = {"status": status, "preis": price, "startdatum": start, "titel": title}
    return Course.model_validate({
        "record_id": _rid(),
        "createdat": "2026-01-05T09:00:00",
        "updatedat": None,
        "fields": {k: v for k, v in fields.items() if v is not None},
    })


def _enrollment(paid: Optional[bool]) -> Enrollment:
    fields = {} if paid is None else {"bezahlt": paid}
    return Enrollment.model_validate({
        "record_id": _rid(), "createdat": "2026-01-05T09:00:00", "fields": fields,
    })


def _instructor() -> Instructor:
    return Instructor.model_validate({
        "record_id": _rid(), "createdat": "2026-01-05T09:00:00",
        "fields": {"name": "Eva Weber"},
    })


def _room() -> Room:
    return Room.model_validate({
        "record_id": _rid(), "createdat": "2026-01-05T09:00:00",
        "fields": {"raumname": "Seminarraum 1", "kapazitaet": 16},
    })


def _participant() -> Participant:
    return Participant.model_validate({
        "record_id": _rid(), "createdat": "2026-01-05T09:00:00", "fields": {},
    })


def _days(n: float) -> str:
    return (NOW + timedelta(days=n)).isoformat()


# ─── Anzahlen / Summen ────────────────────────────────────────────────────────

class TestCounts:
    def test_cardinalities_match_input_lengths(self):
        """Die fünf Anzahlen entsprechen den Längen der Eingabelisten."""
        stats = aggregate(
            [_instructor() for _ in range(3)],
            [_room() for _ in range(2)],
            [_participant() for _ in range(7)],
            [_course() for _ in range(4)],
            [_enrollment(True) for _ in range(5)],
            now=NOW,
        )
        assert stats.instructor_count == 3
        assert stats.room_count == 2
        assert stats.participant_count == 7
        assert stats.course_count == 4
        assert stats.enrollment_count == 5

    def test_active_count_is_exact_match(self):
        """Nur status == "aktiv" zählt; Groß-/Kleinschreibung ist relevant."""
        courses = [
            _course("aktiv"), _course("aktiv"), _course("Aktiv"),
            _course("geplant"), _course(None), _course("irgendwas"),
        ]
        stats = aggregate([], [], [], courses, [], now=NOW)
        assert stats.active_course_count == 2

    def test_revenue_treats_missing_price_as_zero(self):
        """Fehlende Preise zählen mit 0, der Kurs bleibt in der Anzahl."""
        courses = [_course(price=120), _course(price=None), _course(price=89.5)]
        stats = aggregate([], [], [], courses, [], now=NOW)
        assert stats.revenue_total == pytest.approx(209.5)
        assert stats.course_count == 3

    def test_revenue_non_negative_for_non_negative_prices(self):
        courses = [_course(price=p) for p in (0, 10, None, 5.25)]
        assert aggregate([], [], [], courses, [], now=NOW).revenue_total >= 0

    def test_paid_count_ignores_false_and_missing(self):
        """Nur bezahlt == True zählt; fehlendes Flag gilt als nicht bezahlt."""
        enrollments = [_enrollment(True), _enrollment(False), _enrollment(None),
                       _enrollment(True)]
        stats = aggregate([], [], [], [], enrollments, now=NOW)
        assert stats.paid_enrollment_count == 2
        assert stats.enrollment_count == 4


# ─── Status-Verteilung ────────────────────────────────────────────────────────

class TestStatusHistogram:
    def test_fixed_order_labels_and_colors(self):
        """Reihenfolge geplant, aktiv, abgeschlossen, abgesagt mit fester Tabelle."""
        buckets = build_status_histogram([])
        assert [b.status for b in buckets] == [
            CourseStatus.PLANNED, CourseStatus.ACTIVE,
            CourseStatus.COMPLETED, CourseStatus.CANCELLED,
        ]
        assert [b.label for b in buckets] == [
            "Geplant", "Aktiv", "Abgeschlossen", "Abgesagt",
        ]
        for b in buckets:
            assert b.color == STATUS_COLORS[b.status]
            assert b.label == STATUS_LABELS[b.status]
            assert b.count == 0

    def test_counts_per_status(self):
        courses = [
            _course("geplant"), _course("geplant"), _course("aktiv"),
            _course("abgeschlossen"), _course("abgesagt"), _course("abgesagt"),
            _course("abgesagt"),
        ]
        counts = [b.count for b in build_status_histogram(courses)]
        assert counts == [2, 1, 1, 3]

    def test_unknown_status_excluded_from_sum(self):
        """Unbekannte oder fehlende Status landen in keinem Balken."""
        courses = [
            _course("geplant"), _course("aktiv"), _course("ABGESAGT"),
            _course(None), _course("pausiert"),
        ]
        stats = aggregate([], [], [], courses, [], now=NOW)
        assert sum(b.count for b in stats.status_histogram) == 2
        assert stats.course_count == 5


# ─── Bevorstehende Kurse ──────────────────────────────────────────────────────

class TestUpcomingCourses:
    def test_open_interval_excludes_both_bounds(self):
        """Beginn genau jetzt oder genau in 30 Tagen wird ausgeschlossen."""
        at_now = _course(start=NOW.isoformat(), title="jetzt")
        at_end = _course(start=_days(30), title="grenze")
        inside = _course(start=_days(1), title="morgen")
        just_before_end = _course(start=(NOW + timedelta(days=30, seconds=-1)).isoformat(),
                                  title="knapp")
        result = select_upcoming_courses([at_now, at_end, inside, just_before_end], NOW)
        assert [c.fields.title for c in result] == ["morgen", "knapp"]

    def test_past_and_far_future_excluded(self):
        courses = [_course(start=_days(-1)), _course(start=_days(31)),
                   _course(start="2026-10-19")]  # heute 00:00 liegt vor NOW
        assert select_upcoming_courses(courses, NOW) == []

    def test_date_only_values_are_accepted(self):
        """"YYYY-MM-DD" gilt als Mitternacht und liegt im Fenster."""
        course = _course(start="2026-11-18")
        assert select_upcoming_courses([course], NOW) == [course]

    def test_missing_start_date_excluded(self):
        assert select_upcoming_courses([_course(status="aktiv")], NOW) == []

    def test_unparseable_start_date_excluded_without_error(self):
        """Ungültige Datumswerte werfen nicht, sie fallen einfach heraus."""
        courses = [_course(start="demnächst"), _course(start="2026-13-45"),
                   _course(start="19.10.2026")]
        stats = aggregate([], [], [], courses, [], now=NOW)
        assert stats.upcoming_courses == []
        assert stats.course_count == 3

    def test_out_of_range_timezone_excluded_without_error(self):
        """Gültige ISO-Zeitstempel am Rand des datetime-Bereichs fallen heraus."""
        courses = [_course(start="0001-01-01T00:00:00+01:00"),
                   _course(start="9999-12-31T23:59:59-01:00"),
                   _course(start=_days(2), title="gültig")]
        stats = aggregate([], [], [], courses, [], now=NOW)
        assert [c.fields.title for c in stats.upcoming_courses] == ["gültig"]
        assert stats.course_count == 3

    def test_sorted_ascending_and_limited_to_five(self):
        offsets = [9, 2, 27, 5, 14, 1, 20]
        courses = [_course(start=_days(d), title=f"+{d}") for d in offsets]
        result = select_upcoming_courses(courses, NOW)
        assert len(result) == 5
        assert [c.fields.title for c in result] == ["+1", "+2", "+5", "+9", "+14"]
        starts = [c.fields.start_date for c in result]
        assert starts == sorted(starts)

    def test_window_and_limit_configurable(self):
        courses = [_course(start=_days(d)) for d in (1, 3, 8, 12)]
        result = select_upcoming_courses(courses, NOW, days=10, limit=2)
        assert len(result) == 2
        assert all(NOW < parse_record_date(c.fields.start_date) < NOW + timedelta(days=10)
                   for c in result)

    def test_no_result_outside_window(self):
        offsets = [-5, -0.5, 0, 0.25, 10, 29.9, 30, 30.1, 60]
        courses = [_course(start=_days(d)) for d in offsets]
        horizon = NOW + timedelta(days=30)
        for c in aggregate([], [], [], courses, [], now=NOW).upcoming_courses:
            start = parse_record_date(c.fields.start_date)
            assert NOW < start < horizon


# ─── Datums-Parsing ───────────────────────────────────────────────────────────

class TestParseRecordDate:
    def test_date_only(self):
        assert parse_record_date("2026-10-19") == datetime(2026, 10, 19)

    def test_iso_timestamp(self):
        assert parse_record_date("2026-10-19T08:30:00") == datetime(2026, 10, 19, 8, 30)

    def test_utc_suffix_returns_naive_local_time(self):
        parsed = parse_record_date("2026-10-19T08:30:00Z")
        assert parsed is not None
        assert parsed.tzinfo is None

    @pytest.mark.parametrize("value", [
        None, "", "   ", "kein datum", "2026-02-30",
        "0001-01-01T00:00:00+01:00", "9999-12-31T23:59:59-01:00",
    ])
    def test_invalid_values_return_none(self, value):
        assert parse_record_date(value) is None


# ─── Szenarien ────────────────────────────────────────────────────────────────

class TestScenarios:
    def test_empty_input_all_zero(self):
        stats = aggregate([], [], [], [], [], now=NOW)
        assert stats.instructor_count == stats.room_count == 0
        assert stats.participant_count == stats.course_count == 0
        assert stats.enrollment_count == stats.active_course_count == 0
        assert stats.paid_enrollment_count == 0
        assert stats.revenue_total == 0
        assert len(stats.status_histogram) == 4
        assert all(b.count == 0 for b in stats.status_histogram)
        assert stats.upcoming_courses == []
        assert stats.histogram_is_empty

    def test_empty_statistics_matches_empty_input(self):
        empty = empty_statistics()
        assert isinstance(empty, Statistics)
        assert empty.model_dump() == aggregate([], [], [], [], [], now=NOW).model_dump()

    def test_active_course_with_price_and_paid_enrollment(self):
        """Aktiver Kurs (120 €, Beginn in 10 Tagen), geplanter ohne Preis, eine Zahlung."""
        active = _course("aktiv", price=120, start=_days(10), title="Python")
        planned = _course("geplant", price=None)
        stats = aggregate([], [], [], [active, planned], [_enrollment(True)], now=NOW)
        assert stats.active_course_count == 1
        assert stats.revenue_total == 120
        assert stats.paid_enrollment_count == 1
        assert stats.upcoming_courses == [active]

    def test_aggregate_is_idempotent(self):
        courses = [_course("aktiv", 50, _days(3)), _course("abgesagt", None, _days(8)),
                   _course("kaputt", 10, "demnächst")]
        enrollments = [_enrollment(True), _enrollment(None)]
        first = aggregate([_instructor()], [_room()], [], courses, enrollments, now=NOW)
        second = aggregate([_instructor()], [_room()], [], courses, enrollments, now=NOW)
        assert first.model_dump() == second.model_dump()
