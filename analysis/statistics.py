"""Kennzahlen für das Dashboard.

Berechnet aus den fünf Datensammlungen Anzahlen, Umsatz, Status-Verteilung
und die Liste der bevorstehenden Kurse. Reine Funktion ohne Seiteneffekte.
"""

from datetime import datetime, timedelta
from typing import Optional, Sequence

from pydantic import BaseModel

from config.defaults import STATUS_COLORS, STATUS_LABELS, STATUS_ORDER
from models.course import Course, CourseStatus
from models.enrollment import Enrollment
from models.instructor import Instructor
from models.participant import Participant
from models.room import Room


DEFAULT_UPCOMING_DAYS = 30
DEFAULT_UPCOMING_LIMIT = 5


# ─── Ergebnis-Modelle ─────────────────────────────────────────────────────────

class StatusBucket(BaseModel):
    """Ein Balken im Status-Diagramm."""

    status: CourseStatus
    label: str
    color: str   # "#RRGGBB"
    count: int


class Statistics(BaseModel):
    """Alle Kennzahlen eines Dashboard-Abrufs."""

    instructor_count: int = 0
    room_count: int = 0
    participant_count: int = 0
    course_count: int = 0
    enrollment_count: int = 0
    active_course_count: int = 0
    revenue_total: float = 0.0
    paid_enrollment_count: int = 0
    status_histogram: list[StatusBucket] = []
    upcoming_courses: list[Course] = []

    @property
    def histogram_is_empty(self) -> bool:
        return all(b.count == 0 for b in self.status_histogram)


# ─── Datums-Parsing ───────────────────────────────────────────────────────────

def parse_record_date(value: Optional[str]) -> Optional[datetime]:
    """Parst "YYYY-MM-DD" oder einen ISO-Zeitstempel.

    Datumswerte ohne Uhrzeit gelten als Mitternacht (lokal). Zeitstempel mit
    Zeitzone werden in naive Lokalzeit umgerechnet. Ungültige Werte → None.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone().replace(tzinfo=None)
    except (ValueError, OverflowError):
        # OverflowError: Zeitzonen-Umrechnung an den Rändern von datetime
        return None
    return parsed


# ─── Aggregation ──────────────────────────────────────────────────────────────

def build_status_histogram(courses: Sequence[Course]) -> list[StatusBucket]:
    """Anzahl Kurse je Status in fester Reihenfolge; unbekannte Status fallen weg."""
    counts = {status: 0 for status in STATUS_ORDER}
    for course in courses:
        status = course.known_status
        if status is not None:
            counts[status] += 1
    return [
        StatusBucket(
            status=status,
            label=STATUS_LABELS[status],
            color=STATUS_COLORS[status],
            count=counts[status],
        )
        for status in STATUS_ORDER
    ]


def select_upcoming_courses(
    courses: Sequence[Course],
    now: datetime,
    days: int = DEFAULT_UPCOMING_DAYS,
    limit: int = DEFAULT_UPCOMING_LIMIT,
) -> list[Course]:
    """Kurse mit Beginn im offenen Intervall (now, now + days).

    Sortierung nach dem Roh-String des Startdatums (ISO, daher
    lexikographisch korrekt), danach auf `limit` gekürzt.
    """
    horizon = now + timedelta(days=days)
    upcoming = []
    for course in courses:
        start = parse_record_date(course.fields.start_date)
        if start is None:
            continue
        if now < start < horizon:
            upcoming.append(course)
    upcoming.sort(key=lambda c: c.fields.start_date or "")
    return upcoming[:limit]


def aggregate(
    instructors: Sequence[Instructor],
    rooms: Sequence[Room],
    participants: Sequence[Participant],
    courses: Sequence[Course],
    enrollments: Sequence[Enrollment],
    now: Optional[datetime] = None,
    upcoming_days: int = DEFAULT_UPCOMING_DAYS,
    upcoming_limit: int = DEFAULT_UPCOMING_LIMIT,
) -> Statistics:
    """Berechnet alle Kennzahlen aus den fünf Datensammlungen.

    `now` ist für Tests fixierbar; Standard ist die aktuelle Lokalzeit.
    """
    if now is None:
        now = datetime.now()

    return Statistics(
        instructor_count=len(instructors),
        room_count=len(rooms),
        participant_count=len(participants),
        course_count=len(courses),
        enrollment_count=len(enrollments),
        active_course_count=sum(
            1 for c in courses if c.fields.status == CourseStatus.ACTIVE.value
        ),
        revenue_total=sum((c.fields.price or 0.0) for c in courses),
        paid_enrollment_count=sum(1 for e in enrollments if e.is_paid),
        status_histogram=build_status_histogram(courses),
        upcoming_courses=select_upcoming_courses(
            courses, now, days=upcoming_days, limit=upcoming_limit,
        ),
    )


def empty_statistics() -> Statistics:
    """Alle Kennzahlen auf Null (Rückfall bei fehlgeschlagenem Abruf)."""
    return aggregate([], [], [], [], [])
