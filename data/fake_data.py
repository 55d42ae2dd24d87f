"""Testdaten-Generator für das Kursverwaltungs-Dashboard.

Erzeugt einen realistischen Datenstand einer Weiterbildungs-Akademie im
Wire-Format der Record-API (Verweise als URL auf den Ziel-Record).

Absichtliche Sonderfälle:
  1. Kurse in allen vier Status plus ein Kurs ohne Status
  2. Einige Kurse ohne Preis (zählen mit 0 zum Gesamtpreis)
  3. Ein Kurs mit ungültigem Startdatum (darf nie "bevorstehend" sein)
  4. Mehrere Kurse innerhalb der nächsten 30 Tage, einige danach
  5. Eine Anmeldung mit Verweis auf einen nicht existierenden Kurs
"""

import random
import string
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from config.schema import AppIds
from models.course import Course, CourseFields, CourseStatus
from models.enrollment import Enrollment, EnrollmentFields
from models.instructor import Instructor, InstructorFields
from models.participant import Participant, ParticipantFields
from models.room import Room, RoomFields
from models.snapshot import RecordSnapshot

# ─── Namens-Listen ────────────────────────────────────────────────────────────

_FIRST_NAMES = [
    "Andreas", "Bernd", "Christian", "Dieter", "Franz", "Hans", "Jürgen",
    "Klaus", "Markus", "Michael", "Peter", "Stefan", "Thomas", "Yusuf",
    "Anna", "Birgit", "Christine", "Eva", "Iris", "Kathrin", "Lena",
    "Maria", "Olga", "Sandra", "Tanja", "Ulrike", "Vera", "Zoe",
]

_LAST_NAMES = [
    "Müller", "Schmidt", "Schneider", "Fischer", "Weber", "Meyer",
    "Wagner", "Becker", "Schulz", "Hoffmann", "Schäfer", "Koch",
    "Bauer", "Richter", "Klein", "Wolf", "Schröder", "Neumann",
    "Schwarz", "Zimmermann", "Braun", "Krüger", "Hartmann", "Lange",
]

# (Fachgebiet, Kurstitel)
_COURSE_CATALOG: list[tuple[str, str]] = [
    ("Informatik", "Python für Einsteiger"),
    ("Informatik", "Datenbanken mit SQL"),
    ("Informatik", "Webentwicklung kompakt"),
    ("Sprachen", "Business English B2"),
    ("Sprachen", "Spanisch A1"),
    ("Wirtschaft", "Buchhaltung Grundlagen"),
    ("Wirtschaft", "Projektmanagement (PRINCE2)"),
    ("Kommunikation", "Rhetorik und Präsentation"),
    ("Kommunikation", "Konfliktmanagement im Team"),
    ("Gestaltung", "Fotografie für Fortgeschrittene"),
    ("Gestaltung", "Grafikdesign mit Affinity"),
    ("Gesundheit", "Erste Hilfe am Arbeitsplatz"),
]

_ROOMS: list[tuple[str, str, int]] = [
    ("Seminarraum 1", "Haus A", 16),
    ("Seminarraum 2", "Haus A", 20),
    ("EDV-Raum", "Haus B", 12),
    ("Atelier", "Haus C", 10),
    ("Großer Saal", "Haus C", 60),
]

_BASE_URL = "https://my.living-apps.de/rest"


def _record_url(app_id: str, record_id: str) -> str:
    return f"{_BASE_URL}/apps/{app_id}/records/{record_id}"


class FakeDataGenerator:
    """Generiert einen vollständigen RecordSnapshot.

    `today` legt fest, relativ zu welchem Tag Startdaten erzeugt werden,
    damit die Liste der bevorstehenden Kurse reproduzierbar ist.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        today: Optional[date] = None,
        app_ids: Optional[AppIds] = None,
    ) -> None:
        self.rng = random.Random(seed)
        self.today = today or date.today()
        self.app_ids = app_ids or AppIds()
        self._created = datetime.now(timezone.utc).replace(microsecond=0)

    def _new_id(self) -> str:
        return "".join(self.rng.choices(string.hexdigits.lower()[:16], k=24))

    def _person_name(self) -> str:
        return f"{self.rng.choice(_FIRST_NAMES)} {self.rng.choice(_LAST_NAMES)}"

    @staticmethod
    def _email(name: str) -> str:
        local = (
            name.lower()
            .replace("ä", "ae").replace("ö", "oe").replace("ü", "ue")
            .replace("ß", "ss").replace(" ", ".")
        )
        return f"{local}@example.org"

    def _phone(self) -> str:
        return f"+49 {self.rng.randint(30, 899)} {self.rng.randint(100000, 9999999)}"

    # ─── Öffentliche API ───

    def generate(self) -> RecordSnapshot:
        """Erzeugt Dozenten, Räume, Teilnehmer, Kurse und Anmeldungen."""
        instructors = self._generate_instructors()
        rooms = self._generate_rooms()
        participants = self._generate_participants(count=40)
        courses = self._generate_courses(instructors, rooms)
        enrollments = self._generate_enrollments(participants, courses)
        return RecordSnapshot(
            instructors=instructors,
            rooms=rooms,
            participants=participants,
            courses=courses,
            enrollments=enrollments,
            fetched_at=self._created,
        )

    # ─── Einzelne Sammlungen ───

    def _generate_instructors(self) -> list[Instructor]:
        areas = sorted({area for area, _ in _COURSE_CATALOG})
        instructors = []
        for area in areas:
            name = self._person_name()
            instructors.append(Instructor(
                record_id=self._new_id(),
                created_at=self._created,
                fields=InstructorFields(
                    name=name, email=self._email(name),
                    phone=self._phone(), subject_area=area,
                ),
            ))
        return instructors

    def _generate_rooms(self) -> list[Room]:
        return [
            Room(
                record_id=self._new_id(),
                created_at=self._created,
                fields=RoomFields(name=name, building=building, capacity=capacity),
            )
            for name, building, capacity in _ROOMS
        ]

    def _generate_participants(self, count: int) -> list[Participant]:
        participants = []
        for _ in range(count):
            name = self._person_name()
            birth = date(self.rng.randint(1960, 2004), self.rng.randint(1, 12),
                         self.rng.randint(1, 28))
            participants.append(Participant(
                record_id=self._new_id(),
                created_at=self._created,
                fields=ParticipantFields(
                    name=name, email=self._email(name),
                    phone=self._phone() if self.rng.random() < 0.7 else None,
                    birth_date=birth.isoformat(),
                ),
            ))
        return participants

    def _generate_courses(
        self, instructors: list[Instructor], rooms: list[Room]
    ) -> list[Course]:
        by_area = {i.fields.subject_area: i for i in instructors}
        # Startversatz in Tagen relativ zu heute und Status je Katalogeintrag
        plan: list[tuple[int, Optional[CourseStatus]]] = [
            (-60, CourseStatus.COMPLETED),
            (-20, CourseStatus.ACTIVE),
            (-3, CourseStatus.ACTIVE),
            (4, CourseStatus.PLANNED),
            (9, CourseStatus.ACTIVE),
            (12, CourseStatus.PLANNED),
            (17, CourseStatus.CANCELLED),
            (25, CourseStatus.PLANNED),
            (28, None),
            (45, CourseStatus.PLANNED),
            (90, CourseStatus.PLANNED),
            (-120, CourseStatus.COMPLETED),
        ]
        courses = []
        for (area, title), (offset, status) in zip(_COURSE_CATALOG, plan):
            start = self.today + timedelta(days=offset)
            end = start + timedelta(days=self.rng.choice([1, 2, 5, 10, 30]))
            price = None if self.rng.random() < 0.15 else float(
                self.rng.choice([89, 120, 149, 249, 390, 590, 1290])
            )
            room = self.rng.choice(rooms)
            courses.append(Course(
                record_id=self._new_id(),
                created_at=self._created,
                fields=CourseFields(
                    title=title,
                    description=f"{title} – Kurs im Bereich {area}.",
                    start_date=start.isoformat(),
                    end_date=end.isoformat(),
                    capacity=room.fields.capacity,
                    price=price,
                    instructor=_record_url(self.app_ids.instructors,
                                           by_area[area].record_id),
                    room=_record_url(self.app_ids.rooms, room.record_id),
                    status=status.value if status is not None else None,
                ),
            ))

        # Sonderfall: ungültiges Startdatum
        courses.append(Course(
            record_id=self._new_id(),
            created_at=self._created,
            fields=CourseFields(
                title="Sprechstunde (Termin folgt)",
                start_date="demnächst",
                status=CourseStatus.PLANNED.value,
            ),
        ))
        return courses

    def _generate_enrollments(
        self, participants: list[Participant], courses: list[Course]
    ) -> list[Enrollment]:
        enrollments = []
        bookable = [c for c in courses if c.fields.status != CourseStatus.CANCELLED.value]
        for participant in participants:
            for course in self.rng.sample(bookable, k=self.rng.randint(0, 3)):
                booked = self.today - timedelta(days=self.rng.randint(1, 60))
                enrollments.append(Enrollment(
                    record_id=self._new_id(),
                    created_at=self._created,
                    fields=EnrollmentFields(
                        participant=_record_url(self.app_ids.participants,
                                                participant.record_id),
                        course=_record_url(self.app_ids.courses, course.record_id),
                        enrollment_date=booked.isoformat(),
                        paid=self.rng.random() < 0.65,
                    ),
                ))

        # Sonderfall: Verweis auf gelöschten Kurs
        if participants:
            enrollments.append(Enrollment(
                record_id=self._new_id(),
                created_at=self._created,
                fields=EnrollmentFields(
                    participant=_record_url(self.app_ids.participants,
                                            participants[0].record_id),
                    course=_record_url(self.app_ids.courses, "000000000000000000000000"),
                    enrollment_date=self.today.isoformat(),
                ),
            ))
        return enrollments
