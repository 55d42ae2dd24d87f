"""RecordSnapshot: die fünf Datensammlungen eines Abrufs (Pydantic v2)."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from models.course import Course
from models.enrollment import Enrollment
from models.instructor import Instructor
from models.participant import Participant
from models.record import extract_record_id
from models.room import Room


class RecordSnapshot(BaseModel):
    """Vollständiger Datenstand: Dozenten, Räume, Teilnehmer, Kurse, Anmeldungen."""

    instructors: list[Instructor] = []
    rooms: list[Room] = []
    participants: list[Participant] = []
    courses: list[Course] = []
    enrollments: list[Enrollment] = []
    fetched_at: Optional[datetime] = None

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über den Datenstand."""
        lines = [
            f"Dozenten: {len(self.instructors)}",
            f"Räume: {len(self.rooms)}",
            f"Teilnehmer: {len(self.participants)}",
            f"Kurse: {len(self.courses)}",
            f"Anmeldungen: {len(self.enrollments)}",
        ]
        if self.fetched_at:
            lines.append(f"Stand: {self.fetched_at.isoformat(timespec='seconds')}")
        return "\n".join(lines)

    # ─── Verweise auflösen ───
    # Verweise sind nicht referenziell gesichert; unbekannte IDs → None.

    def instructor_by_ref(self, ref: Optional[str]) -> Optional[Instructor]:
        rid = extract_record_id(ref)
        return next((i for i in self.instructors if i.record_id == rid), None)

    def room_by_ref(self, ref: Optional[str]) -> Optional[Room]:
        rid = extract_record_id(ref)
        return next((r for r in self.rooms if r.record_id == rid), None)

    def enrollments_for(self, course: Course) -> list[Enrollment]:
        """Alle Anmeldungen, die auf den Kurs verweisen."""
        return [e for e in self.enrollments if e.course_id == course.record_id]

    # ─── Persistenz ────────────────────────────────────────────────────────

    def save_json(self, path: Path) -> None:
        """Speichert den Datenstand im Wire-Format der API als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        updated = self.model_copy(update={
            "fetched_at": self.fetched_at or datetime.now(timezone.utc),
        })
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated.model_dump_json(indent=2, by_alias=True))

    @classmethod
    def load_json(cls, path: Path) -> "RecordSnapshot":
        """Lädt einen Datenstand aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
