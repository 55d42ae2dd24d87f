"""Datenquelle aus einer gespeicherten Snapshot-Datei (Offline-/Demo-Betrieb).

Gleiche Schnittstelle wie RecordApiClient. Die Datei wird beim ersten
Zugriff gelesen; Fehler werden als RecordApiError gemeldet, damit die
Dashboard-Logik sie wie einen fehlgeschlagenen API-Abruf behandelt.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from data.record_api import RecordApiError
from models.course import Course
from models.enrollment import Enrollment
from models.instructor import Instructor
from models.participant import Participant
from models.room import Room
from models.snapshot import RecordSnapshot

logger = logging.getLogger(__name__)


class SnapshotSource:
    """Liefert die fünf Datensammlungen aus einer RecordSnapshot-JSON-Datei."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._snapshot: Optional[RecordSnapshot] = None

    def _load(self) -> RecordSnapshot:
        if self._snapshot is None:
            logger.debug("Lade Snapshot %s", self.path)
            try:
                self._snapshot = RecordSnapshot.load_json(self.path)
            except FileNotFoundError as e:
                raise RecordApiError(str(e)) from e
            except ValidationError as e:
                raise RecordApiError(
                    f"Snapshot ungültig: {self.path} ({e.error_count()} Fehler)"
                ) from e
        return self._snapshot

    async def list_instructors(self) -> list[Instructor]:
        return list(self._load().instructors)

    async def list_rooms(self) -> list[Room]:
        return list(self._load().rooms)

    async def list_participants(self) -> list[Participant]:
        return list(self._load().participants)

    async def list_courses(self) -> list[Course]:
        return list(self._load().courses)

    async def list_enrollments(self) -> list[Enrollment]:
        return list(self._load().enrollments)

    async def __aenter__(self) -> "SnapshotSource":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self._snapshot = None
