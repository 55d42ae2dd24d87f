"""Datenmodell für einen Kurs (Pydantic v2)."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from models.record import Record, extract_record_id


class CourseStatus(str, Enum):
    PLANNED = "geplant"
    ACTIVE = "aktiv"
    COMPLETED = "abgeschlossen"
    CANCELLED = "abgesagt"


class CourseFields(BaseModel):
    """Nutzdaten eines Kurses. Alle Felder optional."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Optional[str] = Field(None, alias="titel")
    description: Optional[str] = Field(None, alias="beschreibung")
    start_date: Optional[str] = Field(None, alias="startdatum")  # "YYYY-MM-DD" oder ISO
    end_date: Optional[str] = Field(None, alias="enddatum")
    capacity: Optional[int] = Field(None, alias="max_teilnehmer")
    price: Optional[float] = Field(None, alias="preis")
    instructor: Optional[str] = Field(None, alias="dozent")  # Verweis auf Dozenten-Record
    room: Optional[str] = Field(None, alias="raum")          # Verweis auf Raum-Record
    # Roh-Wert; unbekannte Strings werden toleriert (siehe Course.known_status)
    status: Optional[str] = None


class Course(Record):
    """Ein Kurs der Akademie."""

    fields: CourseFields = Field(default_factory=CourseFields)

    @property
    def known_status(self) -> Optional[CourseStatus]:
        """Status als Enum oder None bei fehlendem/unbekanntem Wert."""
        try:
            return CourseStatus(self.fields.status)
        except ValueError:
            return None

    @property
    def instructor_id(self) -> Optional[str]:
        return extract_record_id(self.fields.instructor)

    @property
    def room_id(self) -> Optional[str]:
        return extract_record_id(self.fields.room)
