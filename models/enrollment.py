"""Datenmodell für eine Kursanmeldung (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from models.record import Record, extract_record_id


class EnrollmentFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    participant: Optional[str] = Field(None, alias="teilnehmer")  # Verweis auf Teilnehmer-Record
    course: Optional[str] = Field(None, alias="kurs")              # Verweis auf Kurs-Record
    enrollment_date: Optional[str] = Field(None, alias="anmeldedatum")
    paid: Optional[bool] = Field(None, alias="bezahlt")


class Enrollment(Record):
    """Anmeldung einer Teilnehmerin / eines Teilnehmers zu einem Kurs."""

    fields: EnrollmentFields = Field(default_factory=EnrollmentFields)

    @property
    def is_paid(self) -> bool:
        """Fehlendes Flag zählt als nicht bezahlt."""
        return bool(self.fields.paid)

    @property
    def course_id(self) -> Optional[str]:
        return extract_record_id(self.fields.course)

    @property
    def participant_id(self) -> Optional[str]:
        return extract_record_id(self.fields.participant)
