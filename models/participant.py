"""Datenmodell für eine Teilnehmerin / einen Teilnehmer (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from models.record import Record


class ParticipantFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = Field(None, alias="telefon")
    birth_date: Optional[str] = Field(None, alias="geburtsdatum")  # "YYYY-MM-DD" oder ISO


class Participant(Record):
    fields: ParticipantFields = Field(default_factory=ParticipantFields)
