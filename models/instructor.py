"""Datenmodell für eine Dozentin / einen Dozenten (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from models.record import Record


class InstructorFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = Field(None, alias="telefon")
    subject_area: Optional[str] = Field(None, alias="fachgebiet")


class Instructor(Record):
    """Repräsentiert eine Lehrkraft der Akademie."""

    fields: InstructorFields = Field(default_factory=InstructorFields)
