"""Datenmodell für einen Raum (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from models.record import Record


class RoomFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = Field(None, alias="raumname")     # "Seminarraum 2"
    building: Optional[str] = Field(None, alias="gebaeude")  # "Haus A"
    capacity: Optional[int] = Field(None, alias="kapazitaet")


class Room(Record):
    """Repräsentiert einen Schulungsraum."""

    fields: RoomFields = Field(default_factory=RoomFields)
