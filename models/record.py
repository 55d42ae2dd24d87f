"""Gemeinsame Record-Hülle aller Datensammlungen (Pydantic v2)."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def extract_record_id(ref: Optional[str]) -> Optional[str]:
    """Liefert die Record-ID aus einem Verweis.

    Die API liefert Verweise als URL (".../records/<id>"); eine bereits
    nackte ID wird unverändert zurückgegeben.
    """
    if ref is None:
        return None
    ref = ref.strip().rstrip("/")
    if not ref:
        return None
    return ref.rsplit("/", 1)[-1]


class Record(BaseModel):
    """Record-Hülle: ID, Zeitstempel und Nutzdaten (`fields`).

    Unterklassen setzen `fields` auf ihr jeweiliges Payload-Modell.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    record_id: str
    created_at: datetime = Field(alias="createdat")
    updated_at: Optional[datetime] = Field(None, alias="updatedat")
