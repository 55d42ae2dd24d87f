"""Async-Client für die Record-API der Kursverwaltung.

Liefert die fünf Datensammlungen jeweils vollständig (keine Paginierung).
Jeder Fehler – Netzwerk, HTTP-Status, kaputtes JSON, ungültige Records –
wird als RecordApiError gemeldet.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from config.schema import ApiConfig, AppIds
from models.course import Course
from models.enrollment import Enrollment
from models.instructor import Instructor
from models.participant import Participant
from models.record import Record
from models.room import Room

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)


class RecordApiError(Exception):
    """Abruf einer Datensammlung fehlgeschlagen."""


class RecordSource(Protocol):
    """Quelle der fünf Datensammlungen (API oder Snapshot-Datei)."""

    async def list_instructors(self) -> list[Instructor]: ...

    async def list_rooms(self) -> list[Room]: ...

    async def list_participants(self) -> list[Participant]: ...

    async def list_courses(self) -> list[Course]: ...

    async def list_enrollments(self) -> list[Enrollment]: ...


def _normalize_payload(payload: Any) -> list[dict]:
    """Bringt die API-Antwort in Listenform.

    Die API liefert entweder eine Liste von Records oder ein Objekt
    {record_id: record}; im zweiten Fall wird die ID in den Record übernommen.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        items = []
        for record_id, raw in payload.items():
            if not isinstance(raw, dict):
                raise RecordApiError(f"Record {record_id!r} ist kein JSON-Objekt")
            items.append({"record_id": record_id, **raw})
        return items
    raise RecordApiError(
        f"Unerwartetes Antwortformat: {type(payload).__name__}"
    )


class RecordApiClient:
    """Implementiert RecordSource über HTTP (httpx)."""

    def __init__(
        self,
        base_url: str,
        app_ids: AppIds,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.app_ids = app_ids
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: ApiConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "RecordApiClient":
        return cls(
            config.base_url,
            config.app_ids,
            timeout=config.timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "RecordApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ─── RecordSource ───

    async def list_instructors(self) -> list[Instructor]:
        return await self._list(self.app_ids.instructors, Instructor)

    async def list_rooms(self) -> list[Room]:
        return await self._list(self.app_ids.rooms, Room)

    async def list_participants(self) -> list[Participant]:
        return await self._list(self.app_ids.participants, Participant)

    async def list_courses(self) -> list[Course]:
        return await self._list(self.app_ids.courses, Course)

    async def list_enrollments(self) -> list[Enrollment]:
        return await self._list(self.app_ids.enrollments, Enrollment)

    # ─── Intern ───

    async def _list(self, app_id: str, model: type[R]) -> list[R]:
        path = f"/apps/{app_id}/records"
        logger.debug("GET %s%s", self.base_url, path)
        try:
            response = await self._client.get(path)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise RecordApiError(
                f"{model.__name__}: HTTP {e.response.status_code} für {path}"
            ) from e
        except httpx.HTTPError as e:
            raise RecordApiError(f"{model.__name__}: Verbindungsfehler ({e})") from e
        except ValueError as e:
            raise RecordApiError(f"{model.__name__}: Antwort ist kein gültiges JSON") from e

        records = records_from_payload(payload, model)
        logger.debug("%s: %d Records geladen", model.__name__, len(records))
        return records


def records_from_payload(payload: Any, model: type[R]) -> list[R]:
    """Validiert eine bereits geladene API-Antwort (Liste oder Objekt)."""
    try:
        return TypeAdapter(list[model]).validate_python(_normalize_payload(payload))
    except ValidationError as e:
        raise RecordApiError(
            f"{model.__name__}: {e.error_count()} ungültige Felder in der Antwort"
        ) from e
