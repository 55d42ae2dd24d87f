"""Tests für den Record-API-Client (httpx mit MockTransport)."""

from datetime import datetime

import httpx
import pytest

from analysis.dashboard_flow import DashboardController, DashboardPhase
from config.schema import ApiConfig, AppIds
from data.record_api import RecordApiClient, RecordApiError, records_from_payload
from models.course import Course
from models.instructor import Instructor


BASE_URL = "https://records.example.org/rest"
IDS = AppIds()
NOW = datetime(2026, 10, 19, 12, 0, 0)


def _record(record_id: str, fields: dict) -> dict:
    return {
        "record_id": record_id,
        "createdat": "2026-09-01T08:00:00",
        "updatedat": "2026-09-02T10:15:00",
        "fields": fields,
    }


_COLLECTIONS = {
    IDS.instructors: [_record("d1", {"name": "Eva Weber", "fachgebiet": "Informatik"})],
    IDS.rooms: [_record("r1", {"raumname": "EDV-Raum", "gebaeude": "Haus B",
                               "kapazitaet": 12})],
    IDS.participants: [_record("t1", {"name": "Lena Koch"}),
                       _record("t2", {"name": "Olga Braun"})],
    IDS.courses: [
        _record("k1", {
            "titel": "Python für Einsteiger", "status": "aktiv", "preis": 120,
            "startdatum": "2026-10-29",
            "dozent": f"{BASE_URL}/apps/{IDS.instructors}/records/d1",
            "raum": f"{BASE_URL}/apps/{IDS.rooms}/records/r1",
        }),
        _record("k2", {"titel": "Spanisch A1", "status": "geplant"}),
    ],
    IDS.enrollments: [
        _record("a1", {"teilnehmer": "t1", "kurs": "k1", "bezahlt": True}),
        _record("a2", {"teilnehmer": "t2", "kurs": "k1"}),
    ],
}


def _serve(collections: dict, overrides: dict = None):
    """Handler für MockTransport: App-ID → Liste von Records (oder Response)."""
    overrides = overrides or {}
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        app_id = request.url.path.split("/")[-2]
        if app_id in overrides:
            override = overrides[app_id]
            return override(request) if callable(override) else override
        return httpx.Response(200, json=collections.get(app_id, []))

    return handler, seen


def _client(handler) -> RecordApiClient:
    return RecordApiClient(BASE_URL, IDS, transport=httpx.MockTransport(handler))


# ─── Abruf einzelner Sammlungen ───────────────────────────────────────────────

class TestListCollections:
    @pytest.mark.asyncio
    async def test_list_payload_parsed_with_wire_aliases(self):
        handler, seen = _serve(_COLLECTIONS)
        async with _client(handler) as client:
            courses = await client.list_courses()

        assert [c.record_id for c in courses] == ["k1", "k2"]
        first = courses[0]
        assert first.fields.title == "Python für Einsteiger"
        assert first.fields.price == 120
        assert first.instructor_id == "d1"
        assert first.room_id == "r1"
        assert seen == [f"/rest/apps/{IDS.courses}/records"]

    @pytest.mark.asyncio
    async def test_each_collection_uses_its_app_id(self):
        handler, seen = _serve(_COLLECTIONS)
        async with _client(handler) as client:
            await client.list_instructors()
            await client.list_rooms()
            await client.list_participants()
            await client.list_enrollments()
        assert [p.split("/")[-2] for p in seen] == [
            IDS.instructors, IDS.rooms, IDS.participants, IDS.enrollments,
        ]

    @pytest.mark.asyncio
    async def test_dict_payload_keyed_by_record_id(self):
        """Antwort als Objekt {id: record}: die ID wird übernommen."""
        payload = {
            "d7": {"createdat": "2026-09-01T08:00:00", "fields": {"name": "Iris Lange"}},
            "d8": {"createdat": "2026-09-01T08:00:00", "fields": {}},
        }
        handler, _ = _serve({}, {IDS.instructors: httpx.Response(200, json=payload)})
        async with _client(handler) as client:
            instructors = await client.list_instructors()
        assert {i.record_id for i in instructors} == {"d7", "d8"}
        assert next(i for i in instructors if i.record_id == "d7").fields.name == "Iris Lange"

    @pytest.mark.asyncio
    async def test_empty_collection(self):
        handler, _ = _serve({})
        async with _client(handler) as client:
            assert await client.list_rooms() == []

    @pytest.mark.asyncio
    async def test_from_config(self):
        handler, seen = _serve(_COLLECTIONS)
        config = ApiConfig(base_url="https://other.example.org/api/", app_ids=IDS)
        client = RecordApiClient.from_config(config, transport=httpx.MockTransport(handler))
        async with client:
            await client.list_rooms()
        assert client.base_url == "https://other.example.org/api"
        assert seen == [f"/api/apps/{IDS.rooms}/records"]


# ─── Fehlerfälle ──────────────────────────────────────────────────────────────

class TestErrors:
    @pytest.mark.asyncio
    async def test_http_error_status(self):
        handler, _ = _serve({}, {IDS.courses: httpx.Response(500, text="Internal")})
        async with _client(handler) as client:
            with pytest.raises(RecordApiError, match="HTTP 500"):
                await client.list_courses()

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Verbindung abgelehnt", request=request)

        handler, _ = _serve({}, {IDS.rooms: refuse})
        async with _client(handler) as client:
            with pytest.raises(RecordApiError, match="Verbindungsfehler"):
                await client.list_rooms()

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        broken = httpx.Response(200, content=b"<html>Wartung</html>",
                                headers={"Content-Type": "application/json"})
        handler, _ = _serve({}, {IDS.participants: broken})
        async with _client(handler) as client:
            with pytest.raises(RecordApiError, match="kein gültiges JSON"):
                await client.list_participants()

    @pytest.mark.asyncio
    async def test_invalid_record_fields(self):
        bad = [_record("k9", {"titel": "Teuer", "preis": "sehr teuer"})]
        handler, _ = _serve({IDS.courses: bad})
        async with _client(handler) as client:
            with pytest.raises(RecordApiError, match="ungültige Felder"):
                await client.list_courses()

    def test_unexpected_payload_type(self):
        with pytest.raises(RecordApiError, match="Antwortformat"):
            records_from_payload("records", Course)

    def test_dict_entry_not_an_object(self):
        with pytest.raises(RecordApiError):
            records_from_payload({"d1": ["kein", "objekt"]}, Instructor)


# ─── Zusammenspiel mit dem Dashboard ──────────────────────────────────────────

class TestDashboardOverHttp:
    @pytest.mark.asyncio
    async def test_ready_with_worked_values(self):
        handler, _ = _serve(_COLLECTIONS)
        client = _client(handler)
        ctrl = DashboardController(client, now=lambda: NOW)
        async with client:
            await ctrl.activate()

        stats = ctrl.view.statistics
        assert ctrl.view.phase == DashboardPhase.READY
        assert stats.instructor_count == 1
        assert stats.room_count == 1
        assert stats.participant_count == 2
        assert stats.course_count == 2
        assert stats.active_course_count == 1
        assert stats.revenue_total == 120
        assert stats.paid_enrollment_count == 1
        assert [c.record_id for c in stats.upcoming_courses] == ["k1"]

    @pytest.mark.asyncio
    async def test_one_failing_endpoint_gives_failed(self):
        handler, _ = _serve(_COLLECTIONS, {IDS.enrollments: httpx.Response(503)})
        client = _client(handler)
        ctrl = DashboardController(client, now=lambda: NOW)
        async with client:
            await ctrl.activate()
        assert ctrl.view.phase == DashboardPhase.FAILED
        assert ctrl.view.statistics.course_count == 0
        assert "HTTP 503" in ctrl.view.error

