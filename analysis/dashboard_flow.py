"""Abruf und Aggregation als expliziter Zustandsautomat.

    idle → loading → ready | failed

Jede Aktivierung startet neu bei `loading`, ruft die fünf Datensammlungen
parallel ab und berechnet die Kennzahlen. Ein fehlgeschlagener Abruf wird
protokolliert und endet in `failed` mit Null-Kennzahlen; die Anzeige
rendert dann das vollständige Layout mit leeren Werten.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from analysis.statistics import (
    DEFAULT_UPCOMING_DAYS,
    DEFAULT_UPCOMING_LIMIT,
    Statistics,
    aggregate,
    empty_statistics,
)
from data.record_api import RecordSource
from models.snapshot import RecordSnapshot

logger = logging.getLogger(__name__)


class DashboardPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class DashboardView:
    """Aktueller Anzeigezustand."""

    phase: DashboardPhase = DashboardPhase.IDLE
    statistics: Optional[Statistics] = None
    # Rohdaten für Detailansichten (Kursliste, Anmeldungen)
    snapshot: Optional[RecordSnapshot] = None
    # Nur für die Diagnose; wird nicht angezeigt
    error: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.phase in (DashboardPhase.IDLE, DashboardPhase.LOADING)


Listener = Callable[[DashboardView], None]


class DashboardController:
    """Steuert einen Dashboard-Abruf und benachrichtigt Beobachter."""

    def __init__(
        self,
        source: RecordSource,
        now: Optional[Callable[[], datetime]] = None,
        upcoming_days: int = DEFAULT_UPCOMING_DAYS,
        upcoming_limit: int = DEFAULT_UPCOMING_LIMIT,
    ) -> None:
        self.source = source
        self._now = now or datetime.now
        self.upcoming_days = upcoming_days
        self.upcoming_limit = upcoming_limit
        self._view = DashboardView()
        self._listeners: list[Listener] = []

    @property
    def view(self) -> DashboardView:
        return self._view

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Registriert einen Beobachter; gibt eine Abmelde-Funktion zurück."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _transition(self, view: DashboardView) -> None:
        logger.debug("Dashboard: %s → %s", self._view.phase.value, view.phase.value)
        self._view = view
        for listener in list(self._listeners):
            listener(view)

    # ─── Aktivierung ───

    async def activate(self) -> None:
        """Lädt alle Daten neu. Wirft nie; Fehler führen zu `failed`."""
        self._transition(DashboardView(phase=DashboardPhase.LOADING))
        logger.info("Dashboard-Abruf gestartet")

        try:
            snapshot = await self._fetch_all()
            statistics = aggregate(
                snapshot.instructors,
                snapshot.rooms,
                snapshot.participants,
                snapshot.courses,
                snapshot.enrollments,
                now=self._now(),
                upcoming_days=self.upcoming_days,
                upcoming_limit=self.upcoming_limit,
            )
        except Exception as e:
            logger.exception("Dashboard-Abruf fehlgeschlagen: %s", e)
            self._transition(DashboardView(
                phase=DashboardPhase.FAILED,
                statistics=empty_statistics(),
                snapshot=RecordSnapshot(),
                error=str(e) or type(e).__name__,
            ))
            return

        logger.debug(
            "Kennzahlen: %d Kurse, %d Anmeldungen, %d bevorstehend",
            statistics.course_count,
            statistics.enrollment_count,
            len(statistics.upcoming_courses),
        )
        self._transition(DashboardView(
            phase=DashboardPhase.READY,
            statistics=statistics,
            snapshot=snapshot,
        ))

    async def _fetch_all(self) -> RecordSnapshot:
        # gather bricht beim ersten Fehler ab; laufende Abrufe werden nicht storniert
        instructors, rooms, participants, courses, enrollments = await asyncio.gather(
            self.source.list_instructors(),
            self.source.list_rooms(),
            self.source.list_participants(),
            self.source.list_courses(),
            self.source.list_enrollments(),
        )
        return RecordSnapshot(
            instructors=instructors,
            rooms=rooms,
            participants=participants,
            courses=courses,
            enrollments=enrollments,
            fetched_at=datetime.now(timezone.utc),
        )
