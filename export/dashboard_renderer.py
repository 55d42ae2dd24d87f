"""Terminal-Darstellung des Dashboards (Rich).

Reine Funktionen: Anzeigezustand → Rich-Renderable. Wird von
`main.py dashboard` (Live-Anzeige), `stats` und `courses` verwendet.
"""

from datetime import date
from typing import Optional, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from analysis.dashboard_flow import DashboardView
from analysis.statistics import Statistics, StatusBucket, empty_statistics
from config.defaults import CARD_COLORS, FALLBACK_COLOR, STATUS_COLORS, STATUS_LABELS
from config.schema import DisplayConfig
from export.helpers import (
    format_currency_de,
    format_day_badge,
    format_full_date_de,
    format_long_date_de,
)
from models.course import Course
from models.snapshot import RecordSnapshot

LOADING_TEXT = "Daten werden geladen…"
EMPTY_CHART_TEXT = "Noch keine Kurse vorhanden"
UNTITLED_COURSE = "Unbenannter Kurs"
HEADER_COLOR = "#4338ca"

# Maximale Balkenlänge im Status-Diagramm (Zeichen)
_BAR_WIDTH = 28


def render_dashboard(
    view: DashboardView,
    today: Optional[date] = None,
    display: Optional[DisplayConfig] = None,
) -> RenderableType:
    """Gesamtes Dashboard für den aktuellen Zustand.

    Während des Ladens nur ein Spinner. Danach (auch nach einem
    fehlgeschlagenen Abruf) immer das vollständige Layout.
    """
    if view.is_loading:
        return Spinner("dots", text=Text(LOADING_TEXT, style="dim"))

    display = display or DisplayConfig()
    today = today or date.today()
    stats = view.statistics or empty_statistics()

    bottom = Table.grid(expand=True, padding=(0, 1))
    bottom.add_column(ratio=2)
    bottom.add_column(ratio=3)
    bottom.add_row(
        Panel(render_status_chart(stats.status_histogram),
              title="Kurse nach Status", title_align="left", box=box.ROUNDED),
        Panel(render_upcoming_list(stats.upcoming_courses, display),
              title=f"Bevorstehende Kurse ({display.upcoming_days} Tage)",
              title_align="left", box=box.ROUNDED),
    )

    return Group(
        render_header(stats, today, display),
        render_secondary_cards(stats, display),
        bottom,
    )


# ─── Kopfbereich ──────────────────────────────────────────────────────────────

def _metric(value: str, label: str, value_style: str = "bold") -> Text:
    text = Text(value, style=value_style)
    text.append(f"\n{label}", style="dim")
    return text


def render_header(stats: Statistics, today: date, display: DisplayConfig) -> Panel:
    """Banner mit Datum und den vier Haupt-Kennzahlen."""
    kpis = Table.grid(expand=True, padding=(0, 2))
    for _ in range(4):
        kpis.add_column(ratio=1)
    kpis.add_row(
        _metric(str(stats.active_course_count), "Aktive Kurse"),
        _metric(str(stats.enrollment_count), "Anmeldungen"),
        _metric(str(stats.paid_enrollment_count), "Bezahlt"),
        _metric(str(stats.course_count), "Kurse gesamt"),
    )
    return Panel(
        Group(
            Text(display.subtitle.upper(), style="dim bold"),
            Text(display.title, style="bold"),
            Text(format_long_date_de(today)),
            Text(""),
            kpis,
        ),
        border_style=HEADER_COLOR,
        box=box.HEAVY,
        padding=(1, 2),
    )


def render_secondary_cards(stats: Statistics, display: DisplayConfig) -> Table:
    """Zweite Kennzahl-Reihe: Dozenten, Teilnehmer, Räume, Gesamtpreis."""
    cards = [
        ("Dozenten", str(stats.instructor_count), CARD_COLORS["instructors"]),
        ("Teilnehmer", str(stats.participant_count), CARD_COLORS["participants"]),
        ("Räume", str(stats.room_count), CARD_COLORS["rooms"]),
        ("Gesamtpreis",
         format_currency_de(stats.revenue_total, display.currency_symbol),
         CARD_COLORS["revenue"]),
    ]
    row = Table.grid(expand=True, padding=(0, 1))
    for _ in cards:
        row.add_column(ratio=1)
    row.add_row(*[
        Panel(_metric(value, title, value_style=f"bold {color}"),
              border_style=color, box=box.ROUNDED)
        for title, value, color in cards
    ])
    return row


# ─── Status-Diagramm ──────────────────────────────────────────────────────────

def render_status_chart(buckets: Sequence[StatusBucket]) -> RenderableType:
    """Horizontales Balkendiagramm; Leertext wenn alle Anzahlen 0 sind."""
    if all(b.count == 0 for b in buckets):
        return Text(EMPTY_CHART_TEXT, style="dim", justify="center")

    peak = max(b.count for b in buckets)
    chart = Table.grid(padding=(0, 1))
    chart.add_column(no_wrap=True)
    chart.add_column(no_wrap=True)
    chart.add_column(justify="right")
    for b in buckets:
        width = round(b.count / peak * _BAR_WIDTH)
        if b.count > 0:
            width = max(width, 1)
        chart.add_row(
            Text(b.label, style="dim"),
            Text("█" * width, style=b.color),
            Text(str(b.count), style="bold"),
        )
    return chart


# ─── Bevorstehende Kurse ──────────────────────────────────────────────────────

def status_color(course: Course) -> str:
    """Badge-Farbe nach Kursstatus; Ersatzfarbe bei fehlendem/unbekanntem Status."""
    status = course.known_status
    return STATUS_COLORS[status] if status is not None else FALLBACK_COLOR


def render_upcoming_list(
    courses: Sequence[Course], display: Optional[DisplayConfig] = None,
) -> RenderableType:
    """Liste: Tages-Badge, Titel, Datum und (falls vorhanden) Preis."""
    display = display or DisplayConfig()
    if not courses:
        return Text(
            f"Keine Kurse in den nächsten {display.upcoming_days} Tagen",
            style="dim", justify="center",
        )

    table = Table(box=None, show_header=False, expand=True, padding=(0, 1))
    table.add_column(width=4, no_wrap=True)
    table.add_column(ratio=1)
    table.add_column(justify="right", no_wrap=True)
    for course in courses:
        badge = Text(
            f" {format_day_badge(course.fields.start_date)} ",
            style=f"bold white on {status_color(course)}",
        )
        title = Text(course.fields.title or UNTITLED_COURSE, style="bold")
        title.append(f"\n{format_full_date_de(course.fields.start_date)}", style="dim")
        price = (
            Text(format_currency_de(course.fields.price, display.currency_symbol),
                 style=f"bold {HEADER_COLOR}")
            if course.fields.price is not None
            else Text("")
        )
        table.add_row(badge, title, price)
    return table


# ─── Detailansichten ──────────────────────────────────────────────────────────

def render_statistics_table(stats: Statistics, display: Optional[DisplayConfig] = None) -> Table:
    """Alle Kennzahlen als schlichte Tabelle (Befehl `stats`)."""
    display = display or DisplayConfig()
    table = Table(title="Kennzahlen", box=box.ROUNDED)
    table.add_column("Kennzahl", style="bold")
    table.add_column("Wert", justify="right")
    rows = [
        ("Dozenten", str(stats.instructor_count)),
        ("Räume", str(stats.room_count)),
        ("Teilnehmer", str(stats.participant_count)),
        ("Kurse gesamt", str(stats.course_count)),
        ("Aktive Kurse", str(stats.active_course_count)),
        ("Anmeldungen", str(stats.enrollment_count)),
        ("Bezahlt", str(stats.paid_enrollment_count)),
        ("Gesamtpreis", format_currency_de(stats.revenue_total, display.currency_symbol)),
    ]
    for label, value in rows:
        table.add_row(label, value)
    for b in stats.status_histogram:
        table.add_row(Text(f"Status: {b.label}", style=b.color), str(b.count))
    return table


def render_course_table(
    courses: Sequence[Course],
    snapshot: RecordSnapshot,
    display: Optional[DisplayConfig] = None,
) -> Table:
    """Kursliste mit aufgelösten Dozenten/Räumen (Befehl `courses`).

    Verweise ohne passenden Record werden als "—" angezeigt.
    """
    display = display or DisplayConfig()
    table = Table(title=f"Kurse ({len(courses)})", box=box.ROUNDED)
    table.add_column("Titel", style="bold")
    table.add_column("Status")
    table.add_column("Beginn")
    table.add_column("Preis", justify="right")
    table.add_column("Dozent")
    table.add_column("Raum")
    table.add_column("Anm.", justify="right")

    for course in courses:
        status = course.known_status
        status_text = (
            Text(STATUS_LABELS[status], style=STATUS_COLORS[status])
            if status is not None
            else Text(course.fields.status or "—", style="dim")
        )
        instructor = snapshot.instructor_by_ref(course.fields.instructor)
        room = snapshot.room_by_ref(course.fields.room)
        enrollments = snapshot.enrollments_for(course)
        paid = sum(1 for e in enrollments if e.is_paid)
        table.add_row(
            course.fields.title or UNTITLED_COURSE,
            status_text,
            format_full_date_de(course.fields.start_date),
            (format_currency_de(course.fields.price, display.currency_symbol)
             if course.fields.price is not None else "—"),
            (instructor.fields.name if instructor and instructor.fields.name else "—"),
            (room.fields.name if room and room.fields.name else "—"),
            f"{paid}/{len(enrollments)}",
        )
    return table
