from config.schema import (
    ApiConfig,
    DashboardConfig,
    DisplayConfig,
    LoggingConfig,
)
from models.course import CourseStatus


# ─── Kurs-Status ──────────────────────────────────────────────────────────────

# Feste Anzeigereihenfolge im Status-Diagramm
STATUS_ORDER: tuple[CourseStatus, ...] = (
    CourseStatus.PLANNED,
    CourseStatus.ACTIVE,
    CourseStatus.COMPLETED,
    CourseStatus.CANCELLED,
)

STATUS_LABELS: dict[CourseStatus, str] = {
    CourseStatus.PLANNED: "Geplant",
    CourseStatus.ACTIVE: "Aktiv",
    CourseStatus.COMPLETED: "Abgeschlossen",
    CourseStatus.CANCELLED: "Abgesagt",
}

STATUS_COLORS: dict[CourseStatus, str] = {
    CourseStatus.PLANNED: "#7c3aed",
    CourseStatus.ACTIVE: "#059669",
    CourseStatus.COMPLETED: "#b45309",
    CourseStatus.CANCELLED: "#dc2626",
}

# Badge-Farbe für Kurse ohne (bekannten) Status
FALLBACK_COLOR = "#4338ca"


# ─── Kennzahl-Karten ──────────────────────────────────────────────────────────

CARD_COLORS: dict[str, str] = {
    "instructors": "#4f46e5",
    "participants": "#0891b2",
    "rooms": "#16a34a",
    "revenue": "#d97706",
}


def default_dashboard_config() -> DashboardConfig:
    """Standard-Konfiguration: Living-Apps-REST-API, 30-Tage-Fenster, 5 Kurse."""
    return DashboardConfig(
        api=ApiConfig(),
        display=DisplayConfig(),
        logging=LoggingConfig(),
    )
