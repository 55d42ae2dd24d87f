"""Gemeinsame Formatierungs-Hilfsfunktionen (deutsche Darstellung)."""

from datetime import date, datetime
from typing import Optional, Union

from analysis.statistics import parse_record_date

# ─── Deutsche Kalendernamen ───────────────────────────────────────────────────

WEEKDAY_NAMES_DE: list[str] = [
    "Montag", "Dienstag", "Mittwoch", "Donnerstag",
    "Freitag", "Samstag", "Sonntag",
]

MONTH_NAMES_DE: list[str] = [
    "Januar", "Februar", "März", "April", "Mai", "Juni",
    "Juli", "August", "September", "Oktober", "November", "Dezember",
]


# ─── Datum ────────────────────────────────────────────────────────────────────

def format_long_date_de(day: Union[date, datetime]) -> str:
    """Kopfzeilen-Datum, z.B. "Montag, 19. Oktober 2026"."""
    return (
        f"{WEEKDAY_NAMES_DE[day.weekday()]}, "
        f"{day.day:02d}. {MONTH_NAMES_DE[day.month - 1]} {day.year}"
    )


def format_full_date_de(value: Optional[str]) -> str:
    """Roh-Datum → "05. November 2026"; fehlend oder ungültig → "—"."""
    parsed = parse_record_date(value)
    if parsed is None:
        return "—"
    return f"{parsed.day:02d}. {MONTH_NAMES_DE[parsed.month - 1]} {parsed.year}"


def format_day_badge(value: Optional[str]) -> str:
    """Tag im Monat als zweistellige Zahl; "?" ohne gültiges Datum."""
    parsed = parse_record_date(value)
    if parsed is None:
        return "?"
    return f"{parsed.day:02d}"


# ─── Zahlen ───────────────────────────────────────────────────────────────────

def format_number_de(value: float, max_decimals: int = 3) -> str:
    """Zahl mit Tausenderpunkt und Dezimalkomma, ohne überflüssige Nullen.

    1234.5 → "1.234,5", 120 → "120".
    """
    text = f"{value:,.{max_decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text.replace(",", "\x00").replace(".", ",").replace("\x00", ".")


def format_currency_de(value: Optional[float], symbol: str = "€") -> str:
    """Betrag mit Währungssymbol, z.B. "1.234,5 €". Fehlend zählt als 0."""
    return f"{format_number_de(value or 0)} {symbol}"
