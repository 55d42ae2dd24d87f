from pydantic import BaseModel, Field, field_validator
from enum import Enum


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# ─── RECORD-API ───

class AppIds(BaseModel):
    """App-IDs der fünf Datensammlungen in der Record-API."""
    # Dozentinnen und Dozenten
    instructors: str = Field("6998224470dbd3952fcd54d2",
        description="App-ID Dozenten")
    # Räume
    rooms: str = Field("69982244c26c8d5a9cf6bed7",
        description="App-ID Räume")
    # Teilnehmerinnen und Teilnehmer
    participants: str = Field("699822451e2925a4b5c3df85",
        description="App-ID Teilnehmer")
    # Kurse
    courses: str = Field("699822456da160a377a4b00f",
        description="App-ID Kurse")
    # Anmeldungen
    enrollments: str = Field("69982245e6038e5a395ee98c",
        description="App-ID Anmeldungen")

    @field_validator("*")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("App-ID darf nicht leer sein")
        return v


class ApiConfig(BaseModel):
    """Verbindung zur Record-API."""
    # Basis-URL ohne abschließenden Schrägstrich
    base_url: str = Field("https://my.living-apps.de/rest",
        description="Basis-URL der Record-API")
    # Zeitlimit pro Anfrage in Sekunden
    timeout_seconds: float = Field(15.0, ge=1, le=300,
        description="Zeitlimit pro Anfrage (Sekunden)")
    app_ids: AppIds = Field(default_factory=AppIds)

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Basis-URL muss mit http:// oder https:// beginnen: {v!r}")
        return v


# ─── ANZEIGE ───

class DisplayConfig(BaseModel):
    """Texte und Zeitfenster der Dashboard-Anzeige."""
    # Überschrift im Kopfbereich
    title: str = Field("Akademie-Übersicht")
    # Kleine Zeile über der Überschrift
    subtitle: str = Field("Kursverwaltung")
    # Währungssymbol hinter Preisen
    currency_symbol: str = Field("€")
    # Zeitfenster für "Bevorstehende Kurse" in Tagen
    upcoming_days: int = Field(30, ge=1, le=365,
        description="Zeitfenster bevorstehender Kurse (Tage)")
    # Maximale Anzahl angezeigter bevorstehender Kurse
    upcoming_limit: int = Field(5, ge=1, le=50,
        description="Max. Anzahl bevorstehender Kurse")


# ─── LOGGING ───

class LoggingConfig(BaseModel):
    """Log-Ausgabe auf der Konsole."""
    level: LogLevel = Field(LogLevel.WARNING)


# ─── GESAMT-CONFIG ───

class DashboardConfig(BaseModel):
    """Gesamtkonfiguration des Dashboards."""
    api: ApiConfig = Field(default_factory=ApiConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
