"""Interaktiver Setup-Wizard für die Ersteinrichtung des Dashboards.

Führt den Nutzer Schritt für Schritt durch alle Konfigurationsbereiche.
Nutzt rich für schöne Konsolenausgabe.
"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from rich.table import Table
from rich import box

from config.schema import (
    ApiConfig,
    AppIds,
    DashboardConfig,
    DisplayConfig,
    LoggingConfig,
    LogLevel,
)
from config.defaults import default_dashboard_config

console = Console()


def _header(title: str) -> None:
    console.print()
    console.print(Panel(f"[bold cyan]{title}[/bold cyan]", expand=False))


def _info(text: str) -> None:
    console.print(f"[dim]{text}[/dim]")


def _success(text: str) -> None:
    console.print(f"[green]✓[/green] {text}")


def show_config_table(config: DashboardConfig) -> None:
    """Zeigt die Konfiguration als rich-Tabelle an."""
    table = Table(title="Dashboard-Konfiguration", box=box.ROUNDED)
    table.add_column("Bereich", style="bold")
    table.add_column("Parameter")
    table.add_column("Wert")

    table.add_row("API", "Basis-URL", config.api.base_url)
    table.add_row("", "Zeitlimit", f"{config.api.timeout_seconds:g} s")
    for key, value in config.api.app_ids.model_dump().items():
        table.add_row("", f"App-ID {key}", value)
    table.add_row("Anzeige", "Überschrift", config.display.title)
    table.add_row("", "Unterzeile", config.display.subtitle)
    table.add_row("", "Währung", config.display.currency_symbol)
    table.add_row("", "Zeitfenster", f"{config.display.upcoming_days} Tage")
    table.add_row("", "Max. Kurse", str(config.display.upcoming_limit))
    table.add_row("Logging", "Level", config.logging.level.value)
    console.print(table)


# ─── SCHRITT 1: Record-API ───

def _wizard_api() -> ApiConfig:
    _header("Schritt 1 — Record-API")
    _info("Adresse der Record-API und App-IDs der fünf Datensammlungen.")
    defaults = ApiConfig()

    base_url = Prompt.ask("Basis-URL", default=defaults.base_url)
    timeout = FloatPrompt.ask("Zeitlimit pro Anfrage (Sekunden)",
                              default=defaults.timeout_seconds)

    app_ids = defaults.app_ids
    if Confirm.ask("Eigene App-IDs eintragen?", default=False):
        app_ids = AppIds(
            instructors=Prompt.ask("App-ID Dozenten", default=app_ids.instructors),
            rooms=Prompt.ask("App-ID Räume", default=app_ids.rooms),
            participants=Prompt.ask("App-ID Teilnehmer", default=app_ids.participants),
            courses=Prompt.ask("App-ID Kurse", default=app_ids.courses),
            enrollments=Prompt.ask("App-ID Anmeldungen", default=app_ids.enrollments),
        )
    return ApiConfig(base_url=base_url, timeout_seconds=timeout, app_ids=app_ids)


# ─── SCHRITT 2: Anzeige ───

def _wizard_display() -> DisplayConfig:
    _header("Schritt 2 — Anzeige")
    defaults = DisplayConfig()
    return DisplayConfig(
        title=Prompt.ask("Überschrift", default=defaults.title),
        subtitle=Prompt.ask("Unterzeile", default=defaults.subtitle),
        currency_symbol=Prompt.ask("Währungssymbol", default=defaults.currency_symbol),
        upcoming_days=IntPrompt.ask("Zeitfenster bevorstehende Kurse (Tage)",
                                    default=defaults.upcoming_days),
        upcoming_limit=IntPrompt.ask("Max. Anzahl bevorstehender Kurse",
                                     default=defaults.upcoming_limit),
    )


# ─── HAUPT-WIZARD ───

def run_wizard() -> Optional[DashboardConfig]:
    """Führt den kompletten Setup-Wizard aus.

    Gibt None zurück, wenn der Nutzer am Ende nicht speichern möchte.
    """
    console.print(Panel(
        "[bold]Kursverwaltung — Dashboard-Einrichtung[/bold]\n"
        "Alle Werte können später mit [bold]python main.py config edit[/bold] "
        "geändert werden.",
        border_style="cyan",
    ))

    if Confirm.ask("Standardwerte übernehmen?", default=True):
        config = default_dashboard_config()
    else:
        api = _wizard_api()
        display = _wizard_display()
        level = Prompt.ask("Log-Level", choices=[lv.value for lv in LogLevel],
                           default=LogLevel.WARNING.value)
        config = DashboardConfig(api=api, display=display,
                                 logging=LoggingConfig(level=LogLevel(level)))

    _header("Zusammenfassung")
    show_config_table(config)
    if not Confirm.ask("Konfiguration speichern?", default=True):
        console.print("[yellow]Abgebrochen – nichts gespeichert.[/yellow]")
        return None
    _success("Einrichtung abgeschlossen.")
    return config
