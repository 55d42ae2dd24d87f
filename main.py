"""Kursverwaltung-Dashboard — Haupt-CLI.

Verwendung:
  python main.py setup                          Ersteinrichtung (Wizard)
  python main.py config edit                    Konfiguration bearbeiten
  python main.py config show                    Konfiguration anzeigen
  python main.py dashboard                      Dashboard abrufen und anzeigen
  python main.py dashboard --snapshot <datei>   Dashboard aus Snapshot-Datei
  python main.py stats [--json]                 Kennzahlen als Tabelle / JSON
  python main.py courses [--status aktiv]       Kursliste (Detailansicht)
  python main.py generate                       Demo-Snapshot erzeugen
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

import click
from rich.console import Console
from rich.live import Live
from rich.logging import RichHandler
from rich.panel import Panel

from analysis.dashboard_flow import DashboardController, DashboardPhase, DashboardView
from config.schema import DashboardConfig
from models.course import CourseStatus

console = Console()
logger = logging.getLogger(__name__)

# Standard-Pfad für den Demo-Snapshot
DEFAULT_SNAPSHOT_JSON = Path("output/demo_snapshot.json")

snapshot_option = click.option(
    "--snapshot", "snapshot_path",
    type=click.Path(dir_okay=False, path_type=Path), default=None,
    help="Daten aus Snapshot-Datei statt von der Record-API laden.",
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _load_config() -> DashboardConfig:
    """Lädt die Konfiguration (Standardwerte ohne Datei) oder bricht ab."""
    from config.manager import ConfigManager
    try:
        return ConfigManager().load_or_default()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def _load_config_or_abort():
    """Lädt die Konfiguration oder bricht mit Fehlermeldung ab."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    if mgr.first_run_check():
        console.print(
            "[red]Keine Konfiguration gefunden.[/red]\n"
            "Führen Sie zunächst [bold]python main.py setup[/bold] aus."
        )
        sys.exit(1)
    try:
        return mgr, mgr.load()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def _activate(
    config: DashboardConfig,
    snapshot_path: Optional[Path],
    listener: Optional[Callable[[DashboardView], None]] = None,
) -> DashboardView:
    """Eine Dashboard-Aktivierung: Quelle öffnen, abrufen, Endzustand liefern."""
    from data.record_api import RecordApiClient
    from data.snapshot_source import SnapshotSource

    if snapshot_path is not None:
        source = SnapshotSource(snapshot_path)
    else:
        source = RecordApiClient.from_config(config.api)

    controller = DashboardController(
        source,
        upcoming_days=config.display.upcoming_days,
        upcoming_limit=config.display.upcoming_limit,
    )
    if listener is not None:
        controller.subscribe(listener)

    async def _run() -> None:
        async with source:
            await controller.activate()

    asyncio.run(_run())
    if controller.view.phase == DashboardPhase.FAILED:
        logger.warning("Abruf fehlgeschlagen, zeige leere Kennzahlen: %s",
                       controller.view.error)
    return controller.view


# ─── SETUP ────────────────────────────────────────────────────────────────────

@click.command("setup")
def cmd_setup():
    """Ersteinrichtung: Dashboard-Konfiguration mit dem Setup-Wizard anlegen."""
    from config.wizard import run_wizard
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check():
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Verwenden Sie [bold]python main.py config edit[/bold] zum Bearbeiten."
        )
        if not click.confirm("Trotzdem neu einrichten?", default=False):
            return

    config = run_wizard()
    if config is not None:
        mgr.save(config)
        console.print("Führen Sie jetzt [bold]python main.py dashboard[/bold] aus.")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder bearbeiten."""


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuelle Konfiguration an."""
    from config.wizard import show_config_table
    mgr, config = _load_config_or_abort()
    show_config_table(config)


@cmd_config.command("edit")
def config_edit():
    """Bearbeitet die Konfiguration interaktiv."""
    mgr, config = _load_config_or_abort()
    mgr.edit_interactive(config)


# ─── DASHBOARD ────────────────────────────────────────────────────────────────

@click.command("dashboard")
@snapshot_option
def cmd_dashboard(snapshot_path: Optional[Path]):
    """Ruft alle Daten ab und zeigt das Dashboard an."""
    from export.dashboard_renderer import render_dashboard

    config = _load_config()
    loading = render_dashboard(DashboardView(phase=DashboardPhase.LOADING))
    with Live(loading, console=console, refresh_per_second=12) as live:
        _activate(
            config, snapshot_path,
            listener=lambda view: live.update(
                render_dashboard(view, display=config.display), refresh=True,
            ),
        )


# ─── STATS ────────────────────────────────────────────────────────────────────

@click.command("stats")
@snapshot_option
@click.option("--json", "as_json", is_flag=True, default=False,
              help="Kennzahlen als JSON ausgeben.")
def cmd_stats(snapshot_path: Optional[Path], as_json: bool):
    """Gibt die Kennzahlen als Tabelle oder JSON aus."""
    from export.dashboard_renderer import render_statistics_table

    config = _load_config()
    view = _activate(config, snapshot_path)
    if as_json:
        click.echo(view.statistics.model_dump_json(indent=2, by_alias=True))
        return
    console.print(render_statistics_table(view.statistics, config.display))


# ─── COURSES ──────────────────────────────────────────────────────────────────

@click.command("courses")
@snapshot_option
@click.option("--status", "status",
              type=click.Choice([s.value for s in CourseStatus]), default=None,
              help="Nur Kurse mit diesem Status anzeigen.")
def cmd_courses(snapshot_path: Optional[Path], status: Optional[str]):
    """Listet Kurse mit Dozent, Raum und Anmeldungen auf."""
    from export.dashboard_renderer import render_course_table

    config = _load_config()
    view = _activate(config, snapshot_path)
    courses = view.snapshot.courses
    if status is not None:
        courses = [c for c in courses if c.fields.status == status]
    courses = sorted(courses, key=lambda c: c.fields.start_date or "")

    if not courses:
        console.print("[dim]Keine Kurse vorhanden.[/dim]")
        return
    console.print(render_course_table(courses, view.snapshot, config.display))


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--output", "-o", default=str(DEFAULT_SNAPSHOT_JSON),
              help="Pfad für den Snapshot.")
def cmd_generate(seed: int, output: str):
    """Erzeugt einen Demo-Snapshot (Dozenten, Räume, Teilnehmer, Kurse, Anmeldungen)."""
    from data.fake_data import FakeDataGenerator

    config = _load_config()
    console.print("[bold]Demo-Daten werden generiert...[/bold]")
    snapshot = FakeDataGenerator(seed=seed, app_ids=config.api.app_ids).generate()
    out_path = Path(output)
    snapshot.save_json(out_path)

    console.print(f"\n[dim]{snapshot.summary()}[/dim]")
    console.print(f"[green]✓[/green] Snapshot gespeichert: {out_path}")
    console.print(
        f"Anzeigen mit [bold]python main.py dashboard --snapshot {out_path}[/bold]"
    )


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--log-level", default=None,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
              help="Überschreibt das Log-Level aus der Konfiguration.")
def cli(log_level: Optional[str]):
    """Kursverwaltung — Akademie-Dashboard.

    Starten Sie mit: python main.py setup
    """
    if log_level is None:
        from config.manager import ConfigManager
        try:
            log_level = ConfigManager().load_or_default().logging.level.value
        except ValueError:
            log_level = "WARNING"
    _configure_logging(log_level)


def main():
    """Einstiegspunkt. Startet automatisch den Wizard beim ersten Aufruf."""
    from config.manager import ConfigManager
    mgr = ConfigManager()

    if len(sys.argv) == 1 and mgr.first_run_check():
        console.print(Panel(
            "[bold]Willkommen beim Kursverwaltungs-Dashboard![/bold]\n\n"
            "Keine Konfiguration gefunden.\n"
            "Der Setup-Wizard wird jetzt gestartet...",
            border_style="cyan",
        ))
        sys.argv.append("setup")

    cli()


# Befehle registrieren
cli.add_command(cmd_setup)
cli.add_command(cmd_config)
cli.add_command(cmd_dashboard)
cli.add_command(cmd_stats)
cli.add_command(cmd_courses)
cli.add_command(cmd_generate)


if __name__ == "__main__":
    main()
