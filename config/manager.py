"""Konfigurationsmanager: Laden, Speichern, Validieren und interaktives Bearbeiten.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.prompt import FloatPrompt, IntPrompt, Prompt
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.schema import ApiConfig, AppIds, DashboardConfig, DisplayConfig, LogLevel

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Kursverwaltung — Dashboard-Konfiguration
# Version: 1.0
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "api": (
        "Record-API",
        "Basis-URL, Zeitlimit und App-IDs der fünf Datensammlungen.",
    ),
    "display": (
        "Anzeige",
        "Überschriften, Währung und Zeitfenster für bevorstehende Kurse.",
    ),
    "logging": (
        "Logging",
        "DEBUG, INFO, WARNING oder ERROR.",
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "dashboard_config.yaml"

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> DashboardConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py setup' aus, um das Dashboard einzurichten."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            return DashboardConfig.model_validate(dict(raw or {}))
        except Exception as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    def load_or_default(self, path: Optional[Path] = None) -> DashboardConfig:
        """Wie load(), aber Standardwerte wenn keine Datei existiert."""
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            return DashboardConfig()
        return self.load(target)

    # ─── Speichern ───

    def save(self, config: DashboardConfig, path: Optional[Path] = None) -> None:
        """Speichere Config als YAML mit deutschen Kommentaren."""
        target = path or self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Konfiguration gespeichert: {target}")

    def _build_commented_yaml(self, config: DashboardConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        api_map = CommentedMap(cm["api"])
        api_map.yaml_add_eol_comment("Sekunden", "timeout_seconds")
        cm["api"] = api_map

        return cm

    # ─── Interaktives Bearbeiten ───

    def edit_interactive(self, config: DashboardConfig) -> DashboardConfig:
        """Interaktives Bearbeitungsmenü für die Konfiguration."""
        while True:
            console.print()
            console.print(Panel(
                "[bold]Konfiguration bearbeiten[/bold]",
                border_style="cyan",
            ))
            console.print("  [bold]1.[/bold] Record-API (URL, Zeitlimit)")
            console.print("  [bold]2.[/bold] App-IDs")
            console.print("  [bold]3.[/bold] Anzeige")
            console.print("  [bold]4.[/bold] Log-Level")
            console.print("  [bold]0.[/bold] Speichern & Zurück")

            choice = Prompt.ask("\nAuswahl", default="0")

            try:
                config = self._apply_choice(config, choice)
            except ValidationError as e:
                # Abschnitt bleibt unverändert, bisherige Änderungen bleiben erhalten
                console.print(f"[red]Ungültige Eingabe:[/red]\n{e}")
                continue

            if choice == "0":
                self.save(config)
                break

        return config

    def _apply_choice(self, config: DashboardConfig, choice: str) -> DashboardConfig:
        """Bearbeitet den gewählten Abschnitt; wirft ValidationError bei ungültigen Werten."""
        if choice == "1":
            return config.model_copy(update={"api": self._edit_api(config.api)})
        if choice == "2":
            api = config.api.model_copy(
                update={"app_ids": self._edit_app_ids(config.api.app_ids)}
            )
            return config.model_copy(update={"api": api})
        if choice == "3":
            return config.model_copy(
                update={"display": self._edit_display(config.display)}
            )
        if choice == "4":
            level = Prompt.ask(
                "Log-Level",
                choices=[lv.value for lv in LogLevel],
                default=config.logging.level.value,
            )
            return config.model_copy(update={
                "logging": config.logging.model_copy(update={"level": LogLevel(level)})
            })
        if choice != "0":
            console.print("[yellow]Ungültige Auswahl.[/yellow]")
        return config

    def _edit_api(self, api: ApiConfig) -> ApiConfig:
        base_url = Prompt.ask("Basis-URL", default=api.base_url)
        timeout = FloatPrompt.ask("Zeitlimit (Sekunden)", default=api.timeout_seconds)
        return ApiConfig(base_url=base_url, timeout_seconds=timeout,
                         app_ids=api.app_ids)

    def _edit_app_ids(self, ids: AppIds) -> AppIds:
        labels = {
            "instructors": "Dozenten",
            "rooms": "Räume",
            "participants": "Teilnehmer",
            "courses": "Kurse",
            "enrollments": "Anmeldungen",
        }
        values = {
            key: Prompt.ask(f"App-ID {label}", default=getattr(ids, key))
            for key, label in labels.items()
        }
        return AppIds(**values)

    def _edit_display(self, display: DisplayConfig) -> DisplayConfig:
        return DisplayConfig(
            title=Prompt.ask("Überschrift", default=display.title),
            subtitle=Prompt.ask("Unterzeile", default=display.subtitle),
            currency_symbol=Prompt.ask("Währungssymbol", default=display.currency_symbol),
            upcoming_days=IntPrompt.ask("Zeitfenster bevorstehende Kurse (Tage)",
                                        default=display.upcoming_days),
            upcoming_limit=IntPrompt.ask("Max. Anzahl bevorstehender Kurse",
                                         default=display.upcoming_limit),
        )
