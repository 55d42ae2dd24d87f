"""Export-Modul: Terminal-Darstellung des Dashboards (Rich)."""

from export.dashboard_renderer import (
    render_course_table,
    render_dashboard,
    render_statistics_table,
)

__all__ = ["render_dashboard", "render_course_table", "render_statistics_table"]
