# ui/pages/tracker.py
from __future__ import annotations

from calendar import month_name

import flet as ft

from core.settings import UI
from services.progress import MonthSummary
from ui import compat
from utils.datetime_utils import local_today


class TrackerPage:
    """Month habit grid: one checkbox per task and day."""

    def __init__(self, app):
        self.app = app
        today = local_today()
        self.year = today.year
        self.month = today.month

        self.year_dd = ft.Dropdown(
            label="Year",
            width=120,
            value=str(self.year),
            options=[ft.dropdown.Option(str(y)) for y in range(today.year - 2, today.year + 3)],
            on_change=self._on_period_change,
        )
        self.month_dd = ft.Dropdown(
            label="Month",
            width=160,
            value=str(self.month),
            options=[ft.dropdown.Option(str(m), month_name[m]) for m in range(1, 13)],
            on_change=self._on_period_change,
        )
        self.overview = ft.Row(spacing=24, vertical_alignment=ft.CrossAxisAlignment.START, wrap=True)
        self.grid = ft.Column(spacing=2, scroll=ft.ScrollMode.AUTO)
        self.weeks = ft.Row(spacing=16, wrap=True)

        self.view = ft.Column(
            [
                ft.Row(
                    [ft.Text("Habit tracker", size=22, weight=ft.FontWeight.BOLD), self.year_dd, self.month_dd],
                    spacing=16,
                ),
                self.overview,
                ft.Row([self.grid], scroll=ft.ScrollMode.AUTO),
                ft.Text("Weekly progress", weight=ft.FontWeight.W_600),
                self.weeks,
            ],
            spacing=16,
            scroll=ft.ScrollMode.AUTO,
            expand=True,
        )

    def _on_period_change(self, e):
        self.year = int(self.year_dd.value)
        self.month = int(self.month_dd.value)
        self.load()
        self.app.refresh()

    def _on_toggle(self, task_id: str, day):
        def handler(e):
            self.app.session.toggle_completion(task_id, day)
            self.load()
            self.app.refresh()

        return handler

    def load(self):
        session = self.app.session
        summary = session.month_summary(self.year, self.month)
        self._render_overview(summary)
        self._render_grid(summary)
        self._render_weeks(summary)

    def _render_overview(self, summary: MonthSummary):
        monthly = summary.monthly
        trend_bars = ft.Row(
            [
                ft.Container(
                    width=6,
                    height=max(2, point.percentage),
                    bgcolor=UI.theme.accent,
                    tooltip=f"{point.date.strftime('%b %d')}: {point.percentage}%",
                )
                for point in summary.trend
            ],
            spacing=2,
            vertical_alignment=ft.CrossAxisAlignment.END,
            height=104,
        )
        ranked = [
            ft.Text(f"{idx}. {item.task.name}: {item.completed}", size=12)
            for idx, item in enumerate(summary.top, start=1)
        ] or [ft.Text("No tasks yet", size=12, color=UI.theme.text_subtle)]
        top = ft.Column([ft.Text("Top habits", weight=ft.FontWeight.W_600)] + ranked, spacing=2)
        self.overview.controls = [
            ft.Column([ft.Text("Daily completion trend", weight=ft.FontWeight.W_600), trend_bars]),
            ft.Column(
                [
                    ft.Text("Monthly progress", weight=ft.FontWeight.W_600),
                    compat.labeled_bar(f"{monthly.completed} done, {monthly.left} left", monthly.percentage),
                ]
            ),
            top,
        ]

    def _render_grid(self, summary: MonthSummary):
        session = self.app.session
        header = ft.Row(
            [ft.Container(ft.Text("Habit", weight=ft.FontWeight.W_600), width=UI.grid_name_width)]
            + [
                ft.Container(ft.Text(str(day.day), size=11), width=UI.grid_cell_width, alignment=ft.alignment.center)
                for day in summary.days
            ]
            + [ft.Container(ft.Text("Goal", size=11), width=70)],
            spacing=0,
        )
        rows = [header]
        for progress in summary.tasks:
            task = progress.task
            cells = [
                ft.Container(
                    ft.Checkbox(
                        value=session.is_completed(task.id, day),
                        on_change=self._on_toggle(task.id, day),
                    ),
                    width=UI.grid_cell_width,
                )
                for day in summary.days
            ]
            rows.append(
                ft.Row(
                    [ft.Container(ft.Text(task.name, no_wrap=True), width=UI.grid_name_width)]
                    + cells
                    + [ft.Container(ft.Text(f"{progress.completed}/{progress.goal}", size=11), width=70)],
                    spacing=0,
                )
            )
        self.grid.controls = rows

    def _render_weeks(self, summary: MonthSummary):
        self.weeks.controls = [
            ft.Container(
                content=ft.Column(
                    [
                        ft.Text(f"Week {week.number}", weight=ft.FontWeight.W_600),
                        compat.labeled_bar(f"{week.completed}/{week.total}", week.percentage, width=160),
                    ]
                ),
                padding=8,
                border=ft.border.all(1, UI.theme.outline),
                border_radius=8,
            )
            for week in summary.weekly
        ]
