# ui/pages/dashboard.py
from __future__ import annotations

import flet as ft

from core.settings import UI
from services.date_ranges import Bucket
from services.stats import WeeklyStats
from ui import compat

_RANGE_LABELS = {
    Bucket.DAY: "Daily",
    Bucket.WEEK: "Weekly",
    Bucket.MONTH: "Monthly",
    Bucket.QUARTER: "Quarterly",
}


def _stat_card(title: str, value: str) -> ft.Control:
    return ft.Container(
        content=ft.Column(
            [ft.Text(title, size=12, color=UI.theme.text_subtle), ft.Text(value, size=24, weight=ft.FontWeight.BOLD)],
            spacing=4,
        ),
        padding=12,
        border=ft.border.all(1, UI.theme.outline),
        border_radius=8,
        width=180,
    )


class DashboardPage:
    def __init__(self, app):
        self.app = app
        self.bucket = Bucket.WEEK

        self.range_dd = ft.Dropdown(
            label="Range",
            width=180,
            value=self.bucket.value,
            options=[ft.dropdown.Option(b.value, label) for b, label in _RANGE_LABELS.items()],
            on_change=self._on_range_change,
        )
        self.cards = ft.Row(spacing=12, wrap=True)
        self.categories = ft.Column(spacing=8)
        self.daily = ft.Column(spacing=6)

        self.view = ft.Column(
            [
                ft.Row([ft.Text("Performance", size=22, weight=ft.FontWeight.BOLD), self.range_dd],
                       alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                self.cards,
                ft.Text("Time by category", weight=ft.FontWeight.W_600),
                self.categories,
                self.daily,
            ],
            spacing=16,
            scroll=ft.ScrollMode.AUTO,
            expand=True,
        )

    def _on_range_change(self, e):
        self.bucket = Bucket(self.range_dd.value)
        self.load()
        self.app.refresh()

    def load(self):
        session = self.app.session
        stats = session.stats(self.bucket)

        self.cards.controls = [
            _stat_card("Total hours", f"{stats.total_hours:.1f}"),
            _stat_card("Activities", str(stats.activity_count)),
            _stat_card("Completion rate", f"{session.completion_rate()}%"),
            _stat_card("Tasks", str(len(session.tasks))),
        ]

        total = stats.total_minutes or 1
        self.categories.controls = [
            compat.labeled_bar(
                f"{name or 'Uncategorized'} · {minutes / 60:.1f}h",
                round(minutes / total * 100),
                color=session.category_color(name),
            )
            for name, minutes in stats.category_breakdown.items()
        ] or [ft.Text("No activities in this range", color=UI.theme.text_subtle)]

        self.daily.controls = []
        if isinstance(stats, WeeklyStats):
            self.daily.controls.append(ft.Text("This week by day", weight=ft.FontWeight.W_600))
            self.daily.controls.append(
                compat.wrap_row(
                    [
                        _stat_card(day.start.strftime("%a %d"), f"{day.total_hours:.1f}h")
                        for day in stats.daily_stats
                    ]
                )
            )
