# ui/pages/activities.py
from __future__ import annotations

import flet as ft

from core.settings import TRACKER, UI
from services.records import activities_on
from utils.datetime_utils import local_today, parse_day


class ActivitiesPage:
    def __init__(self, app):
        self.app = app
        today = local_today().isoformat()

        self.task_dd = ft.Dropdown(label="Task", width=220)
        self.date_tf = ft.TextField(label="Date", width=140, value=today)
        self.duration_tf = ft.TextField(
            label="Minutes", width=100, value=str(TRACKER.default_duration_minutes)
        )
        self.notes_tf = ft.TextField(label="Notes", expand=True)
        self.filter_tf = ft.TextField(label="Show day", width=140, value=today, on_submit=lambda e: self._reload())
        self.summary = ft.Text("", color=UI.theme.text_subtle)
        self.list = ft.ListView(expand=True, spacing=6)

        self.view = ft.Column(
            [
                ft.Row([ft.Text("Activity log", size=22, weight=ft.FontWeight.BOLD), self.filter_tf],
                       alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                ft.Row(
                    [
                        self.task_dd,
                        self.date_tf,
                        self.duration_tf,
                        self.notes_tf,
                        ft.ElevatedButton("Log", icon=ft.Icons.ADD, on_click=self._on_add),
                    ],
                    vertical_alignment=ft.CrossAxisAlignment.END,
                ),
                self.summary,
                self.list,
            ],
            spacing=16,
            expand=True,
        )

    def _reload(self):
        self.load()
        self.app.refresh()

    def _on_add(self, e):
        if not self.task_dd.value:
            self.app.notify("Create a task first", error=True)
            return
        try:
            self.app.session.log_activity(
                self.task_dd.value,
                parse_day(self.date_tf.value) or local_today(),
                self.duration_tf.value,
                self.notes_tf.value,
            )
        except ValueError as exc:
            self.app.notify(str(exc), error=True)
            return
        self.notes_tf.value = ""
        self._reload()

    def _on_delete(self, activity_id: str):
        def handler(e):
            self.app.session.delete_activity(activity_id)
            self._reload()

        return handler

    def load(self):
        session = self.app.session
        self.task_dd.options = [ft.dropdown.Option(t.id, t.name) for t in session.tasks]
        if self.task_dd.value not in {t.id for t in session.tasks}:
            self.task_dd.value = session.tasks[0].id if session.tasks else None

        day = parse_day(self.filter_tf.value) or local_today()
        items = activities_on(session.activities, day)
        total = sum(a.duration for a in items)
        self.summary.value = f"{len(items)} activities, {total / 60:.1f}h on {day.isoformat()}"
        self.list.controls = [
            ft.Row(
                [
                    ft.Container(width=6, height=32, bgcolor=session.category_color(a.category)),
                    ft.Column(
                        [
                            ft.Text(a.task_name or a.task_id),
                            ft.Text(f"{a.category} · {a.duration} min {a.notes or ''}", size=11,
                                    color=UI.theme.text_subtle),
                        ],
                        spacing=0,
                        expand=True,
                    ),
                    ft.IconButton(ft.Icons.DELETE_OUTLINE, tooltip="Delete", on_click=self._on_delete(a.id)),
                ]
            )
            for a in items
        ]
