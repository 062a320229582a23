# ui/pages/tasks.py
from __future__ import annotations

import flet as ft

from core.priorities import priority_bgcolor, priority_color, priority_label, priority_options
from core.settings import TRACKER, UI
from services.records import TASK_FILTERS, filter_tasks, sort_tasks
from ui import compat


class TasksPage:
    def __init__(self, app):
        self.app = app

        self.name_tf = ft.TextField(label="Task name", expand=True, on_submit=self._on_add)
        self.category_dd = ft.Dropdown(label="Category", width=180)
        self.priority_dd = ft.Dropdown(
            label="Priority",
            width=150,
            value="medium",
            options=[ft.dropdown.Option(key, label) for key, label in priority_options().items()],
        )
        self.goal_tf = ft.TextField(label="Monthly goal", width=120, value=str(TRACKER.default_goal_days))
        self.filter_dd = ft.Dropdown(
            label="Show",
            width=150,
            value="all",
            options=[ft.dropdown.Option(key, key.capitalize()) for key in TASK_FILTERS],
            on_change=lambda e: self._reload(),
        )
        self.list = ft.ListView(expand=True, spacing=6)

        self.view = ft.Column(
            [
                ft.Row([ft.Text("Tasks", size=22, weight=ft.FontWeight.BOLD), self.filter_dd],
                       alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                ft.Row(
                    [
                        self.name_tf,
                        self.category_dd,
                        self.priority_dd,
                        self.goal_tf,
                        ft.ElevatedButton("Add", icon=ft.Icons.ADD, on_click=self._on_add),
                    ],
                    vertical_alignment=ft.CrossAxisAlignment.END,
                ),
                self.list,
            ],
            spacing=16,
            expand=True,
        )

    def _reload(self):
        self.load()
        self.app.refresh()

    def _on_add(self, e):
        try:
            self.app.session.add_task(
                self.name_tf.value,
                self.category_dd.value or "",
                self.priority_dd.value,
                self.goal_tf.value,
            )
        except ValueError as exc:
            self.app.notify(str(exc), error=True)
            return
        self.name_tf.value = ""
        self._reload()

    def _on_toggle(self, task_id: str):
        def handler(e):
            self.app.session.toggle_task(task_id)
            self._reload()

        return handler

    def _on_delete(self, task_id: str):
        def handler(e):
            self.app.session.delete_task(task_id)
            self._reload()

        return handler

    def load(self):
        session = self.app.session
        names = [c.name for c in session.categories]
        self.category_dd.options = [ft.dropdown.Option(name) for name in names]
        if self.category_dd.value not in names:
            self.category_dd.value = names[0] if names else None

        tasks = sort_tasks(filter_tasks(session.tasks, self.filter_dd.value or "all"))
        rows = []
        for task in tasks:
            badge = ft.Container(
                ft.Text(priority_label(task.priority), size=11, color=priority_color(task.priority)),
                bgcolor=priority_bgcolor(task.priority),
                padding=ft.padding.symmetric(horizontal=8, vertical=2),
                border_radius=10,
            )
            rows.append(
                ft.Row(
                    [
                        ft.Checkbox(value=task.completed, on_change=self._on_toggle(task.id)),
                        ft.Column(
                            [
                                compat.strike_text(task.name, strike=task.completed),
                                ft.Text(task.category or "Uncategorized", size=11, color=UI.theme.text_subtle),
                            ],
                            spacing=0,
                            expand=True,
                        ),
                        badge,
                        ft.IconButton(ft.Icons.DELETE_OUTLINE, tooltip="Delete", on_click=self._on_delete(task.id)),
                    ]
                )
            )
        self.list.controls = rows or [ft.Text("No tasks", color=UI.theme.text_subtle)]
