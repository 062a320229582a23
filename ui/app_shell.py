# ui/app_shell.py
from __future__ import annotations

import flet as ft

from core.log import get_logger
from core.settings import UI
from services.session import TrackerSession

from .pages.activities import ActivitiesPage
from .pages.categories import CategoriesPage
from .pages.dashboard import DashboardPage
from .pages.settings import SettingsPage
from .pages.tasks import TasksPage
from .pages.tracker import TrackerPage

logger = get_logger("ui")


class AppShell:
    def __init__(self, page: ft.Page, session: TrackerSession):
        self.page = page
        self.session = session

        self.page.title = UI.app_title
        self.page.horizontal_alignment = ft.CrossAxisAlignment.STRETCH
        self.page.vertical_alignment = ft.MainAxisAlignment.START

        self._pages = [
            DashboardPage(self),
            TasksPage(self),
            ActivitiesPage(self),
            TrackerPage(self),
            CategoriesPage(self),
            SettingsPage(self),
        ]

        self.content = ft.Container(expand=True, padding=16)

        self.nav = ft.NavigationRail(
            selected_index=0,
            label_type=ft.NavigationRailLabelType.ALL,
            min_width=90,
            group_alignment=-0.9,
            on_change=self.on_nav_change,
            destinations=[
                ft.NavigationRailDestination(
                    icon=ft.Icons.INSIGHTS_OUTLINED, selected_icon=ft.Icons.INSIGHTS, label="Dashboard"
                ),
                ft.NavigationRailDestination(
                    icon=ft.Icons.CHECKLIST_OUTLINED, selected_icon=ft.Icons.CHECKLIST, label="Tasks"
                ),
                ft.NavigationRailDestination(
                    icon=ft.Icons.TIMER_OUTLINED, selected_icon=ft.Icons.TIMER, label="Activities"
                ),
                ft.NavigationRailDestination(
                    icon=ft.Icons.CALENDAR_MONTH_OUTLINED,
                    selected_icon=ft.Icons.CALENDAR_MONTH,
                    label="Tracker",
                ),
                ft.NavigationRailDestination(
                    icon=ft.Icons.LABEL_OUTLINE, selected_icon=ft.Icons.LABEL, label="Categories"
                ),
                ft.NavigationRailDestination(
                    icon=ft.Icons.SETTINGS_OUTLINED, selected_icon=ft.Icons.SETTINGS, label="Settings"
                ),
            ],
        )

        self.root = ft.Row(
            controls=[
                ft.Container(self.nav, width=88, bgcolor=UI.theme.safe_surface_bg),
                ft.VerticalDivider(width=1),
                self.content,
            ],
            expand=True,
            spacing=0,
        )

    # ---------- mount ----------
    def mount(self):
        self.page.controls.clear()
        self.page.add(self.root)
        self._show(0)
        self.session.start_reminders(self.page.run_task)
        self.page.on_disconnect = lambda e: self.session.stop_reminders()

    def _show(self, index: int):
        target = self._pages[index]
        target.load()
        self.content.content = target.view
        self.page.update()

    def on_nav_change(self, e: ft.ControlEvent):
        self._show(int(e.control.selected_index))

    # ---------- helpers for pages ----------
    def notify(self, message: str, *, error: bool = False):
        """Transient message at the bottom of the window."""
        snack = ft.SnackBar(
            ft.Text(message),
            bgcolor=ft.Colors.RED_400 if error else None,
        )
        self.page.open(snack)

    def refresh(self):
        self.page.update()
