# ui/pages/categories.py
from __future__ import annotations

import flet as ft

from models.category import CATEGORY_COLORS


class CategoriesPage:
    def __init__(self, app):
        self.app = app
        self.name_tf = ft.TextField(label="Category name", expand=True, on_submit=self._on_add)
        self.color_dd = ft.Dropdown(
            label="Color",
            width=160,
            value=CATEGORY_COLORS[0],
            options=[ft.dropdown.Option(color) for color in CATEGORY_COLORS],
        )
        self.list = ft.ListView(expand=True, spacing=6)
        self.view = ft.Column(
            [
                ft.Text("Categories", size=22, weight=ft.FontWeight.BOLD),
                ft.Row(
                    [self.name_tf, self.color_dd, ft.ElevatedButton("Add", icon=ft.Icons.ADD, on_click=self._on_add)],
                    vertical_alignment=ft.CrossAxisAlignment.END,
                ),
                self.list,
            ],
            spacing=16,
            expand=True,
        )

    def _on_add(self, e):
        try:
            self.app.session.add_category(self.name_tf.value, self.color_dd.value)
        except ValueError as exc:
            self.app.notify(str(exc), error=True)
            return
        self.name_tf.value = ""
        self.load()
        self.app.refresh()

    def _on_delete(self, category_id: str):
        def handler(e):
            self.app.session.delete_category(category_id)
            self.load()
            self.app.refresh()

        return handler

    def load(self):
        self.list.controls = [
            ft.Row(
                [
                    ft.Container(width=18, height=18, bgcolor=c.color, border_radius=9),
                    ft.Text(c.name, expand=True),
                    ft.IconButton(ft.Icons.DELETE_OUTLINE, tooltip="Delete", on_click=self._on_delete(c.id)),
                ]
            )
            for c in self.app.session.categories
        ]
