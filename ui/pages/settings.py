# ui/pages/settings.py
from __future__ import annotations

import flet as ft

from core.settings import UI


class SettingsPage:
    def __init__(self, app):
        self.app = app
        self.email_tf = ft.TextField(label="Email", width=360)
        self.service_tf = ft.TextField(label="EmailJS service id", width=360)
        self.template_tf = ft.TextField(label="EmailJS template id", width=360)
        self.key_tf = ft.TextField(label="EmailJS public key", width=360, password=True, can_reveal_password=True)
        self.reminder_sw = ft.Switch(label="Weekly reminder (Mondays)")
        self.report_sw = ft.Switch(label="Weekly report (Sundays)")

        self.view = ft.Column(
            [
                ft.Text("Settings", size=22, weight=ft.FontWeight.BOLD),
                self.email_tf,
                self.service_tf,
                self.template_tf,
                self.key_tf,
                self.reminder_sw,
                self.report_sw,
                ft.Row(
                    [
                        ft.ElevatedButton("Save", icon=ft.Icons.SAVE, on_click=self._on_save),
                        ft.OutlinedButton("Send test report", icon=ft.Icons.SEND, on_click=self._on_test_report),
                        ft.OutlinedButton("Send test reminder", icon=ft.Icons.ALARM, on_click=self._on_test_reminder),
                    ],
                    spacing=12,
                ),
                ft.Text(
                    "Reminders are checked once a day while the app is open.",
                    size=12,
                    color=UI.theme.text_subtle,
                ),
            ],
            spacing=12,
            scroll=ft.ScrollMode.AUTO,
            expand=True,
        )

    def load(self):
        s = self.app.session.settings
        self.email_tf.value = s.email
        self.service_tf.value = s.email_service_id or ""
        self.template_tf.value = s.email_template_id or ""
        self.key_tf.value = s.email_public_key or ""
        self.reminder_sw.value = s.weekly_reminder_enabled
        self.report_sw.value = s.weekly_report_enabled

    def _on_save(self, e):
        self.app.session.update_settings(
            email=(self.email_tf.value or "").strip(),
            email_service_id=(self.service_tf.value or "").strip() or None,
            email_template_id=(self.template_tf.value or "").strip() or None,
            email_public_key=(self.key_tf.value or "").strip() or None,
            weekly_reminder_enabled=bool(self.reminder_sw.value),
            weekly_report_enabled=bool(self.report_sw.value),
        )
        self.app.notify("Settings saved")

    def _on_test_report(self, e):
        if self.app.session.send_weekly_report():
            self.app.notify("Weekly report sent")
        else:
            self.app.notify("Could not send the report, check the email settings", error=True)

    def _on_test_reminder(self, e):
        if self.app.session.send_weekly_reminder():
            self.app.notify("Reminder sent")
        else:
            self.app.notify("Could not send the reminder, check the email settings", error=True)
