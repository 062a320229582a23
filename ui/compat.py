import flet as ft

HAS_WRAP = hasattr(ft, "Wrap")
TEXT_ACCEPTS_DECORATION = "decoration" in ft.Text.__init__.__code__.co_varnames


def wrap_row(controls, spacing=12, run_spacing=8):
    if HAS_WRAP:
        return ft.Wrap(controls=controls, spacing=spacing, run_spacing=run_spacing)
    return ft.Row(controls=controls, wrap=True, spacing=spacing, run_spacing=run_spacing)


def strike_text(text: str, *, strike: bool = False, size: int | None = None):
    decoration = ft.TextDecoration.LINE_THROUGH if strike else None
    if TEXT_ACCEPTS_DECORATION:
        t = ft.Text(text, size=size)
        t.decoration = decoration
        return t
    return ft.Text(text, size=size, style=ft.TextStyle(decoration=decoration))


def labeled_bar(label: str, percentage: int, *, color: str | None = None, width: int = 220):
    """Caption plus a 0..100 progress bar."""
    return ft.Column(
        [
            ft.Row(
                [ft.Text(label, size=12, expand=True), ft.Text(f"{percentage}%", size=12)],
                width=width,
            ),
            ft.ProgressBar(value=max(0, min(percentage, 100)) / 100, width=width, color=color),
        ],
        spacing=2,
    )
