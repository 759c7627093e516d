"""Built-in appearance themes used to resolve named bar colors."""

from __future__ import annotations

from .models import Appearance, AppearanceTheme

DEFAULT_THEME_NAME = "Neon Slate"


def _outline(*colors: str) -> tuple[Appearance, ...]:
    return tuple(Appearance(name=f"outline-{i}", foreground=c) for i, c in enumerate(colors, start=1))


THEMES: dict[str, AppearanceTheme] = {
    "Neon Slate": AppearanceTheme(
        name="Neon Slate",
        background="#0A0F1D",
        foreground="#F4F7FF",
        appearances=(
            Appearance("default", foreground="#F4F7FF", background="#0A0F1D"),
            Appearance("highlight", foreground="#35D9FF", background="#1A253F"),
            Appearance("shadow", foreground="#A9B5D1"),
            Appearance("warning", foreground="#FFB347"),
            Appearance("error", foreground="#FF5C7A"),
        )
        + _outline("#35D9FF", "#8CFFB5", "#FFD166", "#FF8FA3", "#B69CFF", "#59F3FF", "#FFB347", "#A9B5D1"),
    ),
    "Solar Drift": AppearanceTheme(
        name="Solar Drift",
        background="#1A140E",
        foreground="#FFF7E8",
        appearances=(
            Appearance("default", foreground="#FFF7E8", background="#1A140E"),
            Appearance("highlight", foreground="#FFD166", background="#473022"),
            Appearance("shadow", foreground="#E3CFA8"),
            Appearance("warning", foreground="#FFB347"),
            Appearance("error", foreground="#F25F5C"),
        )
        + _outline("#FFB347", "#FFD166", "#E3CFA8", "#F25F5C", "#C9A227", "#8CFFB5", "#FF8FA3", "#FFF7E8"),
    ),
    "Paper": AppearanceTheme(
        name="Paper",
        background="#FAFAF7",
        foreground="#1F2328",
        appearances=(
            Appearance("default", foreground="#1F2328", background="#FAFAF7"),
            Appearance("highlight", foreground="#0969DA", background="#DDF4FF"),
            Appearance("shadow", foreground="#6E7781"),
            Appearance("warning", foreground="#9A6700"),
            Appearance("error", foreground="#CF222E"),
        )
        + _outline("#0550AE", "#8250DF", "#116329", "#953800", "#CF222E", "#1B7C83", "#6E7781", "#9A6700"),
    ),
}


def list_themes() -> list[str]:
    return sorted(THEMES.keys())


def get_theme(name: str | None) -> AppearanceTheme:
    if not name:
        return THEMES[DEFAULT_THEME_NAME]
    return THEMES.get(name, THEMES[DEFAULT_THEME_NAME])
