"""Color palettes, tag colors, and Textual theme builders."""

from __future__ import annotations

import zlib

from textual.theme import Theme as TextualTheme

DEFAULT_THEME_NAME = "monokai"

MONOKAI_THEME: dict[str, str] = {
    "background": "#272822",
    "panel": "#1e1e1e",
    "panel_alt": "#3e3d32",
    "text": "#f8f8f2",
    "muted": "#75715e",
    "accent": "#66d9ef",
    "accent_alt": "#e6db74",
    "green": "#a6e22e",
    "orange": "#fd971f",
    "pink": "#f92672",
    "purple": "#ae81ff",
    "highlight": "#49483e",
    "scrollbar_background": "#3e3d32",
    "scrollbar": "#75715e",
    "scrollbar_active": "#66d9ef",
    "scrollbar_hover": "#a8a8a2",
}

CATPPUCCIN_MOCHA_THEME: dict[str, str] = {
    "background": "#1e1e2e",
    "panel": "#181825",
    "panel_alt": "#313244",
    "text": "#cdd6f4",
    "muted": "#6c7086",
    "accent": "#89b4fa",
    "accent_alt": "#f9e2af",
    "green": "#a6e3a1",
    "orange": "#fab387",
    "pink": "#f38ba8",
    "purple": "#cba6f7",
    "highlight": "#45475a",
    "scrollbar_background": "#313244",
    "scrollbar": "#6c7086",
    "scrollbar_active": "#89b4fa",
    "scrollbar_hover": "#9399b2",
}

SOLARIZED_DARK_THEME: dict[str, str] = {
    "background": "#002b36",
    "panel": "#073642",
    "panel_alt": "#586e75",
    "text": "#839496",
    "muted": "#586e75",
    "accent": "#268bd2",
    "accent_alt": "#b58900",
    "green": "#859900",
    "orange": "#cb4b16",
    "pink": "#d33682",
    "purple": "#6c71c4",
    "highlight": "#073642",
    "scrollbar_background": "#073642",
    "scrollbar": "#657b83",
    "scrollbar_active": "#268bd2",
    "scrollbar_hover": "#93a1a1",
}

THEMES: dict[str, dict[str, str]] = {
    "monokai": MONOKAI_THEME,
    "catppuccin-mocha": CATPPUCCIN_MOCHA_THEME,
    "solarized-dark": SOLARIZED_DARK_THEME,
}
THEME_NAMES: list[str] = list(THEMES.keys())

# Palette keys cycled through for question tags
_TAG_COLOR_KEYS = ("accent", "green", "orange", "purple", "pink", "accent_alt")


def _build_textual_theme(name: str, colors: dict[str, str]) -> TextualTheme:
    """Convert an app color dict to a Textual Theme with custom CSS variables.

    The $th-* variables are what ui_constants.APP_CSS refers to; primary,
    background and foreground drive Textual's built-in widget styling.
    """
    variables = {
        "th-background": colors["background"],
        "th-panel": colors["panel"],
        "th-panel-alt": colors["panel_alt"],
        "th-highlight": colors["highlight"],
        "th-accent": colors["accent"],
        "th-accent-alt": colors["accent_alt"],
        "th-muted": colors["muted"],
        "th-text": colors["text"],
        "th-green": colors["green"],
        "th-orange": colors["orange"],
        "th-purple": colors["purple"],
        "th-scrollbar-bg": colors["scrollbar_background"],
        "th-scrollbar-thumb": colors["scrollbar"],
        "th-scrollbar-active": colors["scrollbar_active"],
        "th-scrollbar-hover": colors["scrollbar_hover"],
    }
    return TextualTheme(
        name=name,
        primary=colors["accent"],
        secondary=colors["accent_alt"],
        accent=colors["green"],
        foreground=colors["text"],
        background=colors["background"],
        surface=colors["panel"],
        panel=colors["panel_alt"],
        warning=colors["orange"],
        error=colors["pink"],
        success=colors["green"],
        dark=True,
        variables=variables,
    )


TEXTUAL_THEMES: dict[str, TextualTheme] = {
    name: _build_textual_theme(name, colors) for name, colors in THEMES.items()
}


def resolve_theme_name(name: str | None) -> str:
    """Return ``name`` if it is a known theme, else the default theme name."""
    if name in THEMES:
        return name
    return DEFAULT_THEME_NAME


def get_tag_color(tag: str, theme_name: str = DEFAULT_THEME_NAME) -> str:
    """Return a display color for a question tag.

    The color is stable across runs (crc32, not ``hash``) so a tag keeps its
    color between sessions.
    """
    colors = THEMES[resolve_theme_name(theme_name)]
    key = _TAG_COLOR_KEYS[zlib.crc32(tag.encode("utf-8")) % len(_TAG_COLOR_KEYS)]
    return colors[key]


__all__ = [
    "CATPPUCCIN_MOCHA_THEME",
    "DEFAULT_THEME_NAME",
    "MONOKAI_THEME",
    "SOLARIZED_DARK_THEME",
    "TEXTUAL_THEMES",
    "THEMES",
    "THEME_NAMES",
    "get_tag_color",
    "resolve_theme_name",
]
