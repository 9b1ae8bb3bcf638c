"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)
- Dark/light mode configuration

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Slate and indigo palette, blue for the user, indigo for the analyst
ANALYST_SLATE = Theme(
    name="analyst-slate",
    primary="#3b82f6",      # Blue 500 - user messages, input focus
    secondary="#818cf8",    # Indigo 400 - analyst replies
    accent="#fbbf24",       # Amber 400 - charts and highlights
    foreground="#e2e8f0",   # Slate 200
    background="#020617",   # Slate 950
    success="#34d399",      # Emerald 400
    warning="#fb923c",      # Orange 400
    error="#f87171",        # Red 400
    surface="#0f172a",      # Slate 900
    panel="#111827",        # Gray 900
    dark=True,
    variables={
        "block-cursor-foreground": "#020617",
        "block-cursor-background": "#93c5fd",
        "block-cursor-text-style": "bold",
        "block-hover-background": "#1e293b 30%",

        "input-cursor-background": "#e2e8f0",
        "input-cursor-foreground": "#020617",
        "input-selection-background": "#3b82f6 30%",

        "border": "#334155",
        "border-blurred": "#1e293b",

        "scrollbar": "#1e293b",
        "scrollbar-hover": "#334155",
        "scrollbar-active": "#3b82f6",
        "scrollbar-background": "#0f172a",
        "scrollbar-corner-color": "#0f172a",

        "footer-foreground": "#cbd5e1",
        "footer-background": "#020617",
        "footer-key-foreground": "#fbbf24",
        "footer-key-background": "#1e293b",
        "footer-description-foreground": "#94a3b8",

        "text-muted": "#64748b",
        "text-disabled": "#334155",

        "link-color": "#60a5fa",
        "link-style": "underline",
        "link-color-hover": "#93c5fd",
        "link-style-hover": "bold",
    },
)
