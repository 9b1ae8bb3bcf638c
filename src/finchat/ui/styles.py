"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout - 2x2 Grid
   ============================================ */
Screen {
    layout: grid;
    grid-size: 2 2;
    grid-columns: 3fr 2fr;
    grid-rows: 1fr auto;
    background: $background;
}

/* ============================================
   Panels - shared frame, per-panel accent
   ============================================ */
#chat-history, #chart-panel, #debug-panel {
    background: $panel;
    padding: 0 1;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
}

#chat-history {
    height: 100%;
    border: round $primary 60%;
    border-title-color: $primary;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }

    &.-maximized {
        column-span: 2;
    }
}

#right-panel {
    height: 100%;
}

#chart-panel {
    height: 1fr;
    min-height: 10;
    border: round $accent 60%;
    border-title-color: $accent;

    &:focus {
        border: round $accent;
    }
}

#chart-image {
    width: auto;
    height: auto;
}

#chart-placeholder {
    color: $text-muted;
    text-style: italic;
    padding: 1;
}

#debug-panel {
    display: none;
    height: 12;
    margin-top: 1;
    border: round $warning 60%;
    border-title-color: $warning;
}

/* ============================================
   Bottom Bar - Examples, Typing, Input
   ============================================ */
#bottom-bar {
    column-span: 2;
    height: auto;
    padding: 0 1;
    background: $panel;
    border-top: solid $border;
}

ExamplePrompts {
    height: auto;
    padding: 1 0 0 0;

    & .examples-title {
        width: auto;
        color: $text-muted;
        text-style: bold;
        padding: 1 1 0 0;
    }

    & Button {
        width: 1fr;
        margin: 0 1 0 0;
    }
}

TypingIndicator {
    height: 1;
    margin: 1 0 0 0;

    & .typing-label {
        width: auto;
        color: $secondary;
        text-style: italic;
        padding: 0 1 0 0;
    }

    & LoadingIndicator {
        width: 12;
        height: 1;
        color: $secondary;
        background: transparent;
    }
}

ChatInputBar {
    height: 5;
    margin: 1 0;
    border: round $primary 60%;
    background: $panel;

    &:focus-within {
        border: round $primary;
    }

    &.-loading {
        border: round $border;
    }
}

#chat-input {
    width: 1fr;
    height: 3;
    border: none;
    padding: 0 1;
    background: transparent;
}

#send-btn {
    width: 10;
    height: 3;
    margin: 0 0 0 1;
    border: tall $primary;
    background: $primary;
    color: $background;
    text-style: bold;

    &:hover {
        background: $primary-lighten-1;
    }

    &:disabled {
        background: $surface;
        border: tall $surface;
    }
}

/* ============================================
   Chat Messages
   ============================================ */
.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 1 2;
    background: transparent;
}

.user-message {
    border-right: tall $primary;
    background: $primary 12%;

    & .message-header {
        color: $primary;
        text-style: bold;
        text-align: right;
    }
}

.assistant-message {
    border-left: tall $secondary;
    background: $secondary 8%;

    & .message-header {
        color: $secondary;
        text-style: bold;
    }
}

.error-message {
    border-left: tall $error;
    background: $error 10%;

    & .message-header {
        color: $error;
    }
}

.message-content {
    height: auto;
    padding: 0;
    margin: 0;
    color: $foreground;
}

.message-chart {
    height: auto;
    margin-top: 1;
    color: $accent;
    text-style: italic;
}

Markdown {
    margin: 0;
    padding: 0;
}

Toast {
    background: $surface;
    border: tall $border;
    padding: 0 1;

    &.-error {
        border: tall $error;
    }

    &.-warning {
        border: tall $warning;
    }
}
"""
