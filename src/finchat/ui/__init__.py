"""Terminal UI module for finchat.

Provides a Textual-based TUI for chatting with the analysis service.

Module structure (Parnas principle - each module hides a design decision):
- widgets.py: Custom widgets (input history, chat rendering, charts, log)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- images.py: Chart decoding and storage
- formatting.py: Message headers and markdown rendering
- app.py: Application orchestration (user interaction flow)
"""

from .app import FinancialAnalystApp, run_textual_tui
from .config import LogLevel
from .images import ChartDecodeError, decode_chart, save_chart, write_chart
from .widgets import (
    ChartPanel,
    ChatHistoryWidget,
    ChatInputBar,
    DebugPanel,
    ExamplePrompts,
    TypingIndicator,
)

__all__ = [
    "ChartDecodeError",
    "ChartPanel",
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "ExamplePrompts",
    "FinancialAnalystApp",
    "LogLevel",
    "TypingIndicator",
    "decode_chart",
    "run_textual_tui",
    "save_chart",
    "write_chart",
]
