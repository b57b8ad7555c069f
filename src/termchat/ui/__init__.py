"""Terminal UI module for termchat.

Provides a Textual-based TUI around the chat session.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (transcript viewport, busy indicator, input bar)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- config.py: UI constants
- app.py: Render loop (user interaction flow)
"""

from .app import ChatApp, run_chat_tui
from .widgets import BusyIndicator, ChatInputBar, TranscriptView, render_transcript

__all__ = [
    "BusyIndicator",
    "ChatApp",
    "ChatInputBar",
    "TranscriptView",
    "render_transcript",
    "run_chat_tui",
]
