"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout - Transcript over input
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Transcript Viewport
   ============================================ */
#transcript {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

#transcript-text {
    width: 100%;
    color: $foreground;
}

/* ============================================
   Busy Indicator
   ============================================ */
#busy-indicator {
    height: 1;
    padding: 0 1;
    color: $secondary;
    text-style: bold;
}

/* ============================================
   Input Bar
   ============================================ */
#chat-input-bar {
    height: auto;
    padding: 0 1;
}

#chat-input {
    width: 1fr;
    border: tall $border;
    background: $surface;

    &:focus {
        border: tall $primary;
    }
}

#help-line {
    height: 1;
    padding: 0 1;
    color: $text-muted;
}

/* ============================================
   Full screen transcript (F10)
   ============================================ */
Screen.-fullscreen Header,
Screen.-fullscreen Footer,
Screen.-fullscreen #help-line {
    display: none;
}

Screen.-fullscreen #transcript {
    border: none;
    padding: 0;
}

/* ============================================
   Scrollbar Styling
   ============================================ */
* {
    scrollbar-background: $panel;
    scrollbar-color: $surface-lighten-1;
    scrollbar-color-hover: $primary 50%;
    scrollbar-color-active: $primary;
    scrollbar-size: 1 1;
}

/* ============================================
   Header / Footer
   ============================================ */
Header {
    background: $panel;
    color: $foreground;
    dock: top;
    height: 1;
}

HeaderTitle {
    color: $primary;
    text-style: bold;
}

Footer {
    background: $panel;
    height: auto;
}

FooterKey {
    background: $surface;
    color: $foreground;
    padding: 0 1;

    & > .footer-key--key {
        background: $primary 80%;
        color: $background;
        text-style: bold;
    }
}
"""
