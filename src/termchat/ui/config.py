"""UI configuration constants.

Centralizes magic numbers and configuration values for the UI module.
"""

# Input box
INPUT_PLACEHOLDER = "Send a message..."
INPUT_MAX_LENGTH = 280

# Busy indicator refresh interval (seconds per spinner frame)
SPINNER_INTERVAL = 0.25

# Bottom help line
HELP_TEXT = "Press Enter to send message. Ctrl + c to quit. ↑/↓ to scroll up and down. F10 full screen"
