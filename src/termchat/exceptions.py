"""Exception hierarchy for termchat.

Provider and transport failures during a chat are not raised through
here; they are captured as completion results and shown inline.
"""


class TermchatError(Exception):
    """Base exception for termchat errors."""

    pass


class ConfigError(TermchatError):
    """Raised when the configuration file is missing or malformed."""

    pass


class ProviderError(TermchatError, ValueError):
    """Raised when an unsupported completion provider is requested."""

    pass
