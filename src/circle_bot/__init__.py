"""Community circles bot: circle directory, join/leave buttons and admin commands."""

__version__ = "0.1.0"
