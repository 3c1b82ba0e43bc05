"""Browse curriculum study materials from Telegram."""

__version__ = "0.1.0"
