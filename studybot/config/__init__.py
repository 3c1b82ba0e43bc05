"""Configuration facade: provides `config` object and convenience globals."""

from .config import Config
from .constants import ENV_FILE  # re-export if someone needs it

# Build a singleton config instance
config = Config.from_env()

BOT_TOKEN = config.BOT_TOKEN
PER_PAGE = config.PER_PAGE
VERSION = config.VERSION
START_TIME = config.START_TIME

__all__ = [
    "Config",
    "config",
    "ENV_FILE",
    "BOT_TOKEN",
    "PER_PAGE",
    "VERSION",
    "START_TIME",
]
