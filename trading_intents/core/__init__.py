"""Core infrastructure modules for trading intents."""

from .config import IntentSettings, load_settings
from .logging import setup_logging

__all__ = ["IntentSettings", "load_settings", "setup_logging"]
