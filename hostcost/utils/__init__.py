"""Utility functions."""

from .helpers import load_config, setup_logging
from .i18n import DisplayConfig, resolve_locale, translate_for

__all__ = ["DisplayConfig", "load_config", "resolve_locale", "setup_logging", "translate_for"]
