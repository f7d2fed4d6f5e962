"""Utility functions for configuration and logging."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG: Dict[str, Any] = {
    "data": {"servers_path": "data/servers.json"},
    "costs": {"horizon_days": 365, "forecast_months": 12, "mode": "prorated"},
    "display": {"locale": None, "currency_symbol": "¥"},
    "logging": {"level": "INFO"},
}


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load the main configuration file.

    Sections missing from the file are filled from ``DEFAULT_CONFIG``.

    Args:
        config_path: Optional path to config file. If not provided,
                     uses default config/config.yaml

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If the config file does not exist
    """
    if config_path is None:
        config_path = get_project_root() / "config" / "config.yaml"
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        loaded = yaml.safe_load(f) or {}

    config = {}
    for section, defaults in DEFAULT_CONFIG.items():
        config[section] = {**defaults, **(loaded.get(section) or {})}

    return config


def setup_logging(
    level: str = "INFO",
    log_format: Optional[str] = None,
    log_file: Optional[str] = None
) -> logging.Logger:
    """Set up logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Optional custom log format
        log_file: Optional log file path

    Returns:
        Configured logger
    """
    if log_format is None:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logger = logging.getLogger("hostcost")
    logger.setLevel(getattr(logging, level.upper()))

    # Repeated calls (CLI then dashboard rerun) must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(log_format))
        logger.addHandler(file_handler)

    return logger


def load_config_or_default(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load the config file, falling back to ``DEFAULT_CONFIG`` when it is missing.

    Args:
        config_path: Optional path to config file

    Returns:
        Configuration dictionary
    """
    try:
        return load_config(config_path)
    except FileNotFoundError as e:
        logging.getLogger(__name__).warning(f"{e}; using built-in defaults")
        return {section: dict(values) for section, values in DEFAULT_CONFIG.items()}
