"""Input handling for server data files."""

from .loader import ServerListLoader

__all__ = ["ServerListLoader"]
