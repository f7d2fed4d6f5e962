"""Hosting cost tracker: amortize server subscriptions into spend figures."""

__version__ = "1.0.0"
