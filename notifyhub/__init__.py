"""Deliver alert messages through one configured notification channel."""

__version__ = "0.1.0"
