"""Gatehouse: login form state machine with session-aware redirects."""

__version__ = "0.1.0"
