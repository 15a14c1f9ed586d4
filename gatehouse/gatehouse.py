"""Reflex entry point (``reflex run`` imports ``gatehouse.gatehouse``)."""

from gatehouse.ui.app import app

__all__ = ["app"]
