"""Reflex presentation layer for the login form."""
