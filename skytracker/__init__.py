"""Skylander inventory tracker — catalog import, inventory store, trade and share views."""

__version__ = "1.0.0"
