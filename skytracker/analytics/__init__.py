"""Derived views over the inventory store: dashboard, trade list, share payload."""
