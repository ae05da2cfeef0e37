"""Logging setup and the JSON Lines issue log."""
