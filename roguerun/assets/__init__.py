"""Bundled JSON content."""
