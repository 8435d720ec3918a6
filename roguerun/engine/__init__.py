"""Logging, settings and injectable runtime collaborators."""
