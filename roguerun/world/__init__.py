"""Spatial checks for pickups and shrines."""
