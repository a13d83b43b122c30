"""Labyrinth: a maze-building server and a blind maze-solving client."""

__version__ = "1.0.0"
