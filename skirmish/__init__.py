"""Skirmish: turn-based combat resolution and AI decision engine."""

__version__ = "0.1.0"
