"""Presentation outputs built on the engine's letter records."""
