"""Anagram transformer: letter matching and phase choreography between anagram texts."""

__version__ = "0.1.0"
