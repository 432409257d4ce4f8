"""Reporters — plain text, Rich terminal, JSON."""
