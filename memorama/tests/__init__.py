"""Memorama test suite."""
