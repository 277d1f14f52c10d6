"""Headless services backing the preference tree (no Qt imports here)."""
