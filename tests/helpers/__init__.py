"""Shared helpers for the modpack test suite."""
