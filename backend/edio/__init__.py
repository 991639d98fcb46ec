"""Edio collaboration backend."""
