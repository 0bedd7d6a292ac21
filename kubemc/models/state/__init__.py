"""Persisted application state."""
