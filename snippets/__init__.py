"""Reusable text snippets, persisted in UI display order."""
