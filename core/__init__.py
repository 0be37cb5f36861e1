"""Shared infrastructure: configuration, logging, paths, storage, commands."""
