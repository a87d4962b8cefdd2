"""Bundled JSON schemas and validation helpers."""
