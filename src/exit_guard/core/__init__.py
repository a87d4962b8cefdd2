"""Configuration loading and the async entry point."""
