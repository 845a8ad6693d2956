"""Shared logging, errors, constants and types."""
