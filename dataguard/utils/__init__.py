"""Shared utilities: logging, errors and serialization."""
