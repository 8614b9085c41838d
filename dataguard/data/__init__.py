"""Bundled reference data (partner templates) and its loader."""
