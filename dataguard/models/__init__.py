"""Pydantic models for consent records, templates and dashboard metrics."""
