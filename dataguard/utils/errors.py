"""
Domain errors and helpers for consistent error message extraction.
"""

from __future__ import annotations


class DataGuardError(Exception):
    """Base class for errors raised by the consent store."""


class PartnerNotFoundError(DataGuardError):
    """Raised when a partner id does not match any stored record."""

    def __init__(self, partner_id: str) -> None:
        super().__init__(f"Partner not found: {partner_id}")
        self.partner_id = partner_id


class UnknownTemplateError(DataGuardError):
    """Raised when a template index is outside the template list."""

    def __init__(self, index: int) -> None:
        super().__init__(f"Unknown partner template: {index}")
        self.index = index


class InvalidDraftError(DataGuardError):
    """Raised when a draft cannot be saved as a partner policy."""


def get_error_message(error: BaseException | object) -> str:
    """
    Safely extract an error message from an unknown error type.

    Exceptions without a message fall back to their class name.
    """
    if isinstance(error, BaseException):
        return str(error) or type(error).__name__
    return "Unknown error"
