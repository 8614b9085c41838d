"""DataGuard: personal data and consent management dashboard."""

__version__ = "0.1.0"
