"""Consent store, editable drafts and the persistence ports behind them."""
