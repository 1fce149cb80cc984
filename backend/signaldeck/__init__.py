"""SignalDeck - presentation client for a remote market-prediction service."""

__version__ = "2.0.0"
