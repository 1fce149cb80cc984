"""
SignalDeck Services

Service layer: the prediction service client and the presentation
pipeline. Each service has a defined interface (contract) and
implementation.
"""

from signaldeck.services.base import BaseService

__all__ = ["BaseService"]
