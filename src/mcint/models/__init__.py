"""Data models for Monte Carlo integration."""

from .request import IntegrationRequest
from .result import EstimationResult

__all__ = [
    "EstimationResult",
    "IntegrationRequest",
]
