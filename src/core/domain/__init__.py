"""
Domain models and value objects.

Contains integration entities: IntegrationMethod, IntegrationBounds,
IntegrationRequest, IntegrationResult.
"""

from src.core.domain.bounds import IntegrationBounds, parse_bounds
from src.core.domain.method import IntegrationMethod
from src.core.domain.request import IntegrationRequest
from src.core.domain.result import IntegrationResult

__all__ = [
    # Method
    "IntegrationMethod",
    # Bounds
    "IntegrationBounds",
    "parse_bounds",
    # Request / Result
    "IntegrationRequest",
    "IntegrationResult",
]
