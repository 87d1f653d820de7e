"""
Contract Validation Module

Модуль для валидации JSON контрактов запросов и результатов интегрирования.
"""

from .validators import (
    ContractValidator,
    IntegrationRequestValidator,
    IntegrationResultValidator,
    SchemaLoader,
    validate_integration_request,
    validate_integration_result,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "IntegrationRequestValidator",
    "IntegrationResultValidator",
    # Functions
    "validate_integration_request",
    "validate_integration_result",
]
