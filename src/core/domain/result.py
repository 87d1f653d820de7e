"""
IntegrationResult — результат интегрирования с диагностическим контекстом.

Совместим с JSON Schema (contracts/schema/integration_result.json).
"""

from typing import Any, Dict

from pydantic import BaseModel, Field

from src.core.math.numerical_safeguards import is_valid_float

from .bounds import IntegrationBounds
from .method import IntegrationMethod


class IntegrationResult(BaseModel):
    """Приближённое значение интеграла."""

    area: float = Field(..., description="Приближённое значение интеграла")

    # Контекст вычисления
    expression: str = Field(..., description="Исходное выражение")
    normalized_expression: str = Field(..., description="Выражение после normalizer")
    method: IntegrationMethod
    partitions_requested: int = Field(..., gt=0)
    partitions_used: int = Field(..., gt=0)
    bounds: IntegrationBounds = Field(..., description="Нормализованный домен (x0 <= x1)")
    bounds_swapped: bool = False

    model_config = {"frozen": True}

    @property
    def partitions_adjusted(self) -> bool:
        return self.partitions_used != self.partitions_requested

    def summary_line(self) -> str:
        return (
            f"The approximate area under the curve using {self.method.display_name} "
            f"method is: {self.area}"
        )

    def to_payload(self) -> Dict[str, Any]:
        """
        JSON-совместимый dict (integration_result контракт).

        NaN/Inf area → None: JSON не представляет неконечные числа.
        """
        payload = self.model_dump(mode="json")
        payload["area"] = self.area if is_valid_float(self.area) else None
        return payload
