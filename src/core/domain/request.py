"""
IntegrationRequest — входные данные одного интегрирования.

Immutable Pydantic модель. Совместима с JSON Schema
(contracts/schema/integration_request.json).
"""

from pydantic import BaseModel, Field, field_validator

from .bounds import IntegrationBounds
from .method import IntegrationMethod


class IntegrationRequest(BaseModel):
    """
    Запрос на интегрирование выражения.

    partitions хранится как введено пользователем; коррекция нечётного
    значения для Simpson выполняется в pipeline (effective_partitions).
    """

    expression: str = Field(..., min_length=1, description="Выражение от свободной переменной")
    partitions: int = Field(..., gt=0, description="Количество разбиений")
    bounds: IntegrationBounds = Field(..., description="Домен [x0, x1]")
    method: IntegrationMethod = Field(..., description="Квадратурное правило")

    model_config = {"frozen": True}

    @field_validator("expression")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("expression must not be blank")
        return value

    def effective_partitions(self) -> int:
        """Число разбиений после коррекции (+1 для нечётного Simpson)."""
        if self.method.requires_even_partitions and self.partitions % 2 != 0:
            return self.partitions + 1
        return self.partitions
