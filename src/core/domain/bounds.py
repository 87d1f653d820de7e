"""
IntegrationBounds — границы домена интегрирования [x0, x1].

Immutable Pydantic модель. Обратный порядок границ не является ошибкой:
normalized() меняет их местами.
"""

import re

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from src.core.math.numerical_safeguards import validate_finite


class IntegrationBounds(BaseModel):
    """Границы домена интегрирования."""

    x0: float = Field(..., description="Левая граница")
    x1: float = Field(..., description="Правая граница")

    model_config = {"frozen": True}

    @field_validator("x0", "x1")
    @classmethod
    def _finite(cls, value: float, info: ValidationInfo) -> float:
        return validate_finite(value, info.field_name)

    @property
    def is_reversed(self) -> bool:
        return self.x0 > self.x1

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    def normalized(self) -> "IntegrationBounds":
        """
        Границы с гарантией x0 <= x1.

        Returns:
            self если порядок уже верный, иначе новая модель с обменом границ
        """
        if self.is_reversed:
            return IntegrationBounds(x0=self.x1, x1=self.x0)
        return self


_BOUNDS_SPLIT_RE = re.compile(r"\s*,\s*")


def parse_bounds(text: str) -> IntegrationBounds:
    """
    Разбор границ из текста вида "[x0,x1]" (скобки необязательны).

    Args:
        text: Текст границ, например "[0, 3.5]" или "-1,1"

    Returns:
        IntegrationBounds (без нормализации порядка)

    Raises:
        ValueError: Если не ровно два конечных числа

    Examples:
        >>> parse_bounds("[0,1]")
        IntegrationBounds(x0=0.0, x1=1.0)
        >>> parse_bounds(" 2 , -1 ").is_reversed
        True
    """
    stripped = text.strip().strip("[]")
    parts = _BOUNDS_SPLIT_RE.split(stripped.strip())

    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Invalid bounds format {text!r}. Please enter values as [x0,x1].")

    try:
        x0 = float(parts[0])
        x1 = float(parts[1])
    except ValueError:
        raise ValueError(f"Invalid bounds format {text!r}. Please enter values as [x0,x1].")

    return IntegrationBounds(
        x0=validate_finite(x0, "x0"),
        x1=validate_finite(x1, "x1"),
    )
