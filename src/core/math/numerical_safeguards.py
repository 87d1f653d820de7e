"""
Numerical Safeguards — проверки входных float значений

Модуль содержит проверки конечности и сравнения float с учётом машинной
точности, общие для моделей домена и квадратурного движка.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Границы домена интегрирования всегда конечны (не NaN/Inf)
2. Float сравнения всегда учитывают машинную точность
3. Значения подынтегральной функции НЕ санитизируются: NaN/Inf, полученные
   при вычислении f(x), пропагируют в результат без изменений
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Относительная толерантность для сравнения результатов интегрирования
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Абсолютная толерантность (значения около нуля)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12


# =============================================================================
# ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное, False если NaN или Inf
    """
    return math.isfinite(value)


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с учётом машинной точности.

    Алгоритм:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Examples:
        >>> is_close(1.0 / 3.0, 0.3333333333333333)
        True
        >>> is_close(0.0, 1e-13)
        True  # abs diff < abs_tol
        >>> is_close(0.5, 0.25)
        False
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def validate_finite(value: float, name: str) -> float:
    """
    Валидация, что значение — конечный float.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value как float

    Raises:
        ValueError: Если value NaN/Inf или не приводится к float
    """
    try:
        result = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}")

    if not is_valid_float(result):
        raise ValueError(f"{name} must be a finite float (not NaN/Inf), got {value}")

    return result
