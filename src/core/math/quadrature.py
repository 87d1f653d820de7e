"""
Quadrature — численное интегрирование функции одной переменной

Пять правил над равномерным разбиением [x0, x1] на n частей,
delta_x = (x1 - x0) / n:

    LEFT:        sum_{i=0}^{n-1} f(x0 + i*dx)                     * dx
    RIGHT:       sum_{i=1}^{n}   f(x0 + i*dx)                     * dx
    MIDPOINT:    sum_{i=0}^{n-1} f(x0 + (i + 0.5)*dx)             * dx
    TRAPEZOIDAL: sum_{i=0}^{n-1} (f(x0 + i*dx) + f(x0 + (i+1)*dx)) / 2 * dx
    SIMPSON:     (f(x0) + f(x1) + sum_{i=1}^{n-1} w_i * f(x0 + i*dx)) * dx / 3,
                 w_i = 2 для чётных i, 4 для нечётных

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Порядок суммирования последовательный (i по возрастанию): результат
   воспроизводим бит в бит
2. SIMPSON с нечётным n → ArgumentError (движок не корректирует n)
3. Исключения подынтегральной функции не перехватываются
4. NaN/Inf значения f(x) не фильтруются
5. Границы не переставляются: при x0 > x1 возвращается знаковая сумма
"""

from typing import Callable, Dict, Final

from src.core.domain.method import IntegrationMethod
from src.core.math.numerical_safeguards import is_valid_float

Integrand = Callable[[float], float]

SIMPSON_WEIGHT_EVEN: Final[float] = 2.0
SIMPSON_WEIGHT_ODD: Final[float] = 4.0


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ArgumentError(ValueError):
    """
    Нарушение предусловия квадратурного движка.

    Возникает при:
    1. partitions < 1 или partitions не целое
    2. SIMPSON с нечётным partitions
    3. Неконечных границах домена
    4. Неизвестном методе
    """
    pass


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def _validate_arguments(x0: float, x1: float, partitions: int) -> None:
    if isinstance(partitions, bool) or not isinstance(partitions, int):
        raise ArgumentError(f"partitions must be an integer, got {partitions!r}")

    if partitions < 1:
        raise ArgumentError(f"partitions must be >= 1, got {partitions}")

    if not (is_valid_float(x0) and is_valid_float(x1)):
        raise ArgumentError(f"Domain bounds must be finite, got [{x0}, {x1}]")


# =============================================================================
# ПРАВИЛА
# =============================================================================


def left_endpoint(f: Integrand, x0: float, x1: float, partitions: int) -> float:
    """Правило левых прямоугольников."""
    _validate_arguments(x0, x1, partitions)
    delta_x = (x1 - x0) / partitions
    total = 0.0
    for i in range(partitions):
        x = x0 + i * delta_x
        total += f(x)
    return total * delta_x


def right_endpoint(f: Integrand, x0: float, x1: float, partitions: int) -> float:
    """Правило правых прямоугольников."""
    _validate_arguments(x0, x1, partitions)
    delta_x = (x1 - x0) / partitions
    total = 0.0
    for i in range(1, partitions + 1):
        x = x0 + i * delta_x
        total += f(x)
    return total * delta_x


def midpoint(f: Integrand, x0: float, x1: float, partitions: int) -> float:
    """Правило средних прямоугольников."""
    _validate_arguments(x0, x1, partitions)
    delta_x = (x1 - x0) / partitions
    total = 0.0
    for i in range(partitions):
        x = x0 + (i + 0.5) * delta_x
        total += f(x)
    return total * delta_x


def trapezoidal(f: Integrand, x0: float, x1: float, partitions: int) -> float:
    """
    Правило трапеций.

    Каждая внутренняя точка вычисляется дважды (как правый край одного
    отрезка и левый край следующего): это сохраняет порядок суммирования
    по отрезкам.
    """
    _validate_arguments(x0, x1, partitions)
    delta_x = (x1 - x0) / partitions
    total = 0.0
    for i in range(partitions):
        x_left = x0 + i * delta_x
        x_right = x0 + (i + 1) * delta_x
        total += (f(x_left) + f(x_right)) / 2
    return total * delta_x


def simpson(f: Integrand, x0: float, x1: float, partitions: int) -> float:
    """
    Правило Симпсона (составное, 1/3).

    Точно для многочленов степени <= 3.

    Raises:
        ArgumentError: Если partitions нечётное
    """
    _validate_arguments(x0, x1, partitions)
    if partitions % 2 != 0:
        raise ArgumentError(
            f"Simpson's rule requires an even number of partitions, got {partitions}"
        )

    delta_x = (x1 - x0) / partitions
    total = f(x0) + f(x1)
    for i in range(1, partitions):
        x = x0 + i * delta_x
        weight = SIMPSON_WEIGHT_EVEN if i % 2 == 0 else SIMPSON_WEIGHT_ODD
        total += weight * f(x)
    return total * delta_x / 3


QUADRATURE_RULES: Final[Dict[IntegrationMethod, Callable[[Integrand, float, float, int], float]]] = {
    IntegrationMethod.LEFT: left_endpoint,
    IntegrationMethod.RIGHT: right_endpoint,
    IntegrationMethod.MIDPOINT: midpoint,
    IntegrationMethod.TRAPEZOIDAL: trapezoidal,
    IntegrationMethod.SIMPSON: simpson,
}


def integrate(
    f: Integrand,
    x0: float,
    x1: float,
    partitions: int,
    method: IntegrationMethod,
) -> float:
    """
    Приближённое значение интеграла f на [x0, x1].

    Args:
        f: Подынтегральная функция float -> float
        x0: Левая граница (ожидается x0 <= x1)
        x1: Правая граница
        partitions: Количество разбиений (>= 1, чётное для SIMPSON)
        method: Квадратурное правило

    Returns:
        Приближённое значение интеграла

    Raises:
        ArgumentError: Нарушение предусловий
        Exception: Любая ошибка f(x) пропагирует без изменений

    Examples:
        >>> integrate(lambda x: x, 0.0, 1.0, 4, IntegrationMethod.TRAPEZOIDAL)
        0.5
        >>> integrate(lambda x: x * x, 0.0, 1.0, 2, IntegrationMethod.SIMPSON)
        0.3333333333333333
    """
    rule = QUADRATURE_RULES.get(method)
    if rule is None:
        raise ArgumentError(f"Unsupported integration method: {method!r}")
    return rule(f, x0, x1, partitions)
