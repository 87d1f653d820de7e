"""
Core math modules

Численные примитивы и квадратурные правила.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    is_close,
    is_valid_float,
    validate_finite,
)

# Quadrature
from src.core.math.quadrature import (
    QUADRATURE_RULES,
    SIMPSON_WEIGHT_EVEN,
    SIMPSON_WEIGHT_ODD,
    ArgumentError,
    integrate,
    left_endpoint,
    midpoint,
    right_endpoint,
    simpson,
    trapezoidal,
)

__all__ = [
    # Numerical Safeguards
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "is_close",
    "is_valid_float",
    "validate_finite",
    # Quadrature
    "QUADRATURE_RULES",
    "SIMPSON_WEIGHT_EVEN",
    "SIMPSON_WEIGHT_ODD",
    "ArgumentError",
    "integrate",
    "left_endpoint",
    "right_endpoint",
    "midpoint",
    "trapezoidal",
    "simpson",
]
