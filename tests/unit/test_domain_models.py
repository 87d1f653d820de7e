"""
Tests for Domain Models

Покрывает:
- IntegrationMethod (меню 1–5, разбор по имени)
- IntegrationBounds (валидация, нормализация порядка, parse_bounds)
- IntegrationRequest (валидация, коррекция Simpson)
- IntegrationResult (вывод, JSON payload)
"""

import math

import pytest
from pydantic import ValidationError

from src.core.domain import (
    IntegrationBounds,
    IntegrationMethod,
    IntegrationRequest,
    IntegrationResult,
    parse_bounds,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def valid_request_data():
    """Валидные данные запроса."""
    return {
        "expression": "x^2",
        "partitions": 4,
        "bounds": {"x0": 0.0, "x1": 1.0},
        "method": "SIMPSON",
    }


@pytest.fixture
def sample_result():
    return IntegrationResult(
        area=0.5,
        expression="x",
        normalized_expression="x",
        method=IntegrationMethod.TRAPEZOIDAL,
        partitions_requested=4,
        partitions_used=4,
        bounds=IntegrationBounds(x0=0.0, x1=1.0),
    )


# =============================================================================
# INTEGRATION METHOD
# =============================================================================


class TestIntegrationMethod:
    """Тесты IntegrationMethod."""

    @pytest.mark.parametrize(
        "choice, expected",
        [
            (1, IntegrationMethod.LEFT),
            (2, IntegrationMethod.RIGHT),
            (3, IntegrationMethod.MIDPOINT),
            (4, IntegrationMethod.TRAPEZOIDAL),
            (5, IntegrationMethod.SIMPSON),
        ],
    )
    def test_from_choice(self, choice, expected):
        assert IntegrationMethod.from_choice(choice) is expected

    @pytest.mark.parametrize("choice", [0, 6, -1, True, "1"])
    def test_from_choice_invalid(self, choice):
        with pytest.raises(ValueError, match="Method choice must be"):
            IntegrationMethod.from_choice(choice)

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("simpson", IntegrationMethod.SIMPSON),
            ("Trapezoidal", IntegrationMethod.TRAPEZOIDAL),
            (" 3 ", IntegrationMethod.MIDPOINT),
            ("LEFT", IntegrationMethod.LEFT),
        ],
    )
    def test_parse(self, text, expected):
        assert IntegrationMethod.parse(text) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown integration method"):
            IntegrationMethod.parse("gauss")

    def test_display_name(self):
        assert IntegrationMethod.SIMPSON.display_name == "Simpson"
        assert IntegrationMethod.MIDPOINT.display_name == "Midpoint"

    def test_only_simpson_requires_even(self):
        assert [m for m in IntegrationMethod if m.requires_even_partitions] == [
            IntegrationMethod.SIMPSON
        ]


# =============================================================================
# INTEGRATION BOUNDS
# =============================================================================


class TestIntegrationBounds:
    """Тесты IntegrationBounds и parse_bounds."""

    def test_normalized_keeps_ordered(self):
        bounds = IntegrationBounds(x0=0.0, x1=1.0)
        assert bounds.normalized() is bounds
        assert not bounds.is_reversed

    def test_normalized_swaps_reversed(self):
        bounds = IntegrationBounds(x0=1.0, x1=0.0)

        assert bounds.is_reversed
        assert bounds.normalized() == IntegrationBounds(x0=0.0, x1=1.0)

    def test_equal_bounds_not_reversed(self):
        bounds = IntegrationBounds(x0=2.0, x1=2.0)
        assert not bounds.is_reversed
        assert bounds.width == 0.0

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_rejected(self, value):
        with pytest.raises(ValidationError, match="finite"):
            IntegrationBounds(x0=value, x1=1.0)

    def test_immutable(self):
        bounds = IntegrationBounds(x0=0.0, x1=1.0)
        with pytest.raises(ValidationError):
            bounds.x0 = 5.0

    @pytest.mark.parametrize(
        "text, x0, x1",
        [
            ("[0,1]", 0.0, 1.0),
            ("[ -1.5 , 2 ]", -1.5, 2.0),
            ("3,4", 3.0, 4.0),
            ("[1e-3,2.5E1]", 0.001, 25.0),
            ("[1,0]", 1.0, 0.0),
        ],
    )
    def test_parse_bounds(self, text, x0, x1):
        bounds = parse_bounds(text)
        assert (bounds.x0, bounds.x1) == (x0, x1)

    @pytest.mark.parametrize(
        "text",
        ["", "[]", "[0]", "[0,1,2]", "[a,b]", "[0,]", "[0;1]", "[nan,1]", "[0,inf]"],
    )
    def test_parse_bounds_invalid(self, text):
        with pytest.raises(ValueError):
            parse_bounds(text)


# =============================================================================
# INTEGRATION REQUEST
# =============================================================================


class TestIntegrationRequest:
    """Тесты IntegrationRequest."""

    def test_from_dict(self, valid_request_data):
        request = IntegrationRequest.model_validate(valid_request_data)

        assert request.method is IntegrationMethod.SIMPSON
        assert request.bounds == IntegrationBounds(x0=0.0, x1=1.0)

    @pytest.mark.parametrize("partitions", [0, -3])
    def test_partitions_positive(self, valid_request_data, partitions):
        valid_request_data["partitions"] = partitions
        with pytest.raises(ValidationError):
            IntegrationRequest.model_validate(valid_request_data)

    @pytest.mark.parametrize("expression", ["", "   "])
    def test_expression_required(self, valid_request_data, expression):
        valid_request_data["expression"] = expression
        with pytest.raises(ValidationError):
            IntegrationRequest.model_validate(valid_request_data)

    def test_unknown_method(self, valid_request_data):
        valid_request_data["method"] = "GAUSS"
        with pytest.raises(ValidationError):
            IntegrationRequest.model_validate(valid_request_data)

    def test_effective_partitions_simpson_odd(self, valid_request_data):
        valid_request_data["partitions"] = 3
        request = IntegrationRequest.model_validate(valid_request_data)
        assert request.effective_partitions() == 4

    def test_effective_partitions_simpson_even(self, valid_request_data):
        request = IntegrationRequest.model_validate(valid_request_data)
        assert request.effective_partitions() == 4

    def test_effective_partitions_other_methods_unchanged(self, valid_request_data):
        valid_request_data["partitions"] = 3
        for method in ("LEFT", "RIGHT", "MIDPOINT", "TRAPEZOIDAL"):
            valid_request_data["method"] = method
            request = IntegrationRequest.model_validate(valid_request_data)
            assert request.effective_partitions() == 3


# =============================================================================
# INTEGRATION RESULT
# =============================================================================


class TestIntegrationResult:
    """Тесты IntegrationResult."""

    def test_summary_line(self, sample_result):
        assert sample_result.summary_line() == (
            "The approximate area under the curve using Trapezoidal method is: 0.5"
        )

    def test_partitions_adjusted(self, sample_result):
        assert not sample_result.partitions_adjusted

        adjusted = sample_result.model_copy(update={"partitions_requested": 3})
        assert adjusted.partitions_adjusted

    def test_payload(self, sample_result):
        payload = sample_result.to_payload()

        assert payload["area"] == 0.5
        assert payload["method"] == "TRAPEZOIDAL"
        assert payload["bounds"] == {"x0": 0.0, "x1": 1.0}
        assert payload["bounds_swapped"] is False

    def test_payload_non_finite_area(self, sample_result):
        result = sample_result.model_copy(update={"area": math.nan})
        assert result.to_payload()["area"] is None
