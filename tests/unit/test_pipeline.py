"""
Тесты Integration Pipeline и OrchestratorConfig

Проверяемые инварианты:
1. normalize → compile → integrate дают ожидаемый результат
2. Обратный порядок границ меняется местами (не ошибка)
3. Нечётный Simpson корректируется (+1) или отклоняется движком
4. CompilationError и ошибки вычисления пропагируют
5. Конфигурация из окружения
"""

import logging
import math

import pytest

from src.core.domain import IntegrationBounds, IntegrationMethod, IntegrationRequest
from src.core.expression import CompilationError
from src.core.math import ArgumentError
from src.orchestrator import IntegrationPipeline, OrchestratorConfig


def _request(expression="x", partitions=4, x0=0.0, x1=1.0, method=IntegrationMethod.TRAPEZOIDAL):
    return IntegrationRequest(
        expression=expression,
        partitions=partitions,
        bounds=IntegrationBounds(x0=x0, x1=x1),
        method=method,
    )


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def pipeline():
    return IntegrationPipeline()


# =============================================================================
# ТЕСТЫ: PIPELINE
# =============================================================================


class TestIntegrationPipeline:
    """Тесты IntegrationPipeline.run."""

    def test_trapezoidal_linear(self, pipeline):
        result = pipeline.run(_request())

        assert result.area == pytest.approx(0.5)
        assert result.partitions_used == 4
        assert not result.bounds_swapped

    def test_normalized_expression_recorded(self, pipeline):
        result = pipeline.run(_request(expression="x^2", partitions=2, method=IntegrationMethod.SIMPSON))

        assert result.normalized_expression == "pow(x, 2)"
        assert result.expression == "x^2"
        assert abs(result.area - 1.0 / 3.0) <= 1e-12

    def test_reversed_bounds_swapped(self, pipeline):
        """f(x)=1 на [1,0] после нормализации == на [0,1] == 1.0"""
        reversed_result = pipeline.run(_request(expression="1", x0=1.0, x1=0.0))
        ordered_result = pipeline.run(_request(expression="1", x0=0.0, x1=1.0))

        assert reversed_result.area == pytest.approx(1.0)
        assert reversed_result.area == ordered_result.area
        assert reversed_result.bounds_swapped
        assert reversed_result.bounds == IntegrationBounds(x0=0.0, x1=1.0)

    def test_simpson_odd_incremented(self, pipeline):
        result = pipeline.run(_request(expression="x^2", partitions=3, method=IntegrationMethod.SIMPSON))

        assert result.partitions_requested == 3
        assert result.partitions_used == 4
        assert result.partitions_adjusted
        assert result.area == pytest.approx(1.0 / 3.0, abs=1e-12)

    def test_simpson_increment_logged(self, pipeline, caplog):
        caplog.set_level(logging.INFO, logger="src.orchestrator.pipeline")

        pipeline.run(_request(partitions=5, method=IntegrationMethod.SIMPSON))

        assert "Simpson's rule requires an even number of partitions: 5 -> 6" in caplog.text

    def test_simpson_odd_rejected_without_increment(self):
        pipeline = IntegrationPipeline(OrchestratorConfig(simpson_auto_increment=False))

        with pytest.raises(ArgumentError, match="even number of partitions"):
            pipeline.run(_request(partitions=3, method=IntegrationMethod.SIMPSON))

    def test_other_methods_not_incremented(self, pipeline):
        result = pipeline.run(_request(partitions=3, method=IntegrationMethod.MIDPOINT))
        assert result.partitions_used == 3

    def test_compilation_error_propagates(self, pipeline):
        with pytest.raises(CompilationError, match="Unknown identifier 'y'"):
            pipeline.run(_request(expression="y + 1"))

    def test_evaluation_error_propagates(self, pipeline):
        with pytest.raises(ZeroDivisionError):
            pipeline.run(_request(expression="1/x", method=IntegrationMethod.LEFT))

    def test_precompiled_function_used(self, pipeline):
        function = pipeline.compile("2*x")
        result = pipeline.run(_request(expression="2*x"), function=function)

        assert result.area == pytest.approx(1.0)

    def test_custom_variable(self):
        pipeline = IntegrationPipeline(OrchestratorConfig(variable="t"))
        result = pipeline.run(_request(expression="3*t^2", partitions=2, method=IntegrationMethod.SIMPSON))

        assert result.area == pytest.approx(1.0, abs=1e-12)

    def test_independent_runs(self, pipeline):
        """Pipeline без состояния: повторный запуск даёт тот же результат."""
        request = _request(expression="sin(x)*exp(x)", partitions=50, method=IntegrationMethod.MIDPOINT)
        assert pipeline.run(request).area == pipeline.run(request).area

    def test_call_base_with_space_compiles(self, pipeline):
        """normalize не портит вызов функции с пробелом перед скобкой."""
        function = pipeline.compile("sin (x)^2")
        assert function(1.0) == pytest.approx(math.sin(1.0) ** 2, rel=1e-12)

    def test_long_sum_integrated(self, pipeline):
        result = pipeline.run(_request(expression="+".join(["x"] * 1500)))
        assert result.area == pytest.approx(750.0)

    def test_deep_nesting_is_compilation_error(self, pipeline):
        with pytest.raises(CompilationError, match="nested too deeply"):
            pipeline.compile("(" * 600 + "x" + ")" * 600)

    def test_degenerate_domain_warning(self, pipeline, caplog):
        caplog.set_level(logging.WARNING, logger="src.orchestrator.pipeline")
        result = pipeline.run(_request(x0=2.0, x1=2.0))

        assert result.area == 0.0
        assert "Degenerate domain [2.0, 2.0]" in caplog.text

    def test_regular_domain_no_warning(self, pipeline, caplog):
        caplog.set_level(logging.WARNING, logger="src.orchestrator.pipeline")
        pipeline.run(_request())

        assert "Degenerate domain" not in caplog.text


# =============================================================================
# ТЕСТЫ: CONFIG
# =============================================================================


class TestOrchestratorConfig:
    """Тесты OrchestratorConfig."""

    def test_defaults(self):
        config = OrchestratorConfig.from_env({})

        assert config == OrchestratorConfig()
        assert config.variable == "x"
        assert config.simpson_auto_increment is True
        assert config.log_level == "WARNING"

    def test_from_env(self):
        config = OrchestratorConfig.from_env(
            {
                "NUMINT_VARIABLE": "t",
                "NUMINT_SIMPSON_AUTO_INCREMENT": "off",
                "NUMINT_LOG_LEVEL": "debug",
            }
        )

        assert config.variable == "t"
        assert config.simpson_auto_increment is False
        assert config.log_level == "DEBUG"

    def test_invalid_bool(self):
        with pytest.raises(ValueError, match="NUMINT_SIMPSON_AUTO_INCREMENT"):
            OrchestratorConfig.from_env({"NUMINT_SIMPSON_AUTO_INCREMENT": "maybe"})

    def test_invalid_variable(self):
        with pytest.raises(ValueError, match="variable must be an identifier"):
            OrchestratorConfig(variable="2x")

    def test_invalid_log_level(self):
        with pytest.raises(ValueError, match="log_level"):
            OrchestratorConfig(log_level="LOUD")

    def test_immutable(self):
        config = OrchestratorConfig()
        with pytest.raises(AttributeError):
            config.variable = "t"
