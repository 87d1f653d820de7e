"""Integration pipeline: normalize → compile → normalize domain → integrate.

Порядок шагов:
1. Normalizer: "^" → pow()
2. Compiler: текст → CompiledFunction (CompilationError пропагирует)
3. Домен: обратный порядок границ → обмен (не ошибка),
   нулевая ширина → предупреждение в лог
4. Разбиения: нечётный Simpson → +1 (если включено в конфигурации)
5. Quadrature engine: ArgumentError и ошибки f(x) пропагируют
"""

import logging
from typing import Optional

from src.core.domain.request import IntegrationRequest
from src.core.domain.result import IntegrationResult
from src.core.expression.compiler import CompiledFunction, compile_expression
from src.core.expression.normalizer import normalize
from src.core.math.numerical_safeguards import is_close
from src.core.math.quadrature import integrate
from src.orchestrator.config import OrchestratorConfig

logger = logging.getLogger(__name__)


class IntegrationPipeline:
    """Stateless pipeline: каждый вызов run() независим."""

    def __init__(self, config: Optional[OrchestratorConfig] = None):
        self.config = config or OrchestratorConfig()

    def compile(self, expression: str) -> CompiledFunction:
        """
        Нормализация и компиляция выражения.

        Raises:
            CompilationError: Выражение не компилируется
        """
        normalized = normalize(expression)
        if normalized != expression:
            logger.debug(f"Normalized expression {expression!r} -> {normalized!r}")

        function = compile_expression(normalized, variable=self.config.variable)
        logger.debug(f"Compiled expression {normalized!r} in variable {self.config.variable!r}")
        return function

    def partitions_for(self, request: IntegrationRequest) -> int:
        """Число разбиений, передаваемое движку."""
        if not self.config.simpson_auto_increment:
            return request.partitions

        partitions = request.effective_partitions()
        if partitions != request.partitions:
            logger.info(
                f"Simpson's rule requires an even number of partitions: "
                f"{request.partitions} -> {partitions}"
            )
        return partitions

    def run(
        self,
        request: IntegrationRequest,
        function: Optional[CompiledFunction] = None,
    ) -> IntegrationResult:
        """
        Выполнение интегрирования.

        Args:
            request: Запрос на интегрирование
            function: Уже скомпилированное выражение request.expression
                (если None — компилируется здесь)

        Returns:
            IntegrationResult

        Raises:
            CompilationError: Выражение не компилируется
            ArgumentError: Нарушение предусловий движка
            Exception: Ошибки вычисления f(x) пропагируют без изменений
        """
        if function is None:
            function = self.compile(request.expression)

        bounds = request.bounds.normalized()
        if request.bounds.is_reversed:
            logger.debug(f"Swapped reversed bounds [{request.bounds.x0}, {request.bounds.x1}]")
        if is_close(bounds.width, 0.0):
            logger.warning(f"Degenerate domain [{bounds.x0}, {bounds.x1}]: the integral is zero")

        partitions = self.partitions_for(request)

        logger.debug(
            f"Integrating {function.source!r} over [{bounds.x0}, {bounds.x1}] "
            f"with {request.method.value} (partitions={partitions})"
        )
        area = integrate(function, bounds.x0, bounds.x1, partitions, request.method)

        return IntegrationResult(
            area=area,
            expression=request.expression,
            normalized_expression=function.source,
            method=request.method,
            partitions_requested=request.partitions,
            partitions_used=partitions,
            bounds=bounds,
            bounds_swapped=request.bounds.is_reversed,
        )
