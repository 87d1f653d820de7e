"""Interactive console session.

Диалог:
1. Выражение от x
2. Количество разбиений (целое > 0)
3. Границы домена [x0,x1] (обратный порядок → обмен)
4. Метод (меню 1–5)

Все ошибки ввода сообщаются одной строкой, и сессия завершается без
вычислений. Частичные результаты никогда не выводятся.
"""

import logging
from typing import Callable, Optional

from src.core.domain.bounds import IntegrationBounds, parse_bounds
from src.core.domain.method import IntegrationMethod
from src.core.domain.request import IntegrationRequest
from src.core.expression.errors import CompilationError
from src.orchestrator.pipeline import IntegrationPipeline

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

METHOD_MENU = (
    "1. Left Endpoint",
    "2. Right Endpoint",
    "3. Midpoint",
    "4. Trapezoidal",
    "5. Simpson's Rule",
)

SIMPSON_INCREMENT_NOTICE = (
    "Simpson's rule requires an even number of partitions. Incrementing partitions by 1."
)


class ConsoleSession:
    """
    Один интерактивный сеанс интегрирования.

    Ввод и вывод инжектируются (input_fn/output_fn), что позволяет
    использовать сессию вне терминала.
    """

    def __init__(
        self,
        input_fn: Optional[Callable[[], str]] = None,
        output_fn: Optional[Callable[[str], None]] = None,
        pipeline: Optional[IntegrationPipeline] = None,
    ):
        self._input = input_fn or input
        self._output = output_fn or print
        self.pipeline = pipeline or IntegrationPipeline()

    def _ask(self, prompt: str) -> str:
        self._output(prompt)
        try:
            return self._input()
        except EOFError:
            return ""

    def _read_partitions(self) -> Optional[int]:
        raw = self._ask("How many partitions would you like?")
        try:
            partitions = int(raw.strip())
        except ValueError:
            return None
        return partitions if partitions > 0 else None

    def _read_bounds(self) -> Optional[IntegrationBounds]:
        raw = self._ask("Enter domain bounds [x0,x1]: ")
        try:
            return parse_bounds(raw)
        except ValueError:
            return None

    def _read_method(self) -> Optional[IntegrationMethod]:
        self._output("Select an integration method:")
        for line in METHOD_MENU:
            self._output(line)
        try:
            raw = self._input()
        except EOFError:
            return None
        try:
            return IntegrationMethod.from_choice(int(raw.strip()))
        except ValueError:
            return None

    def run(self) -> int:
        """
        Проведение сеанса.

        Returns:
            Код завершения: 0 — успех, 1 — ошибка компиляции/вычисления,
            2 — некорректный ввод
        """
        expression = self._ask("Enter an equation in terms of x")

        partitions = self._read_partitions()
        if partitions is None:
            self._output("Invalid partitions value. Must be a positive integer.")
            return EXIT_USAGE

        bounds = self._read_bounds()
        if bounds is None:
            self._output("Invalid input format. Please enter values as [x0,x1].")
            return EXIT_USAGE

        method = self._read_method()
        if method is None:
            self._output("Invalid method selection.")
            return EXIT_USAGE

        try:
            function = self.pipeline.compile(expression)
        except CompilationError as e:
            self._output(f"Error compiling the equation: {e}")
            return EXIT_FAILURE

        request = IntegrationRequest(
            expression=expression,
            partitions=partitions,
            bounds=bounds,
            method=method,
        )
        if (
            self.pipeline.config.simpson_auto_increment
            and request.effective_partitions() != request.partitions
        ):
            self._output(SIMPSON_INCREMENT_NOTICE)

        try:
            result = self.pipeline.run(request, function=function)
        except Exception as e:
            logger.debug("Integration failed", exc_info=True)
            self._output(f"Error during integration: {e}")
            return EXIT_FAILURE

        self._output(result.summary_line())
        return EXIT_OK
