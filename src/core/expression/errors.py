"""
Expression Errors — ошибки разбора и компиляции выражений.
"""

from typing import Optional


class CompilationError(Exception):
    """
    Выражение не может быть скомпилировано в функцию одной переменной.

    Возникает при:
    1. Синтаксической ошибке (неожиданный символ, несбалансированные скобки)
    2. Ссылке на неизвестный идентификатор (кроме свободной переменной и констант)
    3. Вызове неизвестной функции или неверном числе аргументов
    4. Вложенности, превышающей глубину рекурсии разбора

    Attributes:
        diagnostic: Сообщение парсера без контекста
        expression: Исходный текст выражения
        position: Позиция (0-based) в тексте, если известна
    """

    def __init__(
        self,
        diagnostic: str,
        expression: str = "",
        position: Optional[int] = None,
    ):
        self.diagnostic = diagnostic
        self.expression = expression
        self.position = position
        if position is not None:
            message = f"{diagnostic} (at position {position})"
        else:
            message = diagnostic
        super().__init__(message)
