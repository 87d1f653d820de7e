"""
Expression Normalizer — переписывание инфиксной степени в вызов pow().

    x^2          → pow(x, 2)
    (x+1)^2^2    → pow((x+1), pow(2, 2))
    -x^0.5       → -pow(x, 0.5)
    2^-x         → pow(2, -x)

Алгоритм: пока в тексте есть переписываемый "^", берётся самый правый из них,
операнды находятся сканированием влево/вправо с учётом скобок, и
фрагмент "base^exponent" заменяется на "pow(base, exponent)". Обработка справа
налево даёт правую ассоциативность цепочек, как и в парсере.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Текст без "^" возвращается без изменений (идемпотентность)
2. Normalizer никогда не отклоняет ввод: "^" без распознаваемого операнда
   остаётся на месте, синтаксическую ошибку сообщит компилятор
3. Каждая итерация удаляет ровно один "^" → процесс конечен
"""

import re
from typing import Optional, Tuple

from src.core.expression.compiler import POWER_FUNCTION

# Число или идентификатор, примыкающий к концу текста (операнд слева от "^")
_BASE_ATOM_RE = re.compile(r"(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[A-Za-z_]\w*)$")

# Число или идентификатор в начале текста (операнд справа от "^")
_EXPONENT_ATOM_RE = re.compile(r"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[A-Za-z_]\w*")

_FUNCTION_NAME_RE = re.compile(r"[A-Za-z_]\w*$")


def _skip_spaces_left(text: str, pos: int) -> int:
    while pos >= 0 and text[pos].isspace():
        pos -= 1
    return pos


def _skip_spaces_right(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _matching_open(text: str, close_pos: int) -> Optional[int]:
    depth = 0
    for pos in range(close_pos, -1, -1):
        if text[pos] == ")":
            depth += 1
        elif text[pos] == "(":
            depth -= 1
            if depth == 0:
                return pos
    return None


def _matching_close(text: str, open_pos: int) -> Optional[int]:
    depth = 0
    for pos in range(open_pos, len(text)):
        if text[pos] == "(":
            depth += 1
        elif text[pos] == ")":
            depth -= 1
            if depth == 0:
                return pos
    return None


def _find_base(text: str, caret: int) -> Optional[Tuple[int, int]]:
    """
    Поиск операнда-основания слева от "^".

    Returns:
        (start, end) — срез text[start:end], либо None
    """
    end = _skip_spaces_left(text, caret - 1)
    if end < 0:
        return None

    if text[end] == ")":
        start = _matching_open(text, end)
        if start is None:
            return None
        # Вызов функции: pow(x, 2)^2, sin (x)^2
        name_end = _skip_spaces_left(text, start - 1) + 1
        name = _FUNCTION_NAME_RE.search(text, 0, name_end)
        if name is not None:
            start = name.start()
        return start, end + 1

    atom = _BASE_ATOM_RE.search(text, 0, end + 1)
    if atom is None:
        return None
    return atom.start(), end + 1


def _find_exponent(text: str, caret: int) -> Optional[Tuple[int, int]]:
    """
    Поиск операнда-показателя справа от "^" (допускается знак).

    Returns:
        (start, end) — срез text[start:end], либо None
    """
    start = _skip_spaces_right(text, caret + 1)
    pos = start
    if pos < len(text) and text[pos] in "+-":
        pos = _skip_spaces_right(text, pos + 1)
    if pos >= len(text):
        return None

    if text[pos] == "(":
        close = _matching_close(text, pos)
        if close is None:
            return None
        return start, close + 1

    atom = _EXPONENT_ATOM_RE.match(text, pos)
    if atom is None:
        return None

    end = atom.end()
    if atom.group()[0].isalpha() or atom.group()[0] == "_":
        call_open = _skip_spaces_right(text, end)
        if call_open < len(text) and text[call_open] == "(":
            close = _matching_close(text, call_open)
            if close is None:
                return None
            end = close + 1
    return start, end


def _rewrite_rightmost(text: str) -> Optional[str]:
    """Переписать самый правый переписываемый "^"; None если таких нет."""
    caret = text.rfind("^")
    while caret >= 0:
        base = _find_base(text, caret)
        exponent = _find_exponent(text, caret)
        if base is not None and exponent is not None:
            base_text = text[base[0]:base[1]].strip()
            exponent_text = text[exponent[0]:exponent[1]].strip()
            return (
                text[:base[0]]
                + f"{POWER_FUNCTION}({base_text}, {exponent_text})"
                + text[exponent[1]:]
            )
        caret = text.rfind("^", 0, caret)
    return None


def normalize(expression: str) -> str:
    """
    Переписать всю инфиксную степень в вызовы pow() до неподвижной точки.

    Args:
        expression: Исходный текст выражения

    Returns:
        Текст без переписываемых "^"

    Examples:
        >>> normalize("x^2 + 1")
        'pow(x, 2) + 1'
        >>> normalize("(x+1)^2^2")
        'pow((x+1), pow(2, 2))'
        >>> normalize("3*x + 1")
        '3*x + 1'
    """
    text = expression
    while True:
        rewritten = _rewrite_rightmost(text)
        if rewritten is None:
            return text
        text = rewritten
