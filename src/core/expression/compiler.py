"""
Expression Compiler — компиляция текста выражения в функцию одной переменной.

Этапы:
1. Разбор текста в AST (parser.parse)
2. Разрешение идентификаторов: свободная переменная, именованные константы,
   реестр функций
3. Ahead-of-time компиляция AST во вложенные замыкания

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. CompiledFunction детерминирована и не имеет скрытого состояния
2. Любой идентификатор кроме свободной переменной и констант → CompilationError
3. Вычисление только в float (math.pow, никогда complex)
4. Ошибки вычисления (ZeroDivisionError, ValueError, OverflowError)
   не перехватываются и пропагируют к вызывающему
"""

import math
import operator
from dataclasses import dataclass, field
from typing import Callable, Dict, Final, List, Tuple

from src.core.expression.ast_nodes import BinaryOp, Call, Constant, Node, UnaryOp, Variable
from src.core.expression.errors import CompilationError
from src.core.expression.parser import parse

Evaluator = Callable[[float], float]

DEFAULT_VARIABLE: Final[str] = "x"

# Имя функции степени, которую порождает normalizer
POWER_FUNCTION: Final[str] = "pow"


# =============================================================================
# РЕЕСТР ФУНКЦИЙ И КОНСТАНТ
# =============================================================================

# name -> (callable, arity)
FUNCTIONS: Final[Dict[str, Tuple[Callable[..., float], int]]] = {
    POWER_FUNCTION: (math.pow, 2),
    "sqrt": (math.sqrt, 1),
    "exp": (math.exp, 1),
    "log": (math.log, 1),
    "ln": (math.log, 1),
    "log10": (math.log10, 1),
    "sin": (math.sin, 1),
    "cos": (math.cos, 1),
    "tan": (math.tan, 1),
    "asin": (math.asin, 1),
    "acos": (math.acos, 1),
    "atan": (math.atan, 1),
    "sinh": (math.sinh, 1),
    "cosh": (math.cosh, 1),
    "tanh": (math.tanh, 1),
    "abs": (math.fabs, 1),
}

CONSTANTS: Final[Dict[str, float]] = {
    "pi": math.pi,
    "e": math.e,
}

_CHAIN_OPERATORS: Final[Dict[str, Callable[[float, float], float]]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
}


# =============================================================================
# COMPILED FUNCTION
# =============================================================================


@dataclass(frozen=True)
class CompiledFunction:
    """
    Скомпилированная функция f(variable) -> float.

    Attributes:
        source: Текст, из которого скомпилирована функция
        variable: Имя свободной переменной
        tree: AST выражения
    """

    source: str
    variable: str
    tree: Node = field(repr=False)
    _evaluate: Evaluator = field(repr=False, compare=False)

    def __call__(self, value: float) -> float:
        return self._evaluate(float(value))


# =============================================================================
# КОМПИЛЯЦИЯ AST → ЗАМЫКАНИЯ
# =============================================================================


class _ClosureBuilder:
    """Обход AST с построением замыканий."""

    def __init__(self, expression: str, variable: str):
        self.expression = expression
        self.variable = variable

    def build(self, node: Node) -> Evaluator:
        if isinstance(node, Constant):
            return self._constant(node.value)
        if isinstance(node, Variable):
            return self._variable(node)
        if isinstance(node, UnaryOp):
            return self._unary(node)
        if isinstance(node, BinaryOp):
            return self._binary(node)
        if isinstance(node, Call):
            return self._call(node)
        raise CompilationError(
            f"Unsupported node {type(node).__name__}", expression=self.expression
        )

    @staticmethod
    def _constant(value: float) -> Evaluator:
        return lambda x: value

    def _variable(self, node: Variable) -> Evaluator:
        if node.name == self.variable:
            return lambda x: x
        if node.name in CONSTANTS:
            return self._constant(CONSTANTS[node.name])
        if node.name in FUNCTIONS:
            raise CompilationError(
                f"Function '{node.name}' used without arguments",
                expression=self.expression,
                position=node.position,
            )
        raise CompilationError(
            f"Unknown identifier '{node.name}' (free variable is '{self.variable}')",
            expression=self.expression,
            position=node.position,
        )

    def _unary(self, node: UnaryOp) -> Evaluator:
        operand = self.build(node.operand)
        if node.op == "-":
            return lambda x: -operand(x)
        if node.op == "+":
            return operand
        raise CompilationError(f"Unsupported unary operator '{node.op}'", expression=self.expression)

    def _binary(self, node: BinaryOp) -> Evaluator:
        if node.op == "^":
            base = self.build(node.left)
            exponent = self.build(node.right)
            return lambda x: math.pow(base(x), exponent(x))

        # Левоассоциативная цепочка ((a + b) * c) - d разворачивается в цикл:
        # глубина рекурсии не растёт с длиной суммы
        chain: List[Tuple[str, Node]] = []
        head: Node = node
        while isinstance(head, BinaryOp) and head.op in _CHAIN_OPERATORS:
            chain.append((head.op, head.right))
            head = head.left
        if not chain:
            raise CompilationError(f"Unsupported operator '{node.op}'", expression=self.expression)

        first = self.build(head)
        steps = tuple((_CHAIN_OPERATORS[op], self.build(right)) for op, right in reversed(chain))

        def evaluate(x: float) -> float:
            value = first(x)
            for apply, operand in steps:
                value = apply(value, operand(x))
            return value

        return evaluate

    def _call(self, node: Call) -> Evaluator:
        if node.name not in FUNCTIONS:
            raise CompilationError(
                f"Unknown function '{node.name}'",
                expression=self.expression,
                position=node.position,
            )

        func, arity = FUNCTIONS[node.name]
        if len(node.args) != arity:
            raise CompilationError(
                f"Function '{node.name}' expects {arity} argument(s), got {len(node.args)}",
                expression=self.expression,
                position=node.position,
            )

        args = tuple(self.build(arg) for arg in node.args)
        if arity == 1:
            (arg,) = args
            return lambda x: func(arg(x))
        first, second = args
        return lambda x: func(first(x), second(x))


def compile_expression(expression: str, variable: str = DEFAULT_VARIABLE) -> CompiledFunction:
    """
    Компиляция выражения в функцию одной переменной.

    Принимает как нормализованный текст (pow(x, 2)), так и текст с
    инфиксной степенью (x^2): "^" входит в грамматику парсера.

    Args:
        expression: Текст выражения
        variable: Имя свободной переменной (default: "x")

    Returns:
        CompiledFunction

    Raises:
        CompilationError: Синтаксическая ошибка, неизвестный идентификатор
            или функция, неверное число аргументов, слишком глубокая
            вложенность скобок

    Examples:
        >>> f = compile_expression("pow(x, 2) + 1")
        >>> f(3.0)
        10.0
        >>> compile_expression("2^3^2")(0.0)
        512.0
    """
    if not variable.isidentifier():
        raise CompilationError(f"Invalid variable name {variable!r}", expression=expression)

    try:
        tree = parse(expression)
        evaluate = _ClosureBuilder(expression, variable).build(tree)
    except RecursionError:
        raise CompilationError("Expression is nested too deeply", expression=expression) from None

    return CompiledFunction(
        source=expression,
        variable=variable,
        tree=tree,
        _evaluate=evaluate,
    )
