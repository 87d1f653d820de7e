"""
AST — узлы дерева арифметического выражения.

Закрытый набор узлов: Constant, Variable, BinaryOp, UnaryOp, Call.
Все узлы immutable (frozen dataclass), дерево можно разделять между
несколькими скомпилированными функциями.
"""

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class Constant:
    """Числовой литерал."""

    value: float


@dataclass(frozen=True)
class Variable:
    """Идентификатор (свободная переменная или именованная константа)."""

    name: str
    position: int = 0


@dataclass(frozen=True)
class UnaryOp:
    """Унарный оператор: "+" или "-"."""

    op: str
    operand: "Node"


@dataclass(frozen=True)
class BinaryOp:
    """Бинарный оператор: "+", "-", "*", "/", "^"."""

    op: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Call:
    """Вызов функции из реестра компилятора."""

    name: str
    args: Tuple["Node", ...]
    position: int = 0


Node = Union[Constant, Variable, UnaryOp, BinaryOp, Call]
