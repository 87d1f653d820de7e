"""
Expression — текст выражения → функция одной переменной.

Поток: raw text → normalize → compile_expression → CompiledFunction
"""

from src.core.expression.ast_nodes import BinaryOp, Call, Constant, Node, UnaryOp, Variable
from src.core.expression.compiler import (
    CONSTANTS,
    DEFAULT_VARIABLE,
    FUNCTIONS,
    POWER_FUNCTION,
    CompiledFunction,
    compile_expression,
)
from src.core.expression.errors import CompilationError
from src.core.expression.lexer import Token, TokenKind, tokenize
from src.core.expression.normalizer import normalize
from src.core.expression.parser import Parser, parse

__all__ = [
    # AST
    "Node",
    "Constant",
    "Variable",
    "UnaryOp",
    "BinaryOp",
    "Call",
    # Lexer / Parser
    "Token",
    "TokenKind",
    "tokenize",
    "Parser",
    "parse",
    # Normalizer
    "normalize",
    # Compiler
    "CONSTANTS",
    "DEFAULT_VARIABLE",
    "FUNCTIONS",
    "POWER_FUNCTION",
    "CompiledFunction",
    "compile_expression",
    "CompilationError",
]
