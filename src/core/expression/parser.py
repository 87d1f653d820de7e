"""
Parser — recursive descent парсер арифметических выражений.

Грамматика (от низшего приоритета к высшему):

    expression := term (("+" | "-") term)*
    term       := unary (("*" | "/") unary)*
    unary      := ("+" | "-") unary | power
    power      := primary ("^" unary)?
    primary    := NUMBER | IDENT | IDENT "(" args ")" | "(" expression ")"
    args       := expression ("," expression)*

ИНВАРИАНТЫ:
1. "^" правоассоциативен: 2^3^2 == 2^(3^2)
2. "^" связывает сильнее унарного минуса слева: -x^2 == -(x^2)
3. Показатель степени может иметь знак: 2^-1 == 0.5
4. Весь ввод должен быть разобран (хвост → CompilationError)

Парсер чисто синтаксический: разрешение идентификаторов и функций
выполняет компилятор.
"""

from typing import List

from src.core.expression.ast_nodes import BinaryOp, Call, Constant, Node, UnaryOp, Variable
from src.core.expression.errors import CompilationError
from src.core.expression.lexer import Token, TokenKind, tokenize


class Parser:
    """Recursive descent парсер над списком токенов."""

    def __init__(self, expression: str):
        self.expression = expression
        self._tokens: List[Token] = tokenize(expression)
        self._index = 0

    # -------------------------------------------------------------------------
    # Навигация по токенам
    # -------------------------------------------------------------------------

    @property
    def _current(self) -> Token:
        return self._tokens[self._index]

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        if token.kind != TokenKind.EOF:
            self._index += 1
        return token

    def _at_op(self, *ops: str) -> bool:
        token = self._current
        return token.kind == TokenKind.OP and token.text in ops

    def _expect(self, kind: TokenKind, description: str) -> Token:
        token = self._current
        if token.kind != kind:
            raise self._error(f"Expected {description}", token)
        return self._advance()

    def _error(self, message: str, token: Token) -> CompilationError:
        if token.kind == TokenKind.EOF:
            found = "end of expression"
        else:
            found = repr(token.text)
        return CompilationError(
            f"{message}, found {found}",
            expression=self.expression,
            position=token.position,
        )

    # -------------------------------------------------------------------------
    # Правила грамматики
    # -------------------------------------------------------------------------

    def parse(self) -> Node:
        """
        Разбор всего выражения.

        Returns:
            Корень AST

        Raises:
            CompilationError: Синтаксическая ошибка
        """
        if self._current.kind == TokenKind.EOF:
            raise CompilationError("Empty expression", expression=self.expression, position=0)

        node = self._parse_expression()

        if self._current.kind != TokenKind.EOF:
            if self._current.kind == TokenKind.RPAREN:
                raise self._error("Unbalanced parentheses", self._current)
            raise self._error("Unexpected trailing input", self._current)

        return node

    def _parse_expression(self) -> Node:
        node = self._parse_term()
        while self._at_op("+", "-"):
            op = self._advance().text
            node = BinaryOp(op, node, self._parse_term())
        return node

    def _parse_term(self) -> Node:
        node = self._parse_unary()
        while self._at_op("*", "/"):
            op = self._advance().text
            node = BinaryOp(op, node, self._parse_unary())
        return node

    def _parse_unary(self) -> Node:
        if self._at_op("+", "-"):
            op = self._advance().text
            return UnaryOp(op, self._parse_unary())
        return self._parse_power()

    def _parse_power(self) -> Node:
        base = self._parse_primary()
        if self._at_op("^"):
            self._advance()
            # unary → power → "^" unary: правая рекурсия
            return BinaryOp("^", base, self._parse_unary())
        return base

    def _parse_primary(self) -> Node:
        token = self._current

        if token.kind == TokenKind.NUMBER:
            self._advance()
            return Constant(float(token.text))

        if token.kind == TokenKind.IDENT:
            self._advance()
            if self._current.kind == TokenKind.LPAREN:
                return self._parse_call(token)
            return Variable(token.text, token.position)

        if token.kind == TokenKind.LPAREN:
            self._advance()
            node = self._parse_expression()
            if self._current.kind != TokenKind.RPAREN:
                raise self._error("Unbalanced parentheses: expected ')'", self._current)
            self._advance()
            return node

        raise self._error("Expected a number, identifier or '('", token)

    def _parse_call(self, name: Token) -> Node:
        self._expect(TokenKind.LPAREN, "'('")
        args: List[Node] = []

        if self._current.kind == TokenKind.RPAREN:
            raise self._error(f"Function '{name.text}' called without arguments", self._current)

        args.append(self._parse_expression())
        while self._current.kind == TokenKind.COMMA:
            self._advance()
            args.append(self._parse_expression())

        if self._current.kind != TokenKind.RPAREN:
            raise self._error(
                f"Unbalanced parentheses in call to '{name.text}': expected ')'",
                self._current,
            )
        self._advance()
        return Call(name.text, tuple(args), name.position)


def parse(expression: str) -> Node:
    """
    Разбор текста выражения в AST.

    Args:
        expression: Текст выражения (с "^" или уже нормализованный)

    Returns:
        Корень AST

    Raises:
        CompilationError: Синтаксическая ошибка
    """
    return Parser(expression).parse()
