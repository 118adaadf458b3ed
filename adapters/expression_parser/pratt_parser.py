"""
Precedence climbing parser dla znormalizowanych tokenów.

  expr   = term (('+'|'-') term)*
  term   = unary (('*'|'/') unary)*
  unary  = ('+'|'-')* atom
  atom   = NUMBER | '(' expr ')'

Operatory binarne są lewostronnie łączne. Każdy błąd składni to
EvaluationFailure z pozycją tokenu w tekście znormalizowanym.
"""
from __future__ import annotations

from contracts import BinOpNode, EvaluationFailure, ExprAST, NumberNode, UnaryOpNode
from adapters.expression_parser.normalizer import Token

# Lewy binding power operatorów binarnych
_LEFT_BP: dict[str, int] = {"+": 10, "-": 10, "*": 20, "/": 20}

# Limit zagnieżdżeń (nawiasy + unarne znaki), poniżej limitu rekursji Pythona
MAX_DEPTH = 200


class _Parser:
    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0
        self._depth = 0

    def _peek(self) -> Token | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _consume(self) -> Token:
        tok = self._peek()
        if tok is None:
            raise EvaluationFailure("UNEXPECTED_END", "Nieoczekiwany koniec wyrażenia")
        self._pos += 1
        return tok

    def _expect(self, text: str) -> None:
        tok = self._consume()
        if tok.text != text:
            raise EvaluationFailure(
                "UNEXPECTED_TOKEN",
                f"Oczekiwano {text!r}, jest {_describe(tok)}",
                position=tok.pos,
            )

    def _enter(self) -> None:
        self._depth += 1
        if self._depth > MAX_DEPTH:
            raise EvaluationFailure(
                "NESTING_TOO_DEEP",
                f"Zagnieżdżenie przekracza {MAX_DEPTH} poziomów",
            )

    def parse(self) -> ExprAST:
        node = self._expr(0)
        tok = self._peek()
        if tok is not None:
            raise EvaluationFailure(
                "UNEXPECTED_TOKEN",
                f"Nieoczekiwany token: {_describe(tok)}",
                position=tok.pos,
            )
        return node

    def _expr(self, min_bp: int) -> ExprAST:
        left = self._unary()
        while True:
            tok = self._peek()
            if tok is None or tok.is_number or tok.text not in _LEFT_BP:
                break
            bp = _LEFT_BP[tok.text]
            if bp <= min_bp:
                break
            self._consume()
            # Lewostronne wiązanie: right_bp = bp (nie bp+1) dla left-assoc
            right = self._expr(bp)
            left = BinOpNode(op=tok.text, left=left, right=right)  # type: ignore[arg-type]
        return left

    def _unary(self) -> ExprAST:
        tok = self._peek()
        if tok is not None and tok.text in ("+", "-"):
            self._consume()
            self._enter()
            operand = self._unary()
            self._depth -= 1
            return UnaryOpNode(op=tok.text, operand=operand)  # type: ignore[arg-type]
        return self._primary()

    def _primary(self) -> ExprAST:
        tok = self._consume()
        if tok.is_number:
            return NumberNode(value=tok.value)
        if tok.text == "(":
            self._enter()
            node = self._expr(0)
            self._expect(")")
            self._depth -= 1
            return node
        raise EvaluationFailure(
            "UNEXPECTED_TOKEN",
            f"Nieoczekiwany token: {_describe(tok)}",
            position=tok.pos,
        )


def _describe(tok: Token) -> str:
    return "liczba" if tok.is_number else repr(tok.text)


def parse_tokens(tokens: list[Token]) -> ExprAST:
    """Buduje ExprAST z tokenów. Rzuca EvaluationFailure."""
    return _Parser(tokens).parse()
