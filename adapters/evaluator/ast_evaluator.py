"""
Adapter: ASTEvaluator
Iteracyjne przejście ExprAST z Fraction.

Fractions zapewniają dokładną arytmetykę (unikamy błędów zmiennoprzecinkowych
przy dzieleniu); zaokrąglenie do int robi dopiero ExpressionEvaluator.

eval_ast() — zwraca (wartość Fraction, kroki obliczeń)
"""
from __future__ import annotations

import math
from fractions import Fraction

from contracts import BinOpNode, ExprAST, NumberNode, UnaryOpNode

# Mapowanie symboli operatorów na operacje Fraction
_OP_FUNCS = {
    "+":  lambda a, b: a + b,
    "-":  lambda a, b: a - b,
    "*":  lambda a, b: a * b,
    "/":  lambda a, b: _safe_div(a, b),
}

# Szersze liczby w krokach pokazujemy w przybliżeniu
_MAX_STEP_DIGITS = 60


def _safe_div(a: Fraction, b: Fraction) -> Fraction:
    if b == 0:
        raise ZeroDivisionError("Dzielenie przez zero")
    return a / b


class ASTEvaluator:
    """Dokładny ewaluator wyrażeń arytmetycznych oparty na AST."""

    def eval_ast(self, ast: ExprAST) -> tuple[Fraction, list[str]]:
        """
        Oblicza wartość AST bez rekurencji.
        Rzuca ZeroDivisionError przy dzieleniu przez zero.
        """
        return self._eval(ast)

    # -- Prywatne ----------------------------------------------------------

    def _eval(self, root: ExprAST) -> tuple[Fraction, list[str]]:
        """
        Zwraca (wartość, lista kroków).
        Iteracyjny post-order ze stosem: długie łańcuchy "1+1+...+1" dają
        drzewo o głębokości równej liczbie składników.
        """
        steps: list[str] = []
        values: list[Fraction] = []
        stack: list[tuple[ExprAST, bool]] = [(root, False)]

        while stack:
            node, visited = stack.pop()

            if isinstance(node, NumberNode):
                values.append(Fraction(node.value))

            elif isinstance(node, UnaryOpNode):
                if not visited:
                    stack.append((node, True))
                    stack.append((node.operand, False))
                elif node.op == "-":
                    val = values.pop()
                    result = -val
                    steps.append(f"-({_fmt(val)}) = {_fmt(result)}")
                    values.append(result)

            elif isinstance(node, BinOpNode):
                if not visited:
                    # prawe dziecko pod lewym: lewa strona liczona pierwsza
                    stack.append((node, True))
                    stack.append((node.right, False))
                    stack.append((node.left, False))
                    continue

                fn = _OP_FUNCS.get(node.op)
                if fn is None:
                    raise ValueError(f"Nieznany operator: {node.op!r}")

                right_val = values.pop()
                left_val = values.pop()
                result = fn(left_val, right_val)
                steps.append(f"{_fmt(left_val)} {node.op} {_fmt(right_val)} = {_fmt(result)}")
                values.append(result)

            else:
                raise TypeError(f"Nieznany typ węzła AST: {type(node)}")

        return values.pop(), steps


def _fmt(v: Fraction) -> str:
    """Czytelna reprezentacja Fraction."""
    if v.denominator == 1:
        return _fmt_int(v.numerator)
    return f"{_fmt_int(v.numerator)}/{_fmt_int(v.denominator)}"


def _fmt_int(n: int) -> str:
    # str() na bardzo dużych int-ach jest kosztowny (i limitowany od 3.11)
    if n.bit_length() > _MAX_STEP_DIGITS * 3:
        exponent = int(math.log10(abs(n)))
        sign = "-" if n < 0 else ""
        return f"{sign}~1e{exponent}"
    return str(n)
