"""
Normalizacja wyrażenia przed parsowaniem.

Pipeline (w tej kolejności):
  1. lower-case
  2. słowa → symbole: times→*, plus→+, minus→-, "divided by"→/, samotne x→*
  3. sanityzacja:
       tryb łagodny — usuń wszystko spoza 0-9 + - * / ( ) ^ !   ("6 7" → "67")
       tryb ścisły  — nieznany znak to błąd UNEXPECTED_CHARACTER
  4. silnia:  CYFRY '!'        → zapis dziesiętny silni     (jedno przejście re.sub)
  5. potęga:  CYFRY '^' CYFRY  → zapis dziesiętny potęgi    (od lewej, jedno przejście)
  6. tokenizacja tekstu po rozwinięciach

Rozwinięcia są podstawieniami w tekście, więc wynik skleja się z sąsiednimi
cyframi: "5!3" → "1203", "3!2^2" → "62^2" → "3844".
Pozostałe '!' lub '^' (np. "3!!" → "6!", "2^3^2" → "8^2") zgłasza parser
jako UNEXPECTED_TOKEN.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from adapters.decimal_text import from_decimal, to_decimal
from contracts import EvaluationFailure

# Kolejność bez znaczenia — wzorce się nie nakładają
_WORD_OPERATORS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\btimes\b"), "*"),
    (re.compile(r"\bplus\b"), "+"),
    (re.compile(r"\bminus\b"), "-"),
    (re.compile(r"\bdivided\s+by\b"), "/"),
    (re.compile(r"\bx\b"), "*"),
]

_DISALLOWED = re.compile(r"[^0-9+\-*/()^!]")
_DISALLOWED_STRICT = re.compile(r"[^0-9+\-*/()^!\s]")

# W trybie łagodnym tekst nie ma już spacji; w ścisłym dopuszczamy je wokół '!' i '^'
_FACTORIAL_RE = re.compile(r"([0-9]+)\s*!")
_POWER_RE = re.compile(r"([0-9]+)\s*\^\s*([0-9]+)")

_TOKEN_RE = re.compile(
    r"([0-9]+)"              # liczba całkowita
    r"|([+\-*/()^!])"        # operator lub nawias
    r"|(\s+)"                # białe znaki (tylko tryb ścisły)
)

_LOG10_2 = 0.30102999566398120


@dataclass(frozen=True)
class Token:
    kind: str            # "number" | "op"
    text: str            # operator; dla liczb pusty (cyfry mogą być bardzo długie)
    pos: int             # pozycja w tekście po rozwinięciach
    value: int = 0

    @property
    def is_number(self) -> bool:
        return self.kind == "number"


def max_digits_for_bits(max_bits: int) -> int:
    """Najdłuższy literał, jaki zmieści się w max_bits bitach."""
    return int(max_bits * _LOG10_2) + 1


def replace_word_operators(text: str) -> str:
    """Kroki 1–2: lower-case i zamiana słownych operatorów na symbole."""
    text = text.lower()
    for pattern, symbol in _WORD_OPERATORS:
        text = pattern.sub(symbol, text)
    return text


def sanitize(text: str) -> str:
    """Krok 3 (tryb łagodny): biała lista znaków, reszta jest usuwana."""
    return _DISALLOWED.sub("", text)


def check_characters(text: str) -> None:
    """Krok 3 (tryb ścisły): nieznany znak → EvaluationFailure(UNEXPECTED_CHARACTER)."""
    m = _DISALLOWED_STRICT.search(text)
    if m is not None:
        raise EvaluationFailure(
            "UNEXPECTED_CHARACTER",
            f"Nieoczekiwany znak {m.group(0)!r}",
            position=m.start(),
        )


def factorial(n: int, max_operand: int) -> int:
    if n > max_operand:
        raise EvaluationFailure(
            "OPERAND_TOO_LARGE",
            f"Silnia z {n} przekracza limit {max_operand}",
        )
    result = 1
    for i in range(2, n + 1):
        result *= i
    return result


def power(base: int, exponent: int, max_bits: int) -> int:
    # Dolne oszacowanie szerokości wyniku; 0 i 1 podniesione do czegokolwiek są małe
    if base > 1 and (base.bit_length() - 1) * exponent > max_bits:
        raise EvaluationFailure(
            "OPERAND_TOO_LARGE",
            f"Potęga o podstawie {base.bit_length()}-bitowej i wykładniku {exponent} "
            f"przekracza limit {max_bits} bitów",
        )
    return base ** exponent


def _literal(digits: str, max_digits: int, pos: int) -> int:
    # Długość sprawdzana przed int(): długie literały nie trafiają do konwersji
    if len(digits) > max_digits:
        raise EvaluationFailure(
            "OPERAND_TOO_LARGE",
            f"Liczba ma {len(digits)} cyfr (limit {max_digits})",
            position=pos,
        )
    return from_decimal(digits)


def expand_factorials(text: str, max_operand: int) -> str:
    """Krok 4: każdy ciąg cyfr bezpośrednio przed '!' zastępowany silnią."""
    max_digits = len(str(max_operand))

    def _sub(m: re.Match[str]) -> str:
        n = _literal(m.group(1).lstrip("0") or "0", max_digits, m.start())
        return to_decimal(factorial(n, max_operand))

    return _FACTORIAL_RE.sub(_sub, text)


def expand_powers(text: str, max_bits: int) -> str:
    """Krok 5: CYFRY ^ CYFRY → potęga, od lewej do prawej, bez ponownego skanu."""
    max_digits = max_digits_for_bits(max_bits)

    def _sub(m: re.Match[str]) -> str:
        base = _literal(m.group(1), max_digits, m.start(1))
        exponent = _literal(m.group(2), max_digits, m.start(2))
        return to_decimal(power(base, exponent, max_bits))

    return _POWER_RE.sub(_sub, text)


def tokenize(text: str, max_digits: int) -> list[Token]:
    """Krok 6. Nieznany znak → UNEXPECTED_CHARACTER, za długi literał → OPERAND_TOO_LARGE."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise EvaluationFailure(
                "UNEXPECTED_CHARACTER",
                f"Nieoczekiwany znak {text[pos]!r}",
                position=pos,
            )
        num, op = m.group(1), m.group(2)
        if num:
            tokens.append(Token(kind="number", text="", pos=pos,
                                value=_literal(num, max_digits, pos)))
        elif op:
            tokens.append(Token(kind="op", text=op, pos=pos))
        pos = m.end()
    return tokens


def normalize(
    text: str,
    strict: bool = False,
    max_factorial_operand: int = 500,
    max_result_bits: int = 8192,
) -> tuple[str, list[Token]]:
    """
    Zwraca (tekst znormalizowany przed rozwinięciami, tokeny po rozwinięciu
    silni i potęg). Rzuca EvaluationFailure dla pustego wyrażenia, nieznanych
    znaków (tryb ścisły) i zbyt dużych operandów.
    """
    normalized = replace_word_operators(text)
    if strict:
        check_characters(normalized)
    else:
        normalized = sanitize(normalized)
    if not normalized.strip():
        raise EvaluationFailure("EMPTY_EXPRESSION", "Puste wyrażenie")

    expanded = expand_factorials(normalized, max_factorial_operand)
    expanded = expand_powers(expanded, max_result_bits)
    tokens = tokenize(expanded, max_digits_for_bits(max_result_bits))
    return normalized, tokens
