"""
decimal_text.py - int <-> tekst dziesiętny bez limitu konwersji interpretera.

Od Pythona 3.11 str(int) i int(str) rzucają ValueError powyżej
sys.get_int_max_str_digits() cyfr (domyślnie 4300). Tu dzielimy liczbę na
połówki względem 10**k, więc każda pojedyncza konwersja mieści się w limicie.
"""
from __future__ import annotations

# Bezpiecznie poniżej domyślnego limitu 4300 cyfr
_DIRECT_DIGITS = 3000
_DIRECT_BITS = 9900          # 2**9900 ma ~2981 cyfr
_LOG10_2 = 0.30102999566398120


def to_decimal(n: int) -> str:
    """Zapis dziesiętny dowolnie dużej liczby całkowitej."""
    if n < 0:
        return "-" + to_decimal(-n)
    if n.bit_length() <= _DIRECT_BITS:
        return str(n)
    k = int(n.bit_length() * _LOG10_2) // 2
    high, low = divmod(n, 10 ** k)
    return to_decimal(high) + to_decimal(low).rjust(k, "0")


def from_decimal(text: str) -> int:
    """Odwrotność to_decimal(). Tekst: opcjonalny znak i cyfry ASCII."""
    if text[:1] in ("+", "-"):
        value = from_decimal(text[1:])
        return -value if text[0] == "-" else value
    if len(text) <= _DIRECT_DIGITS:
        return int(text)
    k = len(text) // 2
    return from_decimal(text[:-k]) * 10 ** k + from_decimal(text[-k:])


def short_decimal(n: int, limit: int = 32) -> str:
    """Skrócona postać do logów i komunikatów: "123456...(5001 cyfr)"."""
    if n.bit_length() <= limit * 3:
        return str(n)
    text = to_decimal(n)
    return f"{text[:12]}...({len(text.lstrip('-'))} cyfr)"
