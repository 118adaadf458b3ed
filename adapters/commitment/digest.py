"""
digest.py — szybki, niekryptograficzny skrót tekstu.

Dla każdego znaku: h = (h << 5) - h + kod_znaku, obcięte do 32 bitów ze znakiem
(jak operacje bitowe w JavaScripcie). Wynik: |h| w hex, dopełnione zerami do 16.
Stabilne między platformami — szerokość słowa nie zależy od hosta.
"""
from __future__ import annotations

DIGEST_WIDTH = 16

_MASK32 = 0xFFFFFFFF
_SIGN32 = 0x80000000


def _to_int32(n: int) -> int:
    n &= _MASK32
    return n - (1 << 32) if n & _SIGN32 else n


def digest(s: str) -> str:
    h = 0
    for ch in s:
        h = _to_int32((h << 5) - h + ord(ch))
    return format(abs(h), f"0{DIGEST_WIDTH}x")
