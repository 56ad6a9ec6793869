# src/primequery/fmt.py
from __future__ import annotations

import re
from collections.abc import Iterable

from colorama import Fore, Style

from primequery.runtime import CFG

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(s: str | None) -> str:
    return ANSI_RE.sub("", s or "")


def paint(text: str, color: str, *, bright: bool = False) -> str:
    """Wrap text in a colorama colour unless OUTPUT.COLOR is off."""
    if not CFG("OUTPUT.COLOR", True):
        return text
    weight = Style.BRIGHT if bright else ""
    return f"{color}{weight}{text}{Style.RESET_ALL}"


def error_prefix(label: str = "Error:") -> str:
    return paint(label, Fore.RED)


def format_prime_result(n: int, prime: bool) -> str:
    if prime:
        return f"{n} is a prime number!"
    return f"{n} is not a prime number."


def format_prime_total(total: int, n1: int, n2: int) -> str:
    return f"{total} total primes found between {n1} and {n2}."


def format_factor_line(n: int, factors: Iterable[int]) -> str:
    """
    One row of the factor-count listing.

    >>> format_factor_line(12, [2, 2, 3])
    '12 | 2 | 2 | 3 |'
    """
    cells = [str(n), *(str(p) for p in factors)]
    return " | ".join(cells) + " |"


def format_factor_total(total: int, k: int, n1: int, n2: int) -> str:
    return f"{total} total numbers with {k} prime factors found between {n1} and {n2}."


def format_duration(seconds: float) -> str:
    """ms if <1s; s with millis if <60s; else mm:ss.mmm (and hh:mm:ss.mmm if ≥1h)."""
    MAX_SECONDS = 60
    if seconds < 1:
        ms = round(seconds * 1000)
        return f"{ms} ms"
    if seconds < MAX_SECONDS:
        return f"{seconds:.3f} s"
    m, s = divmod(seconds, MAX_SECONDS)
    if m < MAX_SECONDS:
        return f"{int(m)}:{s:06.3f}"               # mm:ss.mmm
    h, m = divmod(int(m), MAX_SECONDS)
    return f"{h}:{m:02d}:{s:06.3f}"                # hh:mm:ss.mmm
