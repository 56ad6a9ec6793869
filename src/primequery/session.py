# src/primequery/session.py

"""
Interactive per-operation loops.

Each loop asks for its inputs, runs one query, prints the report and asks
again. Entering 0 for a primary number ends the loop after the ENTER
acknowledgment. Malformed answers are reported and asked again.
EOFError / KeyboardInterrupt are left to the menu.
"""

from __future__ import annotations

import sys
from time import perf_counter

from primequery.fmt import (
    format_duration,
    format_factor_line,
    format_factor_total,
    format_prime_result,
    format_prime_total,
)
from primequery.primes import bounds, count_primes, count_with_factor_count, is_prime
from primequery.progress import Progress
from primequery.runtime import CFG
from primequery.utility import debug, parse_pair, parse_uint, parse_yes_no, prompt_until_valid

EXIT_PROMPT = "Press ENTER to exit..."
DISPLAY_PROMPT = "Display the results? (y/n) "
PAIR_PROMPT = "Please enter n1, n2: "

# Ranges smaller than this finish before a bar is worth drawing
_PROGRESS_MIN_SPAN = 10_000


def _progress_for(n1: int, n2: int, display: bool, label: str) -> Progress:
    lo, hi = bounds(n1, n2)
    enabled = (
        not display
        and bool(CFG("BEHAVIOUR.PROGRESS", True))
        and sys.stdout.isatty()
        and hi - lo >= _PROGRESS_MIN_SPAN
    )
    return Progress(lo, hi, enabled=enabled, label=label)


def _wait_for_enter() -> None:
    try:
        input(EXIT_PROMPT)
    except EOFError:
        print()


# ---- reports (shared with the one-shot command line) -----------------------

def report_is_prime(n: int) -> bool:
    t0 = perf_counter()
    result = is_prime(n)
    debug(f"is_prime({n}) took {format_duration(perf_counter() - t0)}")
    print(format_prime_result(n, result))
    return result


def report_count_primes(n1: int, n2: int, display: bool) -> int:
    t0 = perf_counter()
    with _progress_for(n1, n2, display, f"primes {n1}..{n2}") as bar:
        total = count_primes(n1, n2, print if display else None, tick=bar.tick)
    debug(f"count_primes({n1}, {n2}) took {format_duration(perf_counter() - t0)}")
    print(format_prime_total(total, n1, n2))
    return total


def _print_factor_line(n: int, factors: list[int]) -> None:
    print(format_factor_line(n, factors))


def report_factor_count(n1: int, n2: int, k: int, display: bool) -> int:
    t0 = perf_counter()
    with _progress_for(n1, n2, display, f"k={k} in {n1}..{n2}") as bar:
        total = count_with_factor_count(
            n1, n2, k, _print_factor_line if display else None, tick=bar.tick
        )
    debug(f"count_with_factor_count({n1}, {n2}, {k}) took {format_duration(perf_counter() - t0)}")
    print(format_factor_total(total, k, n1, n2))
    return total


# ---- loops -----------------------------------------------------------------

def is_prime_session() -> None:
    while True:
        n = prompt_until_valid("Please enter a positive integer: ", parse_uint)
        if n == 0:
            _wait_for_enter()
            return
        report_is_prime(n)


def count_primes_session() -> None:
    while True:
        n1, n2 = prompt_until_valid(PAIR_PROMPT, parse_pair)
        if n1 == 0 or n2 == 0:
            _wait_for_enter()
            return
        display = parse_yes_no(input(DISPLAY_PROMPT))
        report_count_primes(n1, n2, display)


def _parse_factor_target(text: str) -> int:
    return parse_uint(text, "number of prime factors")


def factor_count_session() -> None:
    while True:
        n1, n2 = prompt_until_valid(PAIR_PROMPT, parse_pair)
        if n1 == 0 or n2 == 0:
            _wait_for_enter()
            return
        k = prompt_until_valid("Please enter the number of prime factors to find: ", _parse_factor_target)
        display = parse_yes_no(input(DISPLAY_PROMPT))
        report_factor_count(n1, n2, k, display)
