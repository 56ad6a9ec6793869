# tests/test_session.py
"""
Interactive loops and the top-level menu, driven by scripted input().
"""

from __future__ import annotations

import pytest

from primequery.cli import MENU_PROMPT, run_menu
from primequery.fmt import strip_ansi
from primequery.runtime import current
from primequery.session import (
    DISPLAY_PROMPT,
    EXIT_PROMPT,
    PAIR_PROMPT,
    count_primes_session,
    factor_count_session,
    is_prime_session,
)
from primequery.utility import UserInputError, parse_pair, parse_uint, parse_yes_no

# ---------- parsing -----------------------------------------------------------

PAIR_CASES = [
    ("1, 10",   (1, 10)),
    ("1,10",    (1, 10)),
    (" 10 ,1 ", (10, 1)),
    ("3 7",     (3, 7)),
    ("0,5",     (0, 5)),
]


@pytest.mark.parametrize("text,expected", PAIR_CASES, ids=[t for t, _ in PAIR_CASES])
def test_parse_pair(text, expected):
    assert parse_pair(text) == expected


@pytest.mark.parametrize("text", ["", "5", "1,2,3", "a,b", "1,-2", "1;2"])
def test_parse_pair_rejects(text):
    with pytest.raises(UserInputError):
        parse_pair(text)


@pytest.mark.parametrize("text", ["", "  ", "abc", "-4", "1.5", "0x10", "12a"])
def test_parse_uint_rejects(text):
    with pytest.raises(UserInputError):
        parse_uint(text)


def test_parse_uint_accepts_plus_and_underscores():
    assert parse_uint("+42") == 42
    assert parse_uint("1_000") == 1000


def test_parse_uint_respects_max_value():
    current().override("BEHAVIOUR.MAX_VALUE", 100)
    assert parse_uint("100") == 100
    with pytest.raises(UserInputError, match="maximum of 100"):
        parse_uint("101")


def test_default_ceiling_is_unsigned_32_bit():
    assert parse_uint("4294967295") == 4294967295
    with pytest.raises(UserInputError):
        parse_uint("4294967296")


def test_parse_uint_rejects_huge_digit_strings():
    with pytest.raises(UserInputError, match="maximum of 4294967295"):
        parse_uint("9" * 5000)
    assert parse_uint("0" * 5000 + "7") == 7


@pytest.mark.parametrize("text", ["0", " 0 ", "+0", "00"])
def test_parse_pair_lone_zero_is_exit_answer(text):
    assert parse_pair(text) == (0, 0)


@pytest.mark.parametrize("text,expected", [
    ("y", True), ("Y", True), (" yes", True),
    ("n", False), ("N", False), ("", False), ("x", False),
])
def test_parse_yes_no(text, expected):
    assert parse_yes_no(text) is expected


# ---------- operation 1 -------------------------------------------------------

def test_is_prime_session(feed, capsys):
    prompts = feed(["17", "18", "1", "0", ""])
    is_prime_session()
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "17 is a prime number!",
        "18 is not a prime number.",
        "1 is not a prime number.",
    ]
    assert prompts[-1] == EXIT_PROMPT


def test_is_prime_session_reprompts_on_garbage(feed, capsys):
    feed(["abc", "-3", "", "7", "0", ""])
    is_prime_session()
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["7 is a prime number!"]
    errors = strip_ansi(captured.err).splitlines()
    assert len(errors) == 3
    assert all(line.startswith("Invalid input:") for line in errors)


def test_is_prime_session_survives_huge_answer(feed, capsys):
    feed(["9" * 5000, "7", "0", ""])
    is_prime_session()
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["7 is a prime number!"]
    assert strip_ansi(captured.err).startswith("Invalid input: number exceeds the maximum")


def test_exit_acknowledgment_tolerates_eof(feed, capsys):
    feed(["0"])
    is_prime_session()
    assert capsys.readouterr().out == "\n"


# ---------- operation 2 -------------------------------------------------------

def test_count_primes_session_with_display(feed, capsys):
    prompts = feed(["10, 1", "y", "0, 0", ""])
    count_primes_session()
    assert capsys.readouterr().out.splitlines() == [
        "2", "3", "5", "7",
        "4 total primes found between 10 and 1.",
    ]
    assert DISPLAY_PROMPT in prompts


def test_count_primes_session_without_display(feed, capsys):
    feed(["1,100", "n", "1, 10", "", "5, 0", ""])
    count_primes_session()
    assert capsys.readouterr().out.splitlines() == [
        "25 total primes found between 1 and 100.",
        "4 total primes found between 1 and 10.",
    ]


def test_count_primes_session_zero_in_either_bound_exits(feed, capsys):
    prompts = feed(["0, 9", ""])
    count_primes_session()
    assert capsys.readouterr().out == ""
    assert DISPLAY_PROMPT not in prompts


def test_count_primes_session_lone_zero_exits(feed, capsys):
    prompts = feed(["0", ""])
    count_primes_session()
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""
    assert prompts[-1] == EXIT_PROMPT


def test_count_primes_session_reprompts_bad_pair(feed, capsys):
    feed(["12", "1,x", "2,3", "Y", "0,1", ""])
    count_primes_session()
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["2", "3", "2 total primes found between 2 and 3."]
    assert strip_ansi(captured.err).count("Invalid input:") == 2


# ---------- operation 3 -------------------------------------------------------

def test_factor_count_session_with_display(feed, capsys):
    feed(["1, 12", "3", "y", "0, 5", ""])
    factor_count_session()
    assert capsys.readouterr().out.splitlines() == [
        "8 | 2 | 2 | 2 |",
        "12 | 2 | 2 | 3 |",
        "2 total numbers with 3 prime factors found between 1 and 12.",
    ]


def test_factor_count_session_total_only(feed, capsys):
    feed(["50, 1", "3", "n", "0,0", ""])
    factor_count_session()
    assert capsys.readouterr().out.splitlines() == [
        "11 total numbers with 3 prime factors found between 50 and 1.",
    ]


def test_factor_count_session_zero_factors(feed, capsys):
    feed(["1, 200", "0", "y", "0,0", ""])
    factor_count_session()
    assert capsys.readouterr().out.splitlines() == [
        "0 total numbers with 0 prime factors found between 1 and 200.",
    ]


def test_factor_count_session_lone_zero_exits(feed, capsys):
    prompts = feed(["0", ""])
    factor_count_session()
    assert capsys.readouterr().err == ""
    assert prompts == [PAIR_PROMPT, EXIT_PROMPT]


def test_factor_count_session_reprompts_bad_k(feed, capsys):
    feed(["2, 4", "two", "1", "y", "0,0", ""])
    factor_count_session()
    captured = capsys.readouterr()
    assert captured.out.splitlines() == [
        "2 | 2 |",
        "3 | 3 |",
        "2 total numbers with 1 prime factors found between 2 and 4.",
    ]
    assert "number of prime factors" in strip_ansi(captured.err)


# ---------- menu --------------------------------------------------------------

def test_menu_dispatches_and_exits(feed, capsys):
    prompts = feed(["1", "17", "0", "", "0"])
    assert run_menu() == 0
    out = capsys.readouterr().out
    assert "17 is a prime number!" in out
    assert out.count("0. Exit") == 2
    assert prompts.count(MENU_PROMPT) == 2


@pytest.mark.parametrize("bad", ["4", "-1", "abc", ""])
def test_menu_rejects_invalid_choice(feed, capsys, bad):
    feed([bad, "0"])
    assert run_menu() == 0
    assert capsys.readouterr().out.count("Invalid choice. Please try again.") == 1


def test_menu_runs_each_operation(feed, capsys):
    feed([
        "2", "1,10", "n", "0,0", "",
        "3", "1,50", "3", "n", "0,0", "",
        "0",
    ])
    assert run_menu() == 0
    out = capsys.readouterr().out
    assert "4 total primes found between 1 and 10." in out
    assert "11 total numbers with 3 prime factors found between 1 and 50." in out


def test_menu_ends_on_eof(feed, capsys):
    feed([])
    assert run_menu() == 0


def test_menu_ends_on_eof_inside_session(feed, capsys):
    feed(["2", "1,10"])
    assert run_menu() == 0
