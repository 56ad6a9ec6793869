# -----------------------------------------------------------------------------
#  Utility functions: input parsing and console helpers
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
import re
import sys
from collections.abc import Callable
from typing import TypeVar

from primequery.fmt import error_prefix
from primequery.runtime import CFG
from primequery.runtime import current as _rt_current

T = TypeVar("T")

_UINT_RE = re.compile(r"\+?\d+")
_PAIR_SPLIT_RE = re.compile(r"\s*,\s*|\s+")


class UserInputError(Exception):
    pass


def max_value() -> int:
    try:
        return int(CFG("BEHAVIOUR.MAX_VALUE", 2**32 - 1))
    except (TypeError, ValueError):
        raise UserInputError("BEHAVIOUR.MAX_VALUE must be an integer.") from None


def parse_uint(text: str, label: str = "number") -> int:
    """
    Parse one unsigned integer within [0, BEHAVIOUR.MAX_VALUE].

    >>> parse_uint(" 17 ")
    17
    """
    s = (text or "").strip().replace("_", "")
    if not s:
        raise UserInputError(f"{label} is missing.")
    if s.startswith("-") and _UINT_RE.fullmatch(s[1:]):
        raise UserInputError(f"{label} must not be negative: '{text.strip()}'.")
    if not _UINT_RE.fullmatch(s):
        raise UserInputError(f"{label} is not a whole number: '{text.strip()}'.")
    limit = max_value()
    # int() refuses very long digit strings, so compare lengths first
    digits = s.lstrip("+").lstrip("0") or "0"
    if len(digits) > len(str(limit)):
        raise UserInputError(f"{label} exceeds the maximum of {limit}.")
    n = int(digits)
    if n > limit:
        raise UserInputError(f"{label} exceeds the maximum of {limit}.")
    return n


def parse_pair(text: str) -> tuple[int, int]:
    """
    Parse 'n1, n2' (comma and/or whitespace separated).
    A lone 0 is read as (0, 0) so it works as the exit answer.
    """
    s = (text or "").strip()
    if _UINT_RE.fullmatch(s) and not s.lstrip("+").strip("0"):
        return 0, 0
    parts = [p for p in _PAIR_SPLIT_RE.split(s) if p]
    if len(parts) != 2:  # noqa: PLR2004
        raise UserInputError(f"expected two numbers as 'n1, n2', got '{s}'.")
    return parse_uint(parts[0], "n1"), parse_uint(parts[1], "n2")


def parse_yes_no(text: str) -> bool:
    """Only an answer starting with y/Y means yes; everything else is no."""
    s = (text or "").strip()
    return s[:1] in {"y", "Y"}


def print_input_error(e: Exception) -> None:
    """Uniform, one-line friendly message for a rejected answer."""
    msg = str(e)
    if msg.startswith("Invalid input:"):
        msg = msg[len("Invalid input:"):].lstrip()
    print(f"{error_prefix('Invalid input:')} {msg}", file=sys.stderr)


def prompt_until_valid(prompt: str, parse: Callable[[str], T]) -> T:
    """
    Ask `prompt` until `parse` accepts the answer.
    EOFError / KeyboardInterrupt propagate to the caller.
    """
    while True:
        raw = input(prompt)
        try:
            return parse(raw)
        except UserInputError as e:
            print_input_error(e)


def debug(msg: str) -> None:
    if _rt_current().debug:
        print(f"[debug] {msg}", file=sys.stderr)


def clear_screen(keep_scrollback: bool = False) -> None:
    """
    Clear the terminal screen.
    - On Windows: uses 'cls'
    - On POSIX: ANSI sequences; optionally clear scrollback
    """
    if not sys.stdout.isatty():
        return
    if os.name == "nt":
        os.system("cls")
    else:
        seq = "\033[H\033[2J" if keep_scrollback else "\033[3J\033[H\033[2J"
        sys.stdout.write(seq)
        sys.stdout.flush()


def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    out: dict[str, object] = {}
    for k, v in (d or {}).items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out
