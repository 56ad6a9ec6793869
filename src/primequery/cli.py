# src/primequery/cli.py

"""
Prime Query - interactive number-theory console

Description:
    Tests single integers for primality, counts primes in a range and finds
    the integers in a range with an exact number of prime factors (counted
    with multiplicity). Without a command an interactive menu is shown.

usage: see primequery -h
"""

from __future__ import annotations

import argparse
import faulthandler
import sys
import textwrap
import traceback

from colorama import Fore
from colorama import init as colorama_init

from primequery import __version__ as _ver
from primequery.config import load_settings
from primequery.fmt import error_prefix, paint
from primequery.runtime import APPLY
from primequery.runtime import current as _rt_current
from primequery.session import (
    count_primes_session,
    factor_count_session,
    is_prime_session,
    report_count_primes,
    report_factor_count,
    report_is_prime,
)
from primequery.utility import UserInputError, clear_screen, debug, flatten_dotted, parse_uint, typename

MENU = textwrap.dedent("""\
    1. Test a number for primality
    2. Count primes in a range
    3. Find numbers with an exact number of prime factors
    0. Exit""")

MENU_PROMPT = "Enter your choice (0-3): "

SESSIONS = {
    1: is_prime_session,
    2: count_primes_session,
    3: factor_count_session,
}


def _install_loud_error_handlers(debug_on: bool) -> None:
    if not debug_on:
        return
    # Always show full Python tracebacks
    faulthandler.enable()

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    if not msg.startswith("Error:"):
        msg = f"{error_prefix()} {msg}"
    print(msg, file=sys.stderr)


def _read_choice(raw: str) -> int | None:
    try:
        return int(raw.strip())
    except ValueError:
        return None


def run_menu() -> int:
    """Show the menu until 0 is chosen or input ends."""
    while True:
        print()
        print(MENU)
        try:
            choice = _read_choice(input(MENU_PROMPT))
        except (EOFError, KeyboardInterrupt):
            print()
            return 0

        if choice == 0:
            return 0

        session = SESSIONS.get(choice)
        if session is None:
            print("Invalid choice. Please try again.")
            continue

        try:
            session()
        except (EOFError, KeyboardInterrupt):
            print()
            return 0


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    commands:
      prime N
          Test N for primality.

      count N1 N2 [--show]
          Count the primes between N1 and N2 (inclusive, either order).

      factors N1 N2 K [--show]
          Count the numbers between N1 and N2 with exactly K prime factors,
          counted with multiplicity.

    Without a command the interactive menu is started.
    """)

    p = argparse.ArgumentParser(
        prog="primequery",
        description="Prime Query — primality, prime counts and prime-factor counts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    p.add_argument("--profile", default=None, help="Settings profile from the workspace profiles folder")
    p.add_argument("--debug", action="store_true", help="Show timings and internal trace info")
    p.add_argument("--no-color", action="store_true", help="Disable coloured output")
    p.add_argument("--max-value", type=int, default=None, help="Largest accepted input value")

    sub = p.add_subparsers(dest="command", metavar="command")

    sp = sub.add_parser("prime", help="test one number for primality")
    sp.add_argument("n")

    sc = sub.add_parser("count", help="count primes in a range")
    sc.add_argument("n1")
    sc.add_argument("n2")
    sc.add_argument("--show", action="store_true", help="list every prime found")

    sf = sub.add_parser("factors", help="find numbers with K prime factors")
    sf.add_argument("n1")
    sf.add_argument("n2")
    sf.add_argument("k")
    sf.add_argument("--show", action="store_true", help="list every match with its factors")

    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        # Only show traceback in debug mode
        if _rt_current().debug or "--debug" in (argv or sys.argv):
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def _apply_profile(args) -> None:
    selected = load_settings(args.profile)
    APPLY(selected)  # install into runtime

    rt = _rt_current()
    if args.debug:
        rt.debug = True
    if args.no_color:
        rt.override("OUTPUT.COLOR", False)
    if args.max_value is not None:
        if args.max_value < 1:
            raise UserInputError("--max-value must be at least 1.")
        rt.override("BEHAVIOUR.MAX_VALUE", args.max_value)

    if rt.debug:
        debug(f"active profile: {rt.profile_name}")
        src_path = getattr(selected, "_source", None)
        if src_path:
            debug(f"profile file: {src_path}")
        flat = flatten_dotted(rt.settings)
        debug("runtime settings (flattened):")
        for k in sorted(flat, key=str.lower):
            v = flat[k]
            print(f"  - {k}: {v!r} ({typename(v)})", file=sys.stderr)


# ---- main ----
def _main_impl(argv=None) -> int:

    colorama_init(autoreset=True)

    parser = _build_parser()
    args = parser.parse_args(argv)
    _rt_current().debug = bool(args.debug)

    _install_loud_error_handlers(args.debug)
    _apply_profile(args)

    # --- one-shot paths ---
    if args.command == "prime":
        report_is_prime(parse_uint(args.n, "N"))
        return 0
    if args.command == "count":
        report_count_primes(parse_uint(args.n1, "N1"), parse_uint(args.n2, "N2"), args.show)
        return 0
    if args.command == "factors":
        report_factor_count(
            parse_uint(args.n1, "N1"),
            parse_uint(args.n2, "N2"),
            parse_uint(args.k, "K"),
            args.show,
        )
        return 0

    # --- interactive menu ---
    if not _rt_current().debug:
        clear_screen()
    print(paint(f"Prime Query v{_ver} — primes, prime counts and prime-factor counts", Fore.YELLOW, bright=True))
    return run_menu()


if __name__ == "__main__":
    raise SystemExit(main())
