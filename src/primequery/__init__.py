from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("primequery")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .config import load_settings
from .primes import (
    count_primes,
    count_with_factor_count,
    factor_count,
    is_prime,
    iter_primes,
    iter_with_factor_count,
    prime_factors,
)
from .runtime import APPLY, CFG
from .utility import UserInputError
from .workspace import workspace_dir

__all__ = [
    "APPLY",
    "CFG",
    "UserInputError",
    "__version__",
    "count_primes",
    "count_with_factor_count",
    "factor_count",
    "is_prime",
    "iter_primes",
    "iter_with_factor_count",
    "load_settings",
    "prime_factors",
    "workspace_dir",
]
