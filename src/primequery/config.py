from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

try:
    import tomllib as toml
except Exception:
    import tomli as toml  # type: ignore

from primequery.utility import UserInputError
from primequery.workspace import profiles_dir


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [PROFILE] section).
    .as_dict() feeds runtime.apply().

      - name:        resolved profile name (FILE.stem if not provided in [PROFILE])
      - description: one-line description from [PROFILE] or "(no description)"
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- Paths -----------------------------------------------------------------

def _profile_path(name: str) -> Path:
    return profiles_dir() / f"{name}.toml"


# --- I/O -------------------------------------------------------------------


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except (OSError, toml.TOMLDecodeError) as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", None) or getattr(e, "strerror", None) or str(e)
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise UserInputError(f"reading {path.name}: {msg}{loc}.") from None


def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """
    Extract [PROFILE] meta (name, description) and return:
      (settings_without_profile, resolved_name, resolved_description)
    """
    meta = raw.get("PROFILE") or {}
    data = {k: v for k, v in raw.items() if k != "PROFILE"}

    name = str(meta.get("name") or fallback_name)
    description = _sanitize_oneline(str(meta.get("description") or ""))

    return data, name, description


# --- Public API ------------------------------------------------------------


def list_all_profiles() -> list[str]:
    """Return the available profile names (filename stems)."""
    pdir = profiles_dir()
    if not pdir.exists():
        return []
    return sorted(p.stem for p in pdir.glob("*.toml"))


def load_settings(name: str | None) -> Settings:
    """
    Load a profile by name (default 'default') and return
    Settings(data=..., name=..., description=..., _source=path).

    The 'default' profile needs no file: built-in defaults apply.
    """
    if not name:
        name = "default"

    path = _profile_path(name)
    if not path.exists():
        if name == "default":
            return Settings(data={}, name="default", description="built-in defaults")
        known = ", ".join(sorted({"default", *list_all_profiles()}))
        raise UserInputError(f"unknown profile '{name}' (looked for {path}). Available: {known}.")

    raw = _load_toml(path)
    data, resolved_name, description = _split_profile_data(raw, path.stem)

    for section in ("BEHAVIOUR", "OUTPUT"):
        value = data.get(section, {})
        if not isinstance(value, dict):
            raise UserInputError(f"reading {path.name}: [{section}] must be a table.")

    limit = data.get("BEHAVIOUR", {}).get("MAX_VALUE")
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 1):
        raise UserInputError(f"reading {path.name}: BEHAVIOUR.MAX_VALUE must be a whole number of at least 1.")

    return Settings(
        data=data,
        name=resolved_name,
        description=description,
        _source=path,
    )
