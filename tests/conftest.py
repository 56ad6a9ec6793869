from __future__ import annotations

import pytest

from primequery import runtime


@pytest.fixture(autouse=True)
def _fresh_runtime(tmp_path, monkeypatch):
    """Every test starts with built-in settings and an empty workspace."""
    monkeypatch.setenv("PRIMEQUERY_HOME", str(tmp_path / "workspace"))
    runtime.reset()
    yield
    runtime.reset()


@pytest.fixture
def feed(monkeypatch):
    """
    Script the answers to input(): feed(["17", "0", ""]).
    Running out of answers behaves like end of input.
    """
    prompts: list[str] = []

    def _install(lines):
        answers = iter(lines)

        def fake_input(prompt=""):
            prompts.append(prompt)
            try:
                return next(answers)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr("builtins.input", fake_input)
        return prompts

    return _install
