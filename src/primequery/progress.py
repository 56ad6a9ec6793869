# src/primequery/progress.py
from __future__ import annotations

import sys
import time


class Progress:
    """Throttled one-line progress bar for range scans."""

    def __init__(self, start: int, end: int, *, enabled: bool = True, label: str = ""):
        self.start_value = start
        self.total = max(1, int(end - start + 1))
        self.enabled = enabled
        self.label = label
        self.t0 = time.perf_counter()
        self.last_draw = 0.0
        self.spin = "|/-\\"
        self.i = 0
        self.drawn = False

    def tick(self, value: int) -> None:
        """Callback for the range iterators: `value` is the current candidate."""
        self.update(value - self.start_value + 1)

    def update(self, done: int) -> None:
        THROTTLE = 0.05
        if not self.enabled:
            return
        now = time.perf_counter()
        if now - self.last_draw < THROTTLE:  # throttle to avoid flicker
            return
        self.last_draw = now
        self.drawn = True
        self.i = (self.i + 1) % len(self.spin)
        frac = min(max(done / self.total, 0.0), 1.0)
        pct = int(frac * 100)
        bar_len = 24
        fill = int(frac * bar_len)
        bar = "#" * fill + "-" * (bar_len - fill)
        msg = f"\r[{self.spin[self.i]}] [{bar}] {pct:3d}%  {self.label[:40]}"
        sys.stdout.write(msg)
        sys.stdout.flush()

    def done(self) -> None:
        if not (self.enabled and self.drawn):
            return
        sys.stdout.write("\r" + " " * 80 + "\r")
        sys.stdout.flush()

    def __enter__(self) -> Progress:
        return self

    def __exit__(self, *exc) -> None:
        self.done()
