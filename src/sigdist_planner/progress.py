# src/sigdist_planner/progress.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TextIO
import sys
import shutil


@dataclass
class _BarState:
    desc: str
    total: Optional[int]
    value: int = 0
    feasible: int = 0


def _terminal_width() -> int:
    try:
        return shutil.get_terminal_size(fallback=(80, 20)).columns
    except (OSError, ValueError):
        return 80


class ProgressReporter:
    """
    Textual progress bar for the candidate sweep.

    - Writes to stderr so the selection line on stdout stays clean.
    - Tracks how many evaluated candidates were feasible.
    - One active bar at a time.
    """

    def __init__(self, stream: Optional[TextIO] = None, enabled: bool = True) -> None:
        self.stream = stream or sys.stderr
        self.enabled = enabled
        self._state: Optional[_BarState] = None

    # Public API --------------------------------------------------------

    def start(self, description: str, total: Optional[int] = None) -> None:
        """Start (or restart) a bar for a new sweep."""
        if not self.enabled:
            return
        if self._state is not None:
            self._finish_line()
        self._state = _BarState(desc=description, total=total)
        self._render()

    def advance(self, n: int = 1, feasible: int = 0) -> None:
        """Count n more evaluated candidates, `feasible` of which passed."""
        if not self.enabled or self._state is None:
            return
        self._state.value += n
        self._state.feasible += int(feasible)
        self._render()

    def end(self) -> None:
        """Finish the current bar (newline) and clear state."""
        if not self.enabled or self._state is None:
            return
        self._finish_line()
        self._state = None

    # Internal helpers --------------------------------------------------

    def _render(self) -> None:
        if self._state is None or not self.enabled:
            return

        st = self._state
        width = _terminal_width()

        if st.total is None or st.total <= 0:
            text = f"{st.desc}: {st.value} ({st.feasible} feasible)"
        else:
            frac = max(0.0, min(1.0, st.value / float(st.total)))
            bar_width = max(10, min(40, width - len(st.desc) - 36))
            filled = int(bar_width * frac)
            bar = "=" * filled + " " * (bar_width - filled)
            text = (
                f"{st.desc} |{bar}| {st.value}/{st.total} "
                f"({st.feasible} feasible)"
            )

        self._clear_line(width)
        self.stream.write(text[: width - 1])
        self.stream.flush()

    def _clear_line(self, width: int) -> None:
        self.stream.write("\r" + " " * (width - 1) + "\r")

    def _finish_line(self) -> None:
        self._clear_line(_terminal_width())
        if self._state is None:
            return
        st = self._state
        count = f"{st.value}" if st.total is None else f"{st.value}/{st.total}"
        self.stream.write(f"{st.desc}: {count}, {st.feasible} feasible\n")
        self.stream.flush()


class NullProgressReporter(ProgressReporter):
    """No-op reporter for programmatic use."""

    def __init__(self) -> None:
        super().__init__(enabled=False)
