"""Deferred calls and elapsed-time reporting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from .utils import mill_time


@dataclass
class Task:
    """A callable and the single argument it will be given."""

    func: Callable[[Any], Any] | None = None
    param: Any = None

    def accept(self, func: Callable[[Any], Any], param: Any = None) -> None:
        """Replace the stored call."""
        self.func = func
        self.param = param

    def execute(self) -> Any:
        """Run the stored call and return its result; None if there is none."""
        if self.func is None:
            return None
        return self.func(self.param)


class FinishedTime:
    """Measures elapsed milliseconds and reports them to a callback once."""

    def __init__(self, callback: Callable[["FinishedTime"], Any]) -> None:
        self._task = Task(callback, self)
        self._finished = False
        self._use_time = 0
        self._start = mill_time()

    def use_time(self) -> int:
        """Milliseconds between creation and :meth:`finished`."""
        return self._use_time

    def finished(self) -> None:
        """Stop the clock and run the callback; later calls do nothing."""
        if self._finished:
            return
        self._finished = True
        self._use_time = mill_time() - self._start
        self._task.execute()

    def __enter__(self) -> "FinishedTime":
        return self

    def __exit__(self, *args) -> None:
        self.finished()