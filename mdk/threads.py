"""Simple threads and a pool of worker threads fed from a task list."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable

from .notify import Signal
from .task import Task

_STOP_WAIT_MS = 3000


class Thread:
    """Runs one call on a background thread; can be run again once it ends."""

    def __init__(self) -> None:
        self._task = Task()
        self._thread: threading.Thread | None = None
        self._running = False
        self._done = threading.Event()
        self._done.set()
        self._lock = threading.Lock()

    def run(self, func: Callable[[Any], Any], param: Any = None) -> bool:
        """Start ``func(param)`` on a new thread; False if one is still running."""
        with self._lock:
            if self._running:
                return False
            self._running = True
            self._task.accept(func, param)
            self._done.clear()
            self._thread = threading.Thread(target=self._main, daemon=True)
            self._thread.start()
            return True

    def _main(self) -> None:
        try:
            self._task.execute()
        finally:
            with self._lock:
                self._running = False
            self._done.set()

    def stop(self, timeout_ms: int = 0) -> bool:
        """Wait up to ``timeout_ms`` for the thread to end; return whether it did."""
        if self._done.is_set():
            return True
        if timeout_ms < 0:
            timeout_ms = 3
        return self._done.wait(timeout_ms / 1000)

    def wait_stop(self) -> None:
        """Block until the running call has returned."""
        self._done.wait()

    def ident(self) -> int | None:
        """Operating-system id of the last started thread, None if never run."""
        return None if self._thread is None else self._thread.native_id


@dataclass
class _WorkerContext:
    thread: Thread = field(default_factory=Thread)
    idle: bool = True
    running: bool = True


class ThreadPool:
    """A fixed set of worker threads that execute accepted tasks in order."""

    def __init__(self) -> None:
        self._tasks: deque[Task] = deque()
        self._tasks_lock = threading.Lock()
        self._workers: list[_WorkerContext] = []
        self._workers_lock = threading.Lock()
        self._new_task = Signal()
        self._on_start = Task()
        self._min_threads = 0

    def set_on_start(self, func: Callable[[Any], Any], param: Any = None) -> None:
        """Set a call every worker makes once when it begins."""
        self._on_start.accept(func, param)

    def start(self, min_threads: int) -> bool:
        """Start ``min_threads`` workers."""
        if min_threads < 0:
            raise ValueError("thread count must not be negative")
        self._min_threads = min_threads
        with self._workers_lock:
            count = max(min_threads - len(self._workers), 0)
            for _ in range(count):
                context = _WorkerContext()
                self._workers.append(context)
                context.thread.run(self._worker, context)
        return True

    def stop(self) -> None:
        """Drop pending tasks and stop every worker."""
        with self._workers_lock:
            with self._tasks_lock:
                self._tasks.clear()
            for context in self._workers:
                context.running = False
            self._new_task.notify()
            for context in self._workers:
                context.thread.stop(_STOP_WAIT_MS)
            self._workers.clear()

    def accept(self, func: Callable[[Any], Any], param: Any = None) -> None:
        """Queue ``func(param)`` for a worker to run."""
        with self._tasks_lock:
            self._tasks.append(Task(func, param))
        self._new_task.notify()

    def task_count(self) -> int:
        """Number of tasks waiting for a worker."""
        with self._tasks_lock:
            return len(self._tasks)

    def _pull_task(self) -> Task | None:
        with self._tasks_lock:
            return self._tasks.popleft() if self._tasks else None

    def _worker(self, context: _WorkerContext) -> None:
        self._on_start.execute()
        while context.running:
            context.idle = False
            while context.running:
                task = self._pull_task()
                if task is None:
                    break
                task.execute()
            context.idle = True
            if not context.running:
                break
            self._new_task.wait()
        # pass the wake-up on so the next waiting worker sees the stop too
        self._new_task.notify()