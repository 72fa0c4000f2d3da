"""Daily rotating log files kept under ``<base>/log/<name>/``."""

from __future__ import annotations

import contextlib
import os
import threading
import time
from typing import IO

from .utils import current_thread_id, get_exe_dir, get_file_size, today_start

_EOL = "\r\n"
_DAY_SECONDS = 86400


class Logger:
    """Writes timestamped lines to one file per day, rotating oversized files."""

    def __init__(self, name: str | None = None, base_dir: str | os.PathLike | None = None) -> None:
        self._base_dir = os.fspath(base_dir) if base_dir is not None else get_exe_dir()
        self._initialised = False
        self._print = False
        self._lock = threading.Lock()
        self._file: IO[str] | None = None
        self._file_date = ""
        self._name = ""
        self._log_dir = ""
        self._max_log_size = 50
        self._max_exist_day = 30
        self._index = 0
        if name is not None:
            self.set_log_name(name)

    @property
    def log_dir(self) -> str:
        """Directory log files are written to; empty until a name is set."""
        return self._log_dir

    def set_log_name(self, name: str | None) -> None:
        """Choose the log name and create its directory; allowed only once."""
        if self._initialised:
            raise RuntimeError("log name has already been set")
        self._name = name or ""
        root = os.path.join(self._base_dir, "log")
        self._make_free_dir(root)
        self._log_dir = os.path.join(root, self._name or "run")
        self._make_free_dir(self._log_dir)
        self._initialised = True

    @staticmethod
    def _make_free_dir(path: str) -> None:
        os.makedirs(path, exist_ok=True)
        with contextlib.suppress(OSError):
            os.chmod(path, 0o777)

    def set_print_log(self, enabled: bool) -> None:
        """Also print every entry to standard output."""
        self._print = enabled

    def set_max_log_size(self, size_mb: int) -> None:
        """Size in megabytes at which the day's log file is renamed aside."""
        self._max_log_size = size_mb

    def set_max_exist_day(self, days: int) -> None:
        """Number of most recent days whose log files are kept."""
        self._max_exist_day = days

    def info(self, find_key: str, fmt: str, *args) -> None:
        """Write ``time Tid:id [find_key] message``; ``fmt`` is %-formatted with ``args``."""
        message = fmt % args if args else fmt
        with self._lock:
            prefix = self._prepare(find_key)
            self._file.write(prefix + message + _EOL)
            self._file.flush()
        if self._print:
            print(prefix + message)

    def stream_info(self, find_key: str, stream: bytes, fmt: str, *args) -> None:
        """Like :meth:`info`, followed by `` stream:`` and the bytes in hex."""
        message = fmt % args if args else fmt
        dump = ",".join(f"{byte:x}" for byte in bytes(stream))
        text = f"{message} stream:{dump}"
        with self._lock:
            prefix = self._prepare(find_key)
            self._file.write(prefix + text + _EOL)
            self._file.flush()
        if self._print:
            print(prefix + text)

    def del_log(self, days: int | None = None) -> None:
        """Delete log files not modified within the last ``days`` days."""
        with self._lock:
            self._delete_old(days)

    def close(self) -> None:
        """Close the open log file, if any."""
        with self._lock:
            self._close_file()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _close_file(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def _prepare(self, find_key: str) -> str:
        if not self._initialised:
            self.set_log_name(None)
        self._delete_old(None)
        now = time.time()
        self._rename_max_log(now)
        self._open_run_log(now)
        stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(now))
        return f"{stamp} Tid:{current_thread_id()} [{find_key}] "

    def _day_log_path(self, now: float) -> str:
        return os.path.join(self._log_dir, time.strftime("%Y-%m-%d.log", time.localtime(now)))

    def _rename_max_log(self, now: float) -> None:
        path = self._day_log_path(now)
        if not os.path.isfile(path):
            return
        if get_file_size(path) >= 1024 * 1024 * self._max_log_size:
            self._close_file()
            self._index += 1
            os.replace(path, f"{path}.{self._index}")

    def _open_run_log(self, now: float) -> None:
        date = time.strftime("%Y-%m-%d", time.localtime(now))
        if self._file is not None:
            if date == self._file_date:
                return
            self._close_file()
            self._index = 0
        self._file = open(self._day_log_path(now), "a", encoding="utf-8", newline="")
        self._file_date = date

    def _delete_old(self, days: int | None) -> None:
        if not self._log_dir or not os.path.isdir(self._log_dir):
            return
        keep = self._max_exist_day if days is None else days
        cutoff = today_start() - _DAY_SECONDS * (keep - 1)
        for root, _dirs, files in os.walk(self._log_dir):
            for filename in files:
                path = os.path.join(root, filename)
                try:
                    if os.stat(path).st_mtime < cutoff:
                        os.remove(path)
                except OSError:
                    continue