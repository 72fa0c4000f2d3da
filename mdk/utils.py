"""Small helpers: string trimming, address packing, time and system queries."""

from __future__ import annotations

import os
import sys
import threading
import time

_BLANKS = " \t"


def trim_string(text: str, chars: str) -> str:
    """Remove every occurrence of any character in ``chars`` from ``text``."""
    return "".join(c for c in text if c not in chars)


def trim_string_left(text: str, chars: str) -> str:
    """Remove leading characters that appear in ``chars``."""
    return text.lstrip(chars) if chars else text


def trim_string_right(text: str, chars: str) -> str:
    """Remove trailing characters that appear in ``chars``."""
    return text.rstrip(chars) if chars else text


def trim(text: str) -> str:
    """Remove all spaces and tabs."""
    return trim_string(text, _BLANKS)


def trim_left(text: str) -> str:
    """Remove leading spaces and tabs."""
    return text.lstrip(_BLANKS)


def trim_right(text: str) -> str:
    """Remove trailing spaces and tabs."""
    return text.rstrip(_BLANKS)


def _parse_octet(part: str) -> int:
    if not part.isdigit() or not part.isascii():
        raise ValueError(f"invalid address component {part!r}")
    value = int(part)
    if str(value) != part or value > 255:
        raise ValueError(f"invalid address component {part!r}")
    return value


def addr_to_i64(ip: str, port: int) -> int:
    """Pack a dotted IPv4 address and a port into a 64-bit integer.

    The four octets occupy the low four bytes (first octet lowest), the port
    the high four bytes as a little-endian signed 32-bit integer.
    """
    parts = ip.split(".")
    if len(parts) != 4:
        raise ValueError(f"invalid IPv4 address {ip!r}")
    octets = bytes(_parse_octet(part) for part in parts)
    port_bytes = (port & 0xFFFFFFFF).to_bytes(4, "little")
    return int.from_bytes(octets + port_bytes, "little")


def i64_to_addr(addr64: int) -> tuple[str, int]:
    """Unpack an integer made by :func:`addr_to_i64` into ``(ip, port)``."""
    raw = (addr64 & 0xFFFFFFFFFFFFFFFF).to_bytes(8, "little")
    ip = ".".join(str(b) for b in raw[:4])
    port = int.from_bytes(raw[4:], "little", signed=True)
    return ip, port


def _i32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def reversal(value: int) -> int:
    """Reverse the byte order of a signed 32-bit integer using arithmetic shifts."""
    i = _i32(value)
    out = _i32(i << 24)
    out = _i32(out + (i >> 24))
    out = _i32(out + (_i32(_i32(i >> 8) << 24) >> 8))
    out = _i32(out + (_i32(_i32(i >> 16) << 24) >> 16))
    return out


def get_file_size(filename: str | os.PathLike) -> int:
    """Return the size of a file in bytes, or 0 if it cannot be examined."""
    try:
        return os.stat(filename).st_size
    except OSError:
        return 0


def get_cpu_number(max_cpu: int, default_cpu_number: int) -> int:
    """Return the number of CPUs, or the default if detection looks wrong."""
    count = os.cpu_count()
    if count is None or count > max_cpu:
        return default_cpu_number
    return count


def current_thread_id() -> int:
    """Return the operating-system id of the calling thread."""
    return threading.get_native_id()


def today_start() -> int:
    """Return the epoch time of local midnight at the start of today."""
    now = int(time.time())
    tm = time.localtime(now)
    return now - (tm.tm_hour * 3600 + tm.tm_min * 60 + tm.tm_sec)


def get_exe_dir() -> str:
    """Return the directory of the running program, or ``"./"`` if unknown."""
    program = sys.argv[0] if sys.argv else ""
    if not program:
        return "./"
    directory = os.path.dirname(os.path.abspath(program))
    return directory or "./"


def mill_time() -> int:
    """Return the current wall-clock time in milliseconds."""
    return time.time_ns() // 1_000_000


def sleep_ms(milliseconds: int) -> None:
    """Sleep for the given number of milliseconds."""
    time.sleep(max(milliseconds, 0) / 1000)