"""Socket option helpers that work on socket objects or raw descriptors."""

from __future__ import annotations

import contextlib
import errno
import socket
import struct
import sys
from typing import Iterator, Union

SocketLike = Union[socket.socket, int]

_WINDOWS = sys.platform == "win32"


@contextlib.contextmanager
def _as_socket(sock: SocketLike) -> Iterator[socket.socket]:
    """Yield a socket object for ``sock`` without taking ownership of a raw descriptor."""
    if isinstance(sock, socket.socket):
        yield sock
        return
    fd = int(sock)
    if fd < 0:
        raise OSError(errno.EBADF, "invalid socket descriptor")
    wrapped = socket.socket(fileno=fd)
    try:
        yield wrapped
    finally:
        wrapped.detach()


def _pack_timeout(seconds: int, microseconds: int) -> bytes:
    if _WINDOWS:
        milliseconds = seconds * 1000 + microseconds // 1000
        return struct.pack("I", max(milliseconds, 0))
    return struct.pack("ll", seconds, microseconds)


def host_name_to_ip(hostname: str | None) -> str:
    """Resolve a host name to a dotted IPv4 address; ``""`` if it cannot be resolved.

    An address that is already in dotted form comes back unchanged.
    """
    if not hostname:
        return ""
    try:
        return socket.gethostbyname(hostname)
    except (OSError, UnicodeError):
        return ""


def set_no_delay(sock: SocketLike, enabled: bool) -> None:
    """Turn TCP_NODELAY on or off; raises OSError if the option cannot be set."""
    with _as_socket(sock) as s:
        s.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1 if enabled else 0)


def set_send_buf_size(sock: SocketLike, size: int) -> None:
    """Set the kernel send buffer size in bytes."""
    with _as_socket(sock) as s:
        s.setsockopt(socket.SOL_SOCKET, socket.SO_SNDBUF, size)


def set_recv_buf_size(sock: SocketLike, size: int) -> None:
    """Set the kernel receive buffer size in bytes."""
    with _as_socket(sock) as s:
        s.setsockopt(socket.SOL_SOCKET, socket.SO_RCVBUF, size)


def set_send_timeout(sock: SocketLike, seconds: int, microseconds: int) -> None:
    """Set the blocking send timeout; zero for both disables it."""
    with _as_socket(sock) as s:
        s.setsockopt(socket.SOL_SOCKET, socket.SO_SNDTIMEO,
                     _pack_timeout(seconds, microseconds))


def set_recv_timeout(sock: SocketLike, seconds: int, microseconds: int) -> None:
    """Set the blocking receive timeout; zero for both disables it."""
    with _as_socket(sock) as s:
        s.setsockopt(socket.SOL_SOCKET, socket.SO_RCVTIMEO,
                     _pack_timeout(seconds, microseconds))