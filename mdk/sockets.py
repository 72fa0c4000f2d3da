"""A thin, stateful wrapper around an IPv4 TCP or UDP socket."""

from __future__ import annotations

import enum
import errno
import select
import socket
import sys
from typing import Any

from . import sockopt

_WINDOWS = sys.platform == "win32"

Address = tuple[str, int]


class Protocol(enum.IntEnum):
    """Transport protocol of a socket."""

    TCP = socket.SOCK_STREAM
    UDP = socket.SOCK_DGRAM


class SocketTimeoutError(TimeoutError):
    """No data arrived within the requested wait."""


class SocketClosedError(ConnectionError):
    """The peer closed the connection."""


class Socket:
    """An IPv4 socket that remembers its open state and its addresses."""

    def __init__(self, sock: socket.socket | int | None = None,
                 protocol: Protocol = Protocol.TCP) -> None:
        self._sock: socket.socket | None = None
        self._blocking = True
        self._opened = False
        self._peer: Address = ("", 0)
        self._local: Address = ("", 0)
        if sock is not None:
            self._sock = self._wrap(sock)
            self.init(protocol)
            self._init_peer_address()
            self._init_local_address()

    @staticmethod
    def _wrap(sock: socket.socket | int) -> socket.socket:
        if isinstance(sock, socket.socket):
            return sock
        fd = int(sock)
        if fd < 0:
            raise OSError(errno.EBADF, "invalid socket descriptor")
        return socket.socket(fileno=fd)

    def _require(self) -> socket.socket:
        if self._sock is None:
            raise OSError(errno.EBADF, "socket is not open")
        return self._sock

    # -- state ---------------------------------------------------------------

    def init(self, protocol: Protocol = Protocol.TCP) -> None:
        """Create the underlying socket if there is none and mark it open."""
        if self._opened:
            return
        if self._sock is None:
            self._sock = socket.socket(socket.AF_INET, int(protocol))
        self._opened = True

    def close(self) -> None:
        """Close the connection; safe to call at any time."""
        if self._sock is None:
            return
        if self._opened:
            self._sock.close()
            self._opened = False
        else:
            self._sock.detach()
        self._sock = None

    def is_closed(self) -> bool:
        """True unless the socket has been opened."""
        return not self._opened

    def fileno(self) -> int:
        """Descriptor of the underlying socket, -1 if there is none."""
        return -1 if self._sock is None else self._sock.fileno()

    def attach(self, sock: socket.socket | int) -> None:
        """Operate on ``sock`` from now on; the previous socket is not closed."""
        self._sock = self._wrap(sock)
        self._blocking = True
        self._opened = True
        self._init_peer_address()
        self._init_local_address()

    def detach(self) -> int:
        """Give up the underlying descriptor without closing it; -1 if none."""
        fd = -1 if self._sock is None else self._sock.detach()
        self._sock = None
        self._blocking = True
        self._opened = False
        return fd

    # -- addresses -------------------------------------------------------------

    def _init_peer_address(self) -> bool:
        if self._sock is None:
            return False
        try:
            self._peer = self._sock.getpeername()[:2]
        except OSError:
            return False
        return True

    def _init_local_address(self) -> bool:
        if self._sock is None:
            return False
        try:
            self._local = self._sock.getsockname()[:2]
        except OSError:
            return False
        return True

    def peer_address(self) -> Address:
        """``(ip, port)`` of the other end, as recorded on connect or accept."""
        return self._peer

    def local_address(self) -> Address:
        """``(ip, port)`` of this end, as recorded on connect, accept or bind."""
        return self._local

    # -- waiting ---------------------------------------------------------------

    def _timed_out(self, seconds: int, microseconds: int) -> bool:
        if seconds <= 0 and microseconds <= 0:
            return False
        sock = self._require()
        wait = max(seconds, 0) + max(microseconds, 0) / 1_000_000
        try:
            readable, _, _ = select.select([sock], [], [], wait)
        except (OSError, ValueError):
            return True
        return not readable

    # -- TCP -------------------------------------------------------------------

    def send(self, data: bytes, flags: int = 0) -> int:
        """Send ``data``; return bytes sent, 0 if a non-blocking buffer is full."""
        sock = self._require()
        try:
            return sock.send(data, flags)
        except BlockingIOError:
            return 0

    def receive(self, size: int, peek: bool = False,
                seconds: int = 0, microseconds: int = 0) -> bytes:
        """Receive up to ``size`` bytes.

        With ``peek`` the data stays queued. A positive wait raises
        :class:`SocketTimeoutError` if nothing arrives in time. A non-blocking
        socket with nothing queued gives ``b""``; a closed peer raises
        :class:`SocketClosedError`.
        """
        if self._timed_out(seconds, microseconds):
            raise SocketTimeoutError("no data arrived in time")
        sock = self._require()
        try:
            data = sock.recv(size, socket.MSG_PEEK if peek else 0)
        except BlockingIOError:
            return b""
        if not data:
            raise SocketClosedError("connection closed by peer")
        return data

    def connect(self, host: str, port: int, timeout: int = 10) -> None:
        """Connect to ``host`` (a name or dotted address) within ``timeout`` seconds."""
        if host is None:
            raise ValueError("host must be given")
        sock = self._require()
        ip = sockopt.host_name_to_ip(host) or host
        sockopt.set_send_timeout(sock, timeout, 0)
        try:
            sock.connect((ip, port))
        finally:
            sockopt.set_send_timeout(sock, 0, 0)
        self._init_peer_address()
        self._init_local_address()

    def start_server(self, port: int, ip: str | None = None) -> None:
        """Bind to ``port`` on ``ip`` (all interfaces if None) and listen."""
        sock = self._require()
        if ip is None:
            address = "0.0.0.0"
        else:
            try:
                socket.inet_aton(ip)
            except OSError:
                raise ValueError(f"invalid IPv4 address {ip!r}") from None
            address = ip
        sock.bind((address, port))
        self._init_local_address()
        sock.listen(socket.SOMAXCONN)

    def accept(self) -> "Socket | None":
        """Accept a connection; None if non-blocking and none is pending."""
        sock = self._require()
        try:
            conn, _addr = sock.accept()
        except BlockingIOError:
            return None
        accepted = Socket()
        accepted.attach(conn)
        return accepted

    # -- UDP -------------------------------------------------------------------

    def send_to(self, ip: str, port: int, data: bytes, flags: int = 0) -> int:
        """Send a datagram to ``(ip, port)``; return the bytes sent."""
        return self._require().sendto(data, flags, (ip, port))

    def receive_from(self, size: int, peek: bool = False,
                     seconds: int = 0, microseconds: int = 0) -> tuple[bytes, Address]:
        """Receive a datagram as ``(data, (ip, port))``.

        Nothing to read on a non-blocking socket, or ``size <= 0``, gives
        ``(b"", ("", -1))``.
        """
        empty: tuple[bytes, Address] = (b"", ("", -1))
        if size <= 0:
            return empty
        flag = socket.MSG_PEEK if peek else 0
        while True:
            if self._timed_out(seconds, microseconds):
                raise SocketTimeoutError("no data arrived in time")
            sock = self._require()
            try:
                data, addr = sock.recvfrom(size, flag)
            except BlockingIOError:
                return empty
            except ConnectionResetError:
                if _WINDOWS:
                    # an earlier datagram could not be delivered; skip the report
                    continue
                raise
            return data, (addr[0], addr[1])

    # -- options ---------------------------------------------------------------

    def set_blocking(self, blocking: bool = False) -> None:
        """Switch between blocking and non-blocking mode."""
        self._require().setblocking(blocking)
        self._blocking = blocking

    def set_sock_opt(self, option: int, value: Any,
                     level: int = socket.SOL_SOCKET) -> None:
        """Set a raw socket option."""
        self._require().setsockopt(level, option, value)

    def set_no_delay(self, enabled: bool) -> None:
        """Turn TCP_NODELAY on or off."""
        sockopt.set_no_delay(self._require(), enabled)

    def set_send_buf_size(self, size: int) -> None:
        """Set the kernel send buffer size."""
        sockopt.set_send_buf_size(self._require(), size)

    def set_recv_buf_size(self, size: int) -> None:
        """Set the kernel receive buffer size."""
        sockopt.set_recv_buf_size(self._require(), size)

    def set_send_timeout(self, seconds: int, microseconds: int) -> None:
        """Set the blocking send timeout."""
        sockopt.set_send_timeout(self._require(), seconds, microseconds)

    def set_recv_timeout(self, seconds: int, microseconds: int) -> None:
        """Set the blocking receive timeout."""
        sockopt.set_recv_timeout(self._require(), seconds, microseconds)

    def __enter__(self) -> "Socket":
        return self

    def __exit__(self, *args) -> None:
        self.close()