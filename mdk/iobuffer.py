"""Ordered byte buffer made of fixed-size blocks."""

from __future__ import annotations

import threading

BLOCK_SIZE = 8192


class IOBufferBlock:
    """A fixed-capacity chunk of buffered bytes with its own read position."""

    def __init__(self) -> None:
        self._data = bytearray()
        self._read_pos = 0

    def write(self, data: bytes) -> bool:
        """Append ``data`` if it fits in the free space; return whether it did."""
        if not data or len(self._data) + len(data) > BLOCK_SIZE:
            return False
        self._data += data
        return True

    def read(self, length: int, consume: bool = True) -> bytes:
        """Return up to ``length`` unread bytes, advancing past them if ``consume``."""
        start = self._read_pos
        chunk = bytes(self._data[start:start + max(length, 0)])
        if consume:
            self._read_pos += len(chunk)
        return chunk


class IOBuffer:
    """A first-in first-out byte buffer that grows one block at a time."""

    def __init__(self) -> None:
        self._blocks: list[IOBufferBlock] = []
        self._current: IOBufferBlock | None = None
        self._size = 0
        self._lock = threading.Lock()

    def write(self, data: bytes) -> None:
        """Append ``data`` to the end of the buffer."""
        payload = bytes(data)
        with self._lock:
            for start in range(0, len(payload), BLOCK_SIZE):
                chunk = payload[start:start + BLOCK_SIZE]
                if self._current is None or not self._current.write(chunk):
                    self._current = IOBufferBlock()
                    self._blocks.append(self._current)
                    self._current.write(chunk)
                self._size += len(chunk)

    def read(self, length: int, consume: bool = True) -> bytes | None:
        """Return exactly ``length`` bytes from the front, or None if fewer are held.

        With ``consume`` false the bytes stay in the buffer.
        """
        if length <= 0:
            raise ValueError("read length must be positive")
        with self._lock:
            if self._size < length:
                return None
            parts: list[bytes] = []
            remaining = length
            position = 0
            while remaining:
                block = self._blocks[position]
                chunk = block.read(remaining, consume)
                parts.append(chunk)
                remaining -= len(chunk)
                if consume:
                    self._size -= len(chunk)
                if not remaining:
                    break
                if consume:
                    del self._blocks[position]
                else:
                    position += 1
            return b"".join(parts)

    def clear(self) -> None:
        """Discard everything held."""
        with self._lock:
            self._blocks.clear()
            self._current = None
            self._size = 0

    def __len__(self) -> int:
        return self._size