import pytest

from mdk.iobuffer import BLOCK_SIZE, IOBuffer, IOBufferBlock


def test_round_trip():
    buf = IOBuffer()
    buf.write(b"hello world")
    assert len(buf) == len(b"hello world")
    assert buf.read(5) == b"hello"
    assert buf.read(6) == b" world"
    assert len(buf) == 0


def test_read_more_than_available_returns_none():
    buf = IOBuffer()
    buf.write(b"abc")
    assert buf.read(4) is None
    assert len(buf) == 3
    assert buf.read(3) == b"abc"


def test_peek_keeps_data():
    buf = IOBuffer()
    buf.write(b"\x00\x05abcde")
    assert buf.read(2, consume=False) == b"\x00\x05"
    assert len(buf) == 7
    assert buf.read(7) == b"\x00\x05abcde"


def test_large_write_spans_blocks():
    data = bytes(i % 251 for i in range(3 * BLOCK_SIZE + 5))
    buf = IOBuffer()
    buf.write(data)
    assert len(buf) == len(data)
    first = buf.read(BLOCK_SIZE + 10)
    rest = buf.read(len(data) - len(first))
    assert first + rest == data
    assert len(buf) == 0


def test_peek_across_blocks_then_consume():
    data = bytes(i % 7 for i in range(BLOCK_SIZE * 2))
    buf = IOBuffer()
    buf.write(data[:BLOCK_SIZE - 3])
    buf.write(data[BLOCK_SIZE - 3:])
    assert buf.read(len(data), consume=False) == data
    assert buf.read(len(data)) == data


def test_many_small_writes_preserve_order():
    buf = IOBuffer()
    pieces = [bytes([n]) * 1000 for n in range(20)]
    for piece in pieces:
        buf.write(piece)
    assert buf.read(sum(map(len, pieces))) == b"".join(pieces)


def test_clear():
    buf = IOBuffer()
    buf.write(b"data")
    buf.clear()
    assert len(buf) == 0
    assert buf.read(1) is None


@pytest.mark.parametrize("length", [0, -1])
def test_non_positive_length_rejected(length):
    buf = IOBuffer()
    buf.write(b"x")
    with pytest.raises(ValueError):
        buf.read(length)


def test_empty_write_is_noop():
    buf = IOBuffer()
    buf.write(b"")
    assert len(buf) == 0


def test_block_capacity():
    block = IOBufferBlock()
    assert block.write(b"a" * BLOCK_SIZE) is True
    assert block.write(b"b") is False
    assert block.write(b"") is False


def test_block_partial_read_and_peek():
    block = IOBufferBlock()
    block.write(b"abcdef")
    assert block.read(3, consume=False) == b"abc"
    assert block.read(3) == b"abc"
    assert block.read(10) == b"def"
    assert block.read(1) == b""