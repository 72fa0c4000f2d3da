import pytest

from mdk.ringqueue import BoundedQueue


def test_fifo_order():
    queue = BoundedQueue(4)
    for item in ("a", "b", "c"):
        assert queue.push(item) is True
    assert [queue.pop() for _ in range(3)] == ["a", "b", "c"]


def test_pop_empty_returns_none():
    assert BoundedQueue(2).pop() is None


def test_capacity_limit():
    queue = BoundedQueue(2)
    assert queue.push(1) is True
    assert queue.push(2) is True
    assert queue.push(3) is False
    assert queue.pop() == 1
    assert queue.push(3) is True
    assert [queue.pop(), queue.pop(), queue.pop()] == [2, 3, None]


def test_wraparound_keeps_order():
    queue = BoundedQueue(3)
    seen = []
    for n in range(10):
        assert queue.push(n)
        if n % 2:
            seen.append(queue.pop())
            seen.append(queue.pop())
    assert seen == list(range(10))


def test_push_none_rejected():
    with pytest.raises(ValueError):
        BoundedQueue(1).push(None)


@pytest.mark.parametrize("size", [0, -3])
def test_bad_size(size):
    with pytest.raises(ValueError):
        BoundedQueue(size)


def test_clear_empties_queue():
    queue = BoundedQueue(3)
    queue.push("x")
    queue.push("y")
    queue.clear()
    assert queue.pop() is None
    assert queue.push("z") is True
    assert queue.pop() == "z"