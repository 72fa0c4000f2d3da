import time

from mdk.task import FinishedTime, Task


def test_empty_task_returns_none():
    assert Task().execute() is None


def test_accept_function():
    task = Task()
    task.accept(lambda value: value * 2, 21)
    assert task.execute() == 42


def test_accept_bound_method():
    class Counter:
        def __init__(self):
            self.total = 0

        def add(self, amount):
            self.total += amount
            return self.total

    counter = Counter()
    task = Task()
    task.accept(counter.add, 5)
    task.execute()
    assert task.execute() == 10
    assert counter.total == 10


def test_accept_replaces_previous():
    task = Task(lambda p: "first", None)
    task.accept(lambda p: p, "second")
    assert task.execute() == "second"


def test_finished_time_reports_once():
    calls = []
    timer = FinishedTime(calls.append)
    timer.finished()
    timer.finished()
    assert calls == [timer]


def test_finished_time_measures_elapsed():
    recorded = []
    with FinishedTime(lambda t: recorded.append(t.use_time())) as timer:
        time.sleep(0.03)
    assert len(recorded) == 1
    assert recorded[0] >= 20
    assert timer.use_time() == recorded[0]


def test_use_time_before_finish_is_zero():
    timer = FinishedTime(lambda t: None)
    assert timer.use_time() == 0