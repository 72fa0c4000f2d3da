import threading

from mdk.notify import Signal


def test_wait_times_out_without_notify():
    assert Signal().wait(10) is False


def test_notify_before_wait_passes_once():
    signal = Signal()
    signal.notify()
    signal.notify()
    signal.notify()
    assert signal.wait(0) is True
    assert signal.wait(0) is False


def test_notify_wakes_waiting_thread():
    signal = Signal()
    results = []
    waiter = threading.Thread(target=lambda: results.append(signal.wait(5000)))
    waiter.start()
    signal.notify()
    waiter.join(5)
    assert results == [True]
    assert signal.wait(0) is False


def test_wait_without_timeout_after_notify():
    signal = Signal()
    signal.notify()
    assert signal.wait() is True