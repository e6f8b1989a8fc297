import threading

from examplekit.spinner import fib, main, spinner


def test_fib_base_cases():
    assert fib(0) == 0
    assert fib(1) == 1


def test_fib_recurrence():
    assert fib(20) == fib(19) + fib(18)
    assert fib(10) == 55


def test_spinner_stops_immediately_when_stopped():
    stop = threading.Event()
    stop.set()
    writes = []
    spinner(0.01, stop, writes.append)
    assert writes == []


def test_spinner_cycles_frames():
    stop = threading.Event()
    writes = []
    timer = threading.Timer(0.1, stop.set)
    timer.start()
    spinner(0.005, stop, writes.append)
    timer.join()
    frames = ["\r-", "\r\\", "\r|", "\r/"]
    assert writes
    assert all(w == frames[i % 4] for i, w in enumerate(writes))


def test_main_prints_result(capsys):
    assert main(["10"]) == 0
    assert capsys.readouterr().out.endswith("\rFibonacci(10) = 55\n")