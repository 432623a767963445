"""Cancellation, deadlines and producer/consumer hand-offs between threads."""

import queue
import threading
import time

_POLL = 0.01
_DONE = object()


class _Transcript:
    """Prints lines and keeps them, safely from several threads."""

    def __init__(self):
        self._lines = []
        self._lock = threading.Lock()

    def __call__(self, line):
        with self._lock:
            self._lines.append(line)
        print(line)

    @property
    def lines(self):
        with self._lock:
            return list(self._lines)


def slow_task(cancelled, steps=5, step_time=0.3, report=print):
    """Run ``steps`` timed steps unless ``cancelled`` is set; True if all steps ran."""
    for i in range(steps):
        if cancelled.is_set():
            report("Task canceled")
            return False
        time.sleep(step_time)
        report(f"Doing task {i}...")
    return True


def context_timeout(timeout=4.0, steps=5, step_time=0.3):
    """Run a slow task, wait out the whole deadline, then cancel; return printed lines."""
    log = _Transcript()
    cancelled = threading.Event()
    task = threading.Thread(
        target=slow_task, args=(cancelled, steps, step_time, log), daemon=True
    )
    task.start()
    time.sleep(timeout)
    cancelled.set()
    log("Operation timed out!")
    return log.lines


def context_done_multiple(timeout=0.1):
    """Let two threads and the caller all observe one deadline; return printed lines."""
    log = _Transcript()
    done = threading.Event()

    def waiter(number):
        done.wait()
        log(f"Goroutine {number}: context done")

    waiters = [threading.Thread(target=waiter, args=(n,), daemon=True) for n in (1, 2)]
    for thread in waiters:
        thread.start()
    time.sleep(timeout)
    done.set()
    log("Main: context done")
    for thread in waiters:
        thread.join()
    return log.lines


def context_success(timeout=4.0, steps=5, step_time=1.0):
    """Wait for a slow task or the deadline, whichever comes first; return printed lines."""
    log = _Transcript()
    cancelled = threading.Event()
    finished = threading.Event()

    def run():
        if slow_task(cancelled, steps, step_time, log):
            finished.set()

    threading.Thread(target=run, daemon=True).start()
    if finished.wait(timeout):
        log("Task completed successfully.")
    else:
        cancelled.set()
        log("Operation timed out!")
    return log.lines


def producer_consumer(count=100, buffer=2):
    """Pass 1..count through a bounded queue to a printing consumer; return what it got."""
    channel = queue.Queue(maxsize=buffer)
    received = []

    def produce():
        for value in range(1, count + 1):
            channel.put(value)
        channel.put(_DONE)

    def consume():
        for value in iter(channel.get, _DONE):
            print(value)
            received.append(value)

    threads = [threading.Thread(target=produce), threading.Thread(target=consume)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return received


def select_until_done(reads=10):
    """Produce counting values until a reader has taken ``reads`` of them; return those."""
    channel = queue.Queue(maxsize=1)
    done = threading.Event()
    taken = []

    def put():
        value = 0
        while not done.is_set():
            try:
                channel.put(value, timeout=_POLL)
            except queue.Full:
                continue
            print("Channel executed")
            value += 1
        print("Done executed...................")

    def take():
        for _ in range(reads):
            taken.append(channel.get())
        done.set()

    producer = threading.Thread(target=put)
    reader = threading.Thread(target=take)
    producer.start()
    reader.start()
    print("Executing done from main..")
    reader.join()
    producer.join()
    print("Executed done from main..")
    return taken