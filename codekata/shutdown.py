"""Graceful shutdown of background workers and of a small job-queue HTTP service."""

import asyncio
import contextlib
import logging
import queue
import signal
import threading
import time
from datetime import datetime

from aiohttp import web

_log = logging.getLogger(__name__)
_POLL = 0.05
_CLOSED = object()
_SHUTDOWN_TIMEOUT = 10.0


class QueueFullError(RuntimeError):
    """Raised when a job cannot be queued because the queue is at capacity."""


class QueueClosedError(RuntimeError):
    """Raised when a job is queued after the queue was closed."""


class JobQueue:
    """A bounded queue of numbered jobs; every enqueue attempt takes the next number."""

    def __init__(self, capacity=100):
        self._items = queue.Queue(maxsize=capacity)
        self._counter = 0
        self._lock = threading.Lock()
        self._closed = threading.Event()

    def enqueue(self):
        """Queue a new job and return its id."""
        with self._lock:
            if self._closed.is_set():
                raise QueueClosedError("job queue is closed")
            self._counter += 1
            job_id = self._counter
        try:
            self._items.put_nowait(job_id)
        except queue.Full:
            raise QueueFullError("Job queue full") from None
        return job_id

    def close(self):
        """Refuse new jobs; queued jobs can still be taken."""
        with self._lock:
            self._closed.set()

    def _take(self, timeout):
        try:
            return self._items.get(timeout=timeout)
        except queue.Empty:
            return _CLOSED if self._closed.is_set() else None


@contextlib.contextmanager
def _signal_event():
    event = threading.Event()

    def handler(signum, frame):
        event.set()

    previous = {sig: signal.signal(sig, handler) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        yield event
    finally:
        for sig, old in previous.items():
            signal.signal(sig, old)


def ticker_worker(stop_event, interval=1.0, report=print):
    """Report a tick every ``interval`` until stopped, then clean up; return the tick count."""
    ticks = 0
    while not stop_event.wait(interval):
        report(f"Worker: doing work at {datetime.now()}")
        ticks += 1
    report("Worker: context cancelled, cleaning up...")
    time.sleep(interval)
    report("Worker: shutdown complete")
    return ticks


def graceful_shutdown(stop_event=None, interval=1.0, timeout=5.0):
    """Run a ticking worker until stopped (by SIGINT/SIGTERM when no event is given).

    Returns True if the worker finished within ``timeout`` after the stop.
    """
    with contextlib.ExitStack() as stack:
        if stop_event is None:
            stop_event = stack.enter_context(_signal_event())
        worker = threading.Thread(target=ticker_worker, args=(stop_event, interval), daemon=True)
        worker.start()
        stop_event.wait()
        print("\nMain: received shutdown signal")
        worker.join(timeout)
        if worker.is_alive():
            print("Main: shutdown timeout reached, forcing exit")
            return False
        print("Main: all workers shut down gracefully")
        return True


def http_worker(stop_event, worker_id, queue, work_time=2.0, report=None):
    """Process queued jobs until stopped or the queue is closed and empty; return job ids."""
    report = report or _log.info
    processed = []
    while True:
        if stop_event.is_set():
            report(f"Worker {worker_id}: shutting down")
            return processed
        job_id = queue._take(_POLL)
        if job_id is None:
            continue
        if job_id is _CLOSED:
            report(f"Worker {worker_id}: job queue closed")
            return processed
        report(f"Worker {worker_id}: processing job {job_id}")
        time.sleep(work_time)
        report(f"Worker {worker_id}: finished job {job_id}")
        processed.append(job_id)


def create_enqueue_app(queue):
    """Build a web app whose /enqueue endpoint adds a job to ``queue``."""

    async def enqueue(request):
        try:
            job_id = queue.enqueue()
        except QueueFullError:
            return web.Response(status=503, text="Job queue full\n")
        return web.Response(text=f"Enqueued job {job_id}\n")

    app = web.Application()
    app.router.add_route("*", "/enqueue", enqueue)
    return app


async def _serve(app, port, stop_event, shutdown_timeout):
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, port=port)
    await site.start()
    _log.info("HTTP server listening on :%d", port)
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, stop_event.wait)
    _log.info("Shutdown signal received")
    deadline = time.monotonic() + shutdown_timeout
    try:
        await asyncio.wait_for(runner.cleanup(), shutdown_timeout)
    except asyncio.TimeoutError:
        _log.warning("HTTP server shutdown error: timed out")
    return deadline


def http_worker_demo(port=8080, num_workers=4):
    """Serve /enqueue with a worker pool until SIGINT/SIGTERM; True if workers exited cleanly."""
    with _signal_event() as stop_event:
        job_queue = JobQueue()
        workers = [
            threading.Thread(target=http_worker, args=(stop_event, i, job_queue), daemon=True)
            for i in range(1, num_workers + 1)
        ]
        for worker in workers:
            worker.start()
        deadline = asyncio.run(
            _serve(create_enqueue_app(job_queue), port, stop_event, _SHUTDOWN_TIMEOUT)
        )
        job_queue.close()
        for worker in workers:
            worker.join(max(0.0, deadline - time.monotonic()))
        clean = not any(worker.is_alive() for worker in workers)
        if clean:
            _log.info("All workers shut down cleanly")
        else:
            _log.warning("Forcing shutdown: timeout reached")
        _log.info("Server exited")
        return clean