"""Worker pools fed through queues, with and without cancellation deadlines."""

import queue
import threading
import time
from dataclasses import dataclass

_POLL = 0.02
_DONE = object()


@dataclass(frozen=True)
class Job:
    """A unit of work: square ``number``."""

    id: int
    number: int


@dataclass(frozen=True)
class Result:
    job_id: int
    output: int


def _square(job):
    return Result(job.id, job.number * job.number)


def _plain_worker(worker_id, jobs, results, work_time):
    for job in iter(jobs.get, _DONE):
        time.sleep(work_time)
        print(f"Worker {worker_id} processing job {job.id}")
        results.put(_square(job))


def worker_pool_demo(num_jobs=10, num_workers=3, work_time=0.1):
    """Square jobs 1..num_jobs on a fixed pool of workers; return results in arrival order."""
    jobs = queue.Queue()
    results = queue.Queue()
    workers = [
        threading.Thread(
            target=_plain_worker, args=(w, jobs, results, work_time), daemon=True
        )
        for w in range(1, num_workers + 1)
    ]
    for worker in workers:
        worker.start()
    for job_id in range(1, num_jobs + 1):
        jobs.put(Job(job_id, job_id))
    for _ in workers:
        jobs.put(_DONE)
    for worker in workers:
        worker.join()

    collected = []
    while not results.empty():
        result = results.get()
        print(f"Result for job {result.job_id} = {result.output}")
        collected.append(result)
    return collected


def _cancellable_worker(worker_id, jobs, results, cancelled, work_time):
    while True:
        if cancelled.is_set():
            print(f"Worker {worker_id}: context cancelled, stopping")
            return
        try:
            job = jobs.get(timeout=_POLL)
        except queue.Empty:
            continue
        if job is _DONE:
            return
        time.sleep(work_time)
        print(f"Worker {worker_id} processing job {job.id}")
        if cancelled.is_set():
            return
        results.put(_square(job))


def _run_cancellable(job_ids, num_workers, work_time, timeout, skip_message, on_result):
    cancelled = threading.Event()
    timer = threading.Timer(timeout, cancelled.set)
    timer.daemon = True
    if timeout <= 0:
        cancelled.set()
    else:
        timer.start()

    jobs = queue.Queue()
    results = queue.Queue()
    workers = [
        threading.Thread(
            target=_cancellable_worker,
            args=(w, jobs, results, cancelled, work_time),
            daemon=True,
        )
        for w in range(1, num_workers + 1)
    ]
    try:
        for worker in workers:
            worker.start()
        for job_id in job_ids:
            if cancelled.is_set():
                print(skip_message)
                continue
            jobs.put(Job(job_id, job_id))
        for _ in workers:
            jobs.put(_DONE)

        collected = []
        while True:
            try:
                result = results.get(timeout=_POLL)
            except queue.Empty:
                if not any(w.is_alive() for w in workers) and results.empty():
                    break
                continue
            on_result(result)
            collected.append(result)
        return collected
    finally:
        timer.cancel()


def worker_pool_with_context(num_jobs=10, num_workers=3, work_time=0.1, timeout=0.1):
    """Square jobs 1..num_jobs until ``timeout`` seconds pass; return finished results."""
    collected = _run_cancellable(
        range(1, num_jobs + 1),
        num_workers,
        work_time,
        timeout,
        "Main: context done before sending all jobs",
        lambda r: print(f"Result for job {r.job_id} = {r.output}"),
    )
    print("Main: finished")
    return collected


def wp_demo(num_jobs=10, num_workers=3, work_time=0.5, timeout=1.0):
    """Square jobs 0..num_jobs-1 until ``timeout`` seconds pass; return finished results."""
    return _run_cancellable(
        range(num_jobs),
        num_workers,
        work_time,
        timeout,
        "Worker Pool Context timeout...",
        lambda r: print("Job with ID", r.job_id, "and its result:", r.output),
    )


class DeepPool:
    """A pool of workers squaring non-negative tasks, started and stopped at most once."""

    def __init__(self, num_workers, channel_size):
        self.num_workers = num_workers
        self.tasks = queue.Queue(maxsize=channel_size)
        self.closed = False
        self.workers = []
        self.performed = []
        self._quit = threading.Event()
        self._lock = threading.Lock()
        self._once = threading.Lock()
        self._started = False
        self._stopped = False

    def _work(self, worker_num):
        print("Starting worker with workerNum", worker_num)
        while not self._quit.is_set():
            try:
                task = self.tasks.get(timeout=_POLL)
            except queue.Empty:
                continue
            if task >= 0:
                print("Task Performed...", task * task)
                with self._lock:
                    self.performed.append(task)
        print("Stopping Worker with workerNum", worker_num)

    def start(self):
        """Start the workers; later calls do nothing."""
        with self._once:
            if self._started:
                return
            self._started = True
            for worker_num in range(self.num_workers):
                thread = threading.Thread(target=self._work, args=(worker_num,), daemon=True)
                self.workers.append(thread)
                thread.start()

    def stop(self):
        """Close the pool and wait for the workers; later calls do nothing."""
        with self._once:
            if self._stopped:
                return
            self._stopped = True
            with self._lock:
                self.closed = True
            self._quit.set()
            for thread in self.workers:
                thread.join()

    def add_task(self, n):
        """Queue task ``n``; return False if the pool is closed."""
        with self._lock:
            if self.closed:
                return False
        while not self._quit.is_set():
            try:
                self.tasks.put(n, timeout=_POLL)
            except queue.Full:
                continue
            print("Task added to the Worker pool....", n)
            return True
        return False

    def perform_tasks(self, n):
        """Queue tasks 0..n-1 from background threads and return those threads."""
        producers = [
            threading.Thread(target=self.add_task, args=(i,), daemon=True) for i in range(n)
        ]
        for producer in producers:
            producer.start()
        return producers


def new_deep_pool(num_workers, channel_size):
    """Validate the sizes, run a pool over channel_size tasks for five seconds, stop it."""
    if num_workers <= 0:
        raise ValueError("numberOfWorkers should be > 0")
    if channel_size < 10:
        raise ValueError("channelSize should be >= 10")
    pool = DeepPool(num_workers, channel_size)
    pool.start()
    pool.perform_tasks(channel_size)
    time.sleep(5)
    pool.stop()
    return pool