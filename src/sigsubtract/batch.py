"""
Fail-fast parallel execution of independent work units.

run_batch(items, func) calls func(item) for every item, serially or on a
thread pool. Units share nothing but a progress counter. The first failure
stops new units from being scheduled; units already running are allowed to
finish, and then that first failure is raised to the caller. Anything the
finished units wrote stays where it is.
"""
import os
import sys
import threading
from concurrent.futures import ThreadPoolExecutor, wait, FIRST_COMPLETED

from .logging import notify, debug


DEFAULT_REPORTING_INTERVAL = 1000


class BatchProgress:
    """Count units as they start, reporting every 'reporting_interval'.

    Safe to share between worker threads.
    """
    def __init__(self, reporting_interval=DEFAULT_REPORTING_INTERVAL):
        self.n_started = 0
        self.interval = reporting_interval
        self._lock = threading.Lock()

    def __len__(self):
        return self.n_started

    def start(self, item):
        "Record that a unit started; return its 0-based start index."
        with self._lock:
            i = self.n_started
            self.n_started += 1

        if self.interval and i % self.interval == 0:
            notify("Processed {} sigs", i)
        debug("starting on '{}'", item)
        return i


def _default_n_jobs():
    return os.cpu_count() or 1


def _run_serial(items, func, progress):
    n_done = 0
    for item in items:
        progress.start(item)
        func(item)
        n_done += 1
    return n_done


def _run_parallel(items, func, progress, n_jobs):
    def unit(item):
        progress.start(item)
        return func(item)

    max_pending = 2 * n_jobs
    items = iter(items)
    first_error = None
    n_done = 0

    with ThreadPoolExecutor(max_workers=n_jobs) as executor:
        pending = set()

        def fill():
            while len(pending) < max_pending:
                try:
                    item = next(items)
                except StopIteration:
                    return
                pending.add(executor.submit(unit, item))

        try:
            fill()
            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for fut in done:
                    exc = fut.exception()
                    if exc is None:
                        n_done += 1
                    elif first_error is None:
                        first_error = exc

                if first_error is None:
                    fill()
        except KeyboardInterrupt:
            for fut in pending:
                fut.cancel()
            notify('\n(CTRL-C received! quitting.)')
            sys.exit(-1)

    if first_error is not None:
        raise first_error

    return n_done


def run_batch(items, func, *, n_jobs=None, progress=None):
    """Apply 'func' to every item with fail-fast semantics.

    :param items: iterable of work items (e.g. signature paths)
    :param func: callable run once per item; its return value is ignored
    :param int n_jobs: worker threads; None means one per CPU, 1 means serial
    :param progress: a BatchProgress, shared by all units
    :return: number of units that completed
    """
    if progress is None:
        progress = BatchProgress()
    if n_jobs is None:
        n_jobs = _default_n_jobs()
    if n_jobs < 1:
        raise ValueError("n_jobs must be at least 1")

    if n_jobs == 1:
        return _run_serial(items, func, progress)
    return _run_parallel(items, func, progress, n_jobs)
