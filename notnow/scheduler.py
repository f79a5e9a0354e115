# -*- coding: utf-8 -*-
"""Process-wide queue of callbacks run after the current synchronous code.

Promises never call their subscribers directly: each notification is
scheduled with ``schedule_later()`` and executed later, when the host drains
the queue with ``drain()``. Callbacks are executed in FIFO order, including
the ones scheduled while the queue is being drained.

There is no hidden event loop: the program (or the test) owning the
promises is responsible for calling ``drain()`` between its top-level
operations. ``Promise.result()`` does it implicitly.
"""

from collections import deque
import logging
from threading import Lock

from . import config
from .errors import SchedulerError

_logger = logging.getLogger(__name__)


class Scheduler(object):
    """FIFO queue of zero-argument callbacks.

    Scheduling is thread-safe; callbacks are always executed by the thread
    calling ``drain()``.
    """

    def __init__(self):
        self._queue = deque()
        self._lock = Lock()
        self._draining = False

    def __len__(self):
        with self._lock:
            return len(self._queue)

    def __repr__(self):
        return '<Scheduler queued=%d draining=%s>' % (len(self),
                                                      self._draining)

    @property
    def draining(self):
        return self._draining

    def schedule(self, callback):
        """Append a callback, to be executed by a later call to ``drain()``.

        Args:
            callback (callable): function called without argument.
        """
        with self._lock:
            self._queue.append(callback)

    def drain(self, limit=None):
        """Execute the queued callbacks until the queue is empty.

        Exceptions raised by a callback are logged, then ignored.

        Args:
            limit (int, optional): maximum number of callbacks to execute.
                If not set, the value of the ``drain_limit`` config entry is
                used. 0 means no limit.
        Returns:
            int: number of callbacks executed.
        Raises:
            SchedulerError: if called from a callback run by this scheduler.
        """
        if limit is None:
            limit = config.get('drain_limit')

        with self._lock:
            if self._draining:
                raise SchedulerError('drain() called from a scheduled '
                                     'callback')
            self._draining = True

        count = 0
        try:
            while True:
                with self._lock:
                    if not self._queue:
                        break
                    if limit and count >= limit:
                        _logger.warning('Drain limit reached (%d callbacks). '
                                        '%d callbacks are still queued.',
                                        limit, len(self._queue))
                        break
                    callback = self._queue.popleft()
                self._execute(callback)
                count += 1
        finally:
            self._draining = False

        if count:
            _logger.debug('%d scheduled callbacks executed.', count)
        return count

    def clear(self):
        """Drop all queued callbacks without executing them.

        Returns:
            int: number of callbacks dropped.
        """
        with self._lock:
            count = len(self._queue)
            self._queue.clear()
        return count

    @staticmethod
    def _execute(callback):
        try:
            callback()
        except Exception:
            _logger.exception('Scheduled callback %r raised an exception!',
                              callback)


_scheduler = Scheduler()


def get_scheduler():
    """Returns the process-wide scheduler."""
    return _scheduler


def set_scheduler(scheduler):
    """Replace the process-wide scheduler.

    Callbacks still queued in the previous scheduler are not transferred.

    Returns:
        Scheduler: the previous scheduler.
    """
    global _scheduler
    previous, _scheduler = _scheduler, scheduler
    return previous


def schedule_later(callback):
    """Queue a callback in the process-wide scheduler."""
    _scheduler.schedule(callback)


def drain(limit=None):
    """Execute all callbacks queued in the process-wide scheduler.

    See ``Scheduler.drain()``.
    """
    return _scheduler.drain(limit)
