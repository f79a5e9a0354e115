# -*- coding: utf-8 -*-

import logging

from notnow import config
from notnow.errors import SchedulerError
from notnow.scheduler import Scheduler, drain, get_scheduler, \
    schedule_later, set_scheduler


class TestScheduler(object):

    def test_callbacks_are_not_executed_synchronously(self):
        calls = []
        scheduler = Scheduler()
        scheduler.schedule(lambda: calls.append(1))

        assert calls == []
        assert len(scheduler) == 1

    def test_drain_in_fifo_order(self):
        calls = []
        scheduler = Scheduler()
        for i in range(5):
            scheduler.schedule(lambda i=i: calls.append(i))

        assert scheduler.drain() == 5
        assert calls == [0, 1, 2, 3, 4]
        assert len(scheduler) == 0

    def test_callbacks_scheduled_while_draining(self):
        """Callbacks scheduled by a callback run after the queued ones."""
        calls = []
        scheduler = Scheduler()

        def first():
            calls.append('first')
            scheduler.schedule(lambda: calls.append('third'))

        scheduler.schedule(first)
        scheduler.schedule(lambda: calls.append('second'))

        assert scheduler.drain() == 3
        assert calls == ['first', 'second', 'third']

    def test_callback_raising_exception(self, caplog):
        """The error is logged, and the following callbacks are executed."""
        calls = []
        scheduler = Scheduler()

        def failing():
            raise ValueError('failure')

        scheduler.schedule(failing)
        scheduler.schedule(lambda: calls.append(True))

        assert scheduler.drain() == 2
        assert calls == [True]
        assert 'raised an exception' in caplog.text
        assert caplog.records[0].levelno == logging.ERROR

    def test_drain_empty_queue(self):
        assert Scheduler().drain() == 0

    def test_drain_with_limit(self, caplog):
        scheduler = Scheduler()

        def reschedule():
            scheduler.schedule(reschedule)

        scheduler.schedule(reschedule)
        assert scheduler.drain(10) == 10
        assert len(scheduler) == 1
        assert 'Drain limit reached' in caplog.text
        assert not scheduler.draining

    def test_drain_limit_from_config(self):
        config.set('drain_limit', 3)
        scheduler = Scheduler()
        for _ in range(5):
            scheduler.schedule(lambda: None)

        assert scheduler.drain() == 3
        assert scheduler.drain(0) == 2

    def test_reentrant_drain(self):
        errors = []
        scheduler = Scheduler()

        def nested_drain():
            try:
                scheduler.drain()
            except SchedulerError as error:
                errors.append(error)

        scheduler.schedule(nested_drain)
        scheduler.drain()
        assert len(errors) == 1

    def test_clear(self):
        calls = []
        scheduler = Scheduler()
        scheduler.schedule(lambda: calls.append(1))
        scheduler.schedule(lambda: calls.append(2))

        assert scheduler.clear() == 2
        assert scheduler.drain() == 0
        assert calls == []


class TestProcessWideScheduler(object):

    def test_schedule_later(self, scheduler):
        calls = []
        schedule_later(lambda: calls.append(True))

        assert get_scheduler() is scheduler
        assert len(scheduler) == 1
        assert drain() == 1
        assert calls == [True]

    def test_set_scheduler(self, scheduler):
        other = Scheduler()
        assert set_scheduler(other) is scheduler
        try:
            schedule_later(lambda: None)
            assert len(other) == 1
            assert len(scheduler) == 0
        finally:
            set_scheduler(scheduler)
