# -*- coding: utf-8 -*-

import logging
from functools import partial
from threading import Lock

from .errors import AggregateError, PendingError, RejectionError, \
    SelfResolutionError
from .guard import once
from .scheduler import drain, schedule_later
from .util import get_then

_logger = logging.getLogger(__name__)


class Promise(object):
    """It represents an operation expected to be completed in the future.

    A Promise contains a value not yet known when the Promise is created. It
    allows to set callbacks who will be called as soon as the result is
    known. It's a "promise" of a future value.

    Callbacks are never called synchronously: they are queued in the
    process-wide scheduler (see ``notnow.scheduler``), and executed when the
    scheduler is drained. Callbacks registered before the settlement are all
    executed in the same scheduled turn, in the order of registration.

    Settle functions can be called from any thread; the callbacks are always
    executed by the thread draining the scheduler.
    """

    PENDING = 'pending'
    FULFILLED = 'fulfilled'
    REJECTED = 'rejected'

    def __init__(self, executor, _name=None, _previous=None):
        """Constructor of the Promise.

        Generate the two settle functions, then call the `executor`. It means
        the executor will be fully executed before the constructor returns.
        If the executor raises an exception, it's caught and the Promise is
        rejected with this exception.

        Only the first call to one of the settle functions has an effect. All
        subsequent calls are ignored.

        Args:
            executor (callable): Takes 2 callable arguments:
                The first one, `fulfill()`, should be called when the Promise
                is fulfilled (ie the task is done) and accepts the result's
                value as its only argument. If this value is a thenable, the
                Promise will follow its state.
                The second, `reject()`, should be called when an error
                occurs. Its argument is the rejection reason, usually an
                instance of `Exception`.
            _name (str): if set, name used when converted to text.
            _previous (Promise): if set, promise this one is chained to. Only
                used when converted to text.
        """
        self._state = self.PENDING
        self._result = None
        self._lock = Lock()
        self._name = _name or getattr(executor, '__name__', '???')
        self._previous = _previous

        self._callbacks = []
        self._errbacks = []

        fulfill, reject = once(self._fulfill, self._reject)
        try:
            executor(fulfill, reject)
        except Exception as error:
            reject(error)

    @property
    def state(self):
        """str: one of PENDING, FULFILLED or REJECTED."""
        return self._state

    def is_pending(self):
        return self._state == self.PENDING

    def is_fulfilled(self):
        return self._state == self.FULFILLED

    def is_rejected(self):
        return self._state == self.REJECTED

    def result(self):
        """Drain the scheduler, then returns the value of the Promise.

        Returns:
            *: value encapsulated, defined by the operation.
        Raises:
            PendingError: if the promise is still pending once all the
                scheduled callbacks have been executed.
            SchedulerError: if the promise is pending and the call comes
                from a callback run by the scheduler.
            RejectionError: if the promise is rejected with a value which is
                not an exception.
            *: If the promise is rejected, the rejection reason is raised.
        """
        self._wait()
        if self._state == self.REJECTED:
            if isinstance(self._result, BaseException):
                raise self._result
            raise RejectionError(self._result)
        return self._result

    def exception(self):
        """Drain the scheduler, then returns the rejection reason.

        Returns:
            *: the reason of the rejection of the Promise.
            None: if the promise is fulfilled.
        Raises:
            PendingError: if the promise is still pending once all the
                scheduled callbacks have been executed.
        """
        self._wait()
        if self._state == self.REJECTED:
            return self._result
        return None

    def then(self, on_fulfilled=None, on_rejected=None):
        """Create a new promise from callbacks called when this one is settled.

        If the promise is fulfilled, the `on_fulfilled` callback will be
        called. Otherwise (the promise has been rejected), the `on_rejected`
        callback is called.
        In any case, the callback will define the state of the returned
        Promise. If the callback raises an exception, the new Promise is
        rejected. The callback can returns:
        - A value: the new promise will be fulfilled with this value.
        - Another Promise, or any object with a `then` method: when fulfilled
            or rejected, will transfer its status (state and result/error) to
            the Promise returned by this method.

        If a callback is not callable, the state of the "self" promise is
        transferred to the new promise (the state and the value/error).

        Args:
            on_fulfilled (callable, optional):  This callback will receive the
                result of the original promise as argument.
            on_rejected (callable, optional): This callback will receive the
                rejection reason of the original promise as argument.
        Returns:
            Promise<*>: new promise depending of self.
        """

        def deferred_chained_promise(fulfill, reject):

            def callback(value):
                if not callable(on_fulfilled):
                    return fulfill(value)
                try:
                    new_value = on_fulfilled(value)
                except Exception as error:
                    return reject(error)
                fulfill(new_value)

            def errback(reason):
                if not callable(on_rejected):
                    return reject(reason)
                try:
                    new_value = on_rejected(reason)
                except Exception as error:
                    return reject(error)
                fulfill(new_value)

            self._add_callback(callback)
            self._add_errback(errback)

        if not on_rejected:
            name = '%s' % getattr(on_fulfilled, '__name__', '???')
        elif not on_fulfilled:
            name = '<None, %s>' % getattr(on_rejected, '__name__', '???')
        else:
            name = '<%s, %s>' % (getattr(on_fulfilled, '__name__', '???'),
                                 getattr(on_rejected, '__name__', '???'))
        return self.__class__(deferred_chained_promise, _name=name,
                              _previous=self)

    def catch(self, on_rejected):
        """Create a new promise with a callback called when an error occurs.

        Alias of `self.then(None, on_rejected)`

        Args:
            on_rejected (callable): will be called with the rejection reason
                if `self` is rejected.
        returns:
            Promise<*>: new Promise chained to `self`. If `self` is fulfilled,
                the promised value will be the same as `self`. Otherwise, the
                value returned by the `on_rejected()` callback.
        """
        return self.then(None, on_rejected)

    def finally_(self, on_settled):
        """Create a new promise calling `on_settled` when `self` is settled.

        `on_settled()` is called without argument, whether `self` is
        fulfilled or rejected. It can't change the outcome: the new Promise is
        settled like `self`, with the same value or reason. The only exception
        is when `on_settled()` raises: the new Promise is then rejected with
        the exception raised.

        Args:
            on_settled (callable): takes no argument. Its return value is
                ignored.
        Returns:
            Promise<*>: new Promise chained to `self`.
        """
        if not callable(on_settled):
            return self.then()

        def pass_value(value):
            on_settled()
            return value

        def pass_reason(reason):
            on_settled()
            return self.__class__.reject(reason)

        pass_value.__name__ = pass_reason.__name__ = 'FINALLY'
        return self.then(pass_value, pass_reason)

    def safeguard(self):
        """Catch all errors and log them with the most details possible.

        This method is aimed to protect the program from uncaught rejected
        Promise. If no error handler has been set (via then() or catch()), the
        default behavior is to do nothing, and thus, errors are silently
        ignored.
        Calling `safeguard()` after all chains are set will catch these errors,
        and log them as ERROR with the maximum of details possible.

        Returns:
            Promise: self
        """
        def guard(reason):
            if isinstance(reason, BaseException):
                _logger.error('[SAFEGUARD] %s', self,
                              exc_info=(type(reason), reason,
                                        reason.__traceback__))
            else:
                _logger.error('[SAFEGUARD] %s rejected with %r', self, reason)

        self._add_errback(guard)
        return self

    def __repr__(self):
        return 'Promise(%s)' % self._inner_print()

    def _inner_print(self):
        if self._state == self.REJECTED:
            state = 'R'
        elif self._state == self.FULFILLED:
            state = 'F'
        else:
            state = 'P'

        if self._previous:
            return '%s -> %s %s' % (self._previous._inner_print(), self._name,
                                    state)
        return '%s %s' % (self._name, state)

    @classmethod
    def resolve(cls, value):
        """Create a promise who resolves the selected value.

        The value goes through the whole resolution procedure: if it's a
        thenable (including another Promise), the new Promise follows it.

        Args:
            value: result of the promise.
        Returns:
            Promise: new Promise fulfilled with the value passed in parameter,
                or following it if it's a thenable.
        """
        return cls(lambda fulfill, reject: fulfill(value), _name='RESOLVE')

    @classmethod
    def reject(cls, reason):
        """Create a Promise rejected for the reason specified.

        Args:
            reason: rejection reason, usually an Exception.
        Returns:
            Promise: new Promise already rejected.
        """
        return cls(lambda fulfill, reject: reject(reason), _name='REJECT')

    @classmethod
    def all(cls, promises):
        """Create a Promise who wait a list of promises to be all fulfilled.

        The resulting Promise resolves when all of the promises in the list
        are fulfilled, and returns a list of all the resulting values, keeping
        the order of the promise list.
        If a promise is rejected, then the resulting promise is rejected with
        the same reason, and all results from other promises are ignored.

        Args:
            promises (iterable): promises, thenables or plain values.
        Returns:
            Promise<list>: resulting promise, fulfilled when all promises are
                fulfilled, or rejected when one of the promises is rejected.
        """
        promises = list(promises)

        def executor(fulfill, reject):
            if not promises:
                return fulfill([])

            results = [None] * len(promises)
            remaining = [len(promises)]

            def fulfill_one_promise(index, value):
                results[index] = value
                remaining[0] -= 1
                if remaining[0] == 0:
                    fulfill(results)

            for index, p in enumerate(promises):
                cls.resolve(p).then(partial(fulfill_one_promise, index),
                                    reject)

        return cls(executor, _name='ALL')

    @classmethod
    def all_settled(cls, promises):
        """Create a Promise who wait a list of promises to be all settled.

        The resulting Promise is never rejected. It's fulfilled with a list of
        outcome dicts, in the order of the promise list:
        - ``{'status': 'fulfilled', 'value': value}`` for fulfilled promises;
        - ``{'status': 'rejected', 'reason': reason}`` for rejected ones.

        Args:
            promises (iterable): promises, thenables or plain values.
        Returns:
            Promise<list of dict>: resulting promise.
        """
        promises = list(promises)

        def executor(fulfill, reject):
            if not promises:
                return fulfill([])

            outcomes = [None] * len(promises)
            remaining = [len(promises)]

            def set_outcome(index, outcome):
                outcomes[index] = outcome
                remaining[0] -= 1
                if remaining[0] == 0:
                    fulfill(outcomes)

            for index, p in enumerate(promises):
                cls.resolve(p).then(
                    lambda value, index=index: set_outcome(
                        index, {'status': cls.FULFILLED, 'value': value}),
                    lambda reason, index=index: set_outcome(
                        index, {'status': cls.REJECTED, 'reason': reason}))

        return cls(executor, _name='ALL_SETTLED')

    @classmethod
    def race(cls, promises):
        """Settle with the first promise of the list to be settled.

        The resulting Promise is fulfilled or rejected as soon as the first of
        the promises is, with the same value or reason. All other Promise
        results are ignored.

        Note that with an empty list, the resulting Promise is never settled.

        Args:
            promises (iterable): promises, thenables or plain values.
        Returns:
            Promise: a promise
        """
        promises = list(promises)

        def executor(fulfill, reject):
            for p in promises:
                cls.resolve(p).then(fulfill, reject)

        return cls(executor, _name='RACE')

    @classmethod
    def any(cls, promises):
        """Fulfill with the first promise of the list to be fulfilled.

        If all the promises are rejected (or if the list is empty), the
        resulting Promise is rejected with an ``AggregateError`` containing
        all the rejection reasons, in the order of the promise list.

        Args:
            promises (iterable): promises, thenables or plain values.
        Returns:
            Promise: a promise
        """
        promises = list(promises)

        def executor(fulfill, reject):
            if not promises:
                return reject(AggregateError([]))

            reasons = [None] * len(promises)
            remaining = [len(promises)]

            def reject_one_promise(index, reason):
                reasons[index] = reason
                remaining[0] -= 1
                if remaining[0] == 0:
                    reject(AggregateError(reasons))

            for index, p in enumerate(promises):
                cls.resolve(p).then(fulfill,
                                    partial(reject_one_promise, index))

        return cls(executor, _name='ANY')

    def _fulfill(self, value):
        # Fresh pair: the thenable can call its callbacks at most once, and
        # never after an error raised by its `then` method.
        fulfill, reject = once(self._fulfill, self._reject)

        if value is self:
            return reject(SelfResolutionError())
        try:
            then = get_then(value)
            if then is not None:
                then(fulfill, reject)
                return
        except Exception as error:
            return reject(error)
        self._settle(self.FULFILLED, value)

    def _reject(self, reason):
        self._settle(self.REJECTED, reason)

    def _settle(self, state, result):
        with self._lock:
            if self._state != self.PENDING:
                _logger.warning('Try to settle Promise %s already settled. '
                                'New result will be ignored: %r', self, result)
                return
            self._state = state
            self._result = result
            if state == self.FULFILLED:
                subscribers = self._callbacks
            else:
                subscribers = self._errbacks

            # Free the references
            self._callbacks = None
            self._errbacks = None

        if subscribers:
            schedule_later(partial(self._flush, subscribers, result,
                                   state == self.REJECTED))

    @classmethod
    def _flush(cls, subscribers, result, is_errback):
        for subscriber in subscribers:
            cls._exec_callback(subscriber, result, is_errback)

    @staticmethod
    def _exec_callback(callback, value, is_errback=False):
        try:
            callback(value)
        except Exception:
            if is_errback:
                _logger.exception("Promise errback raise an exception!")
            else:
                _logger.exception("Promise callback raise an exception!")

    def _add_callback(self, callback):
        with self._lock:
            if self._state == self.PENDING:
                self._callbacks.append(callback)
                return
            if self._state != self.FULFILLED:
                return
            result = self._result

        schedule_later(partial(self._exec_callback, callback, result))

    def _add_errback(self, errback):
        with self._lock:
            if self._state == self.PENDING:
                self._errbacks.append(errback)
                return
            if self._state != self.REJECTED:
                return
            error = self._result

        schedule_later(partial(self._exec_callback, errback, error, True))

    def _wait(self):
        if self._state == self.PENDING:
            drain()
        if self._state == self.PENDING:
            raise PendingError('%r is still pending.' % self)
