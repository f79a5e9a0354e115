# -*- coding: utf-8 -*-

from .promise import Promise


class Deferred(object):
    """Creator side of an asynchronous task.

    A Deferred is the "creator" side of an async task, whereas a Promise
    represents the asynchronous value from the "consumer" side.

    `resolve` and `reject` are the settle functions given to the executor of
    the Promise: only the first call to one of them has an effect.

    Attributes:
        promise (Promise): the Promise associated to the Deferred.
        resolve (function): fulfill the promise, or make it follow a
            thenable.
        reject (function): reject the promise.
    """

    def __init__(self, *args, **kwargs):
        self.promise = Promise(self._executor, *args, **kwargs)

    def _executor(self, resolve, reject):
        self.resolve = resolve
        self.reject = reject
