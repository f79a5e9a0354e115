# -*- coding: utf-8 -*-
"""Factories used by external Promise compliance test suites.

A compliance runner needs three entry points: an already fulfilled promise,
an already rejected promise, and a pending promise with external handles to
settle it.
"""

from .deferred import Deferred
from .promise import Promise


def resolved(value):
    return Promise.resolve(value)


def rejected(reason):
    return Promise.reject(reason)


def deferred():
    """Returns a new Deferred, with `promise`, `resolve` and `reject`."""
    return Deferred(_name='DEFERRED')
