# -*- coding: utf-8 -*-
"""One-shot latch shared by a pair of settle functions."""

import logging
from threading import Lock

_logger = logging.getLogger(__name__)


def once(on_fulfilled, on_rejected):
    """Wrap two settle procedures so that only one call has effect.

    The two returned callables share the same latch: the first call through
    either of them forwards its argument to the corresponding procedure.
    Every other call, through any of the two wrappers, does nothing.

    Args:
        on_fulfilled (callable): procedure taking the fulfillment value.
        on_rejected (callable): procedure taking the rejection reason.
    Returns:
        tuple: the (fulfill, reject) pair of wrappers.
    """
    lock = Lock()
    called = [False]

    def _acquire():
        with lock:
            if called[0]:
                return False
            called[0] = True
            return True

    def fulfill(value=None):
        if not _acquire():
            _logger.debug('Settle already done; ignore fulfillment with %r',
                          value)
            return
        on_fulfilled(value)

    def reject(reason=None):
        if not _acquire():
            _logger.debug('Settle already done; ignore rejection with %r',
                          reason)
            return
        on_rejected(reason)

    return fulfill, reject
