# -*- coding: utf-8 -*-

from . import config
from .__version__ import __version__
from .decorators import wrap_promise
from .deferred import Deferred
from .errors import AggregateError, PendingError, PromiseError, \
    RejectionError, SchedulerError, SelfResolutionError
from .log import set_debug_mode, set_logs_level
from .promise import Promise
from .reduce_coroutine import reduce_coroutine
from .scheduler import Scheduler, drain, get_scheduler, schedule_later, \
    set_scheduler
from .util import is_thenable


def configure(path=None):
    """Load the config file, then apply the log settings it contains.

    Args:
        path (str, optional): path of the config file. See ``config.load()``.
    Returns:
        boolean: True if the config file has been read.
    """
    loaded = config.load(path)
    set_debug_mode(config.get('debug_mode'))
    set_logs_level(config.get('log_levels'))
    return loaded


__all__ = ['AggregateError', 'Deferred', 'PendingError', 'Promise',
           'PromiseError', 'RejectionError', 'Scheduler', 'SchedulerError',
           'SelfResolutionError', '__version__', 'configure', 'drain',
           'get_scheduler', 'is_thenable', 'reduce_coroutine',
           'schedule_later', 'set_debug_mode', 'set_logs_level',
           'set_scheduler', 'wrap_promise']
