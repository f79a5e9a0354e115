# -*- coding: utf-8 -*-


class PromiseError(Exception):
    """Base class of all errors raised by the notnow package."""
    pass


class SelfResolutionError(PromiseError, TypeError):
    """A Promise has been resolved with itself as value."""

    def __init__(self, message='A Promise cannot be resolved with itself'):
        PromiseError.__init__(self, message)


class AggregateError(PromiseError):
    """Bundle of several rejection reasons.

    Used by ``Promise.any()`` when all the promises have been rejected.

    Attributes:
        errors (list): rejection reasons, in the order of the input promises.
            Reasons are not necessarily exceptions.
    """

    def __init__(self, errors, message='All promises were rejected'):
        PromiseError.__init__(self, message)
        self.errors = list(errors)

    def __str__(self):
        return '%s (%d errors)' % (self.args[0], len(self.errors))


class PendingError(PromiseError):
    """The Promise is still pending and nothing left can settle it now."""
    pass


class RejectionError(PromiseError):
    """A Promise has been rejected with a value which is not an exception.

    Attributes:
        reason: the original rejection reason.
    """

    def __init__(self, reason):
        PromiseError.__init__(self, 'Promise rejected with non-exception '
                                    'value: %r' % (reason,))
        self.reason = reason


class SchedulerError(PromiseError):
    """Invalid use of the callback scheduler."""
    pass
