# -*- coding: utf-8 -*-

from functools import wraps

from .deferred import Deferred
from .errors import RejectionError
from .promise import Promise
from .util import is_thenable


def reduce_coroutine(safeguard=False):
    """Decorator who converts a coroutine of promises into a single promise.

    The greatest interest is the ability to write a function in an
    synchronous-like style, using many asynchronous Promises.
    Whatever is the number of Promises or async calls used, the result will
    always be an unique Promise wrapping the whole process.

    Each thenable yielded is resolved, and its value is sent back into the
    generator (or its rejection reason is thrown into it). The value returned
    by the generator is the value of the resulting Promise. If the generator
    returns nothing, the value of the last thenable yielded is used. Yielding
    a value which is not a thenable ends the coroutine with this value as
    result.

    Args:
        safeguard (boolean): if true, use `Promise.safeguard()` on the
            resulting promise.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            """
            Args:
                *args
                **kwargs
            Returns:
                Promise<*>
            """
            df = Deferred(_name='COROUTINE %s' % func.__name__)
            if safeguard:
                df.promise.safeguard()

            try:
                # Create generator; Initialization phase
                gen = func(*args, **kwargs)
            except Exception as error:
                df.reject(error)
                return df.promise

            def _call_next_or_set_result(value):
                if is_thenable(value):
                    Promise.resolve(value).then(iter_next, iter_error)
                else:
                    gen.close()
                    df.resolve(value)

            def iter_next(resolved_value):
                try:
                    next_value = gen.send(resolved_value)
                except StopIteration as stop:
                    if stop.value is None:
                        return df.resolve(resolved_value)
                    return df.resolve(stop.value)
                except Exception as error:
                    return df.reject(error)
                _call_next_or_set_result(next_value)

            def iter_error(reason):
                thrown = reason
                if not isinstance(reason, BaseException):
                    thrown = RejectionError(reason)
                try:
                    next_value = gen.throw(thrown)
                except StopIteration as stop:
                    return df.resolve(stop.value)
                except Exception as error:
                    return df.reject(reason if error is thrown else error)
                _call_next_or_set_result(next_value)

            # Start and resolve loop.
            try:
                first_value = next(gen)
            except StopIteration as stop:
                df.resolve(stop.value)
                return df.promise
            except Exception as error:
                df.reject(error)
                return df.promise
            _call_next_or_set_result(first_value)

            return df.promise

        return wrapper
    return decorator
