# -*- coding: utf-8 -*-


def get_then(value):
    """Read the ``then`` member of a value, if it looks like a thenable.

    The attribute is read exactly once. Exceptions raised while reading it
    (other than AttributeError) are propagated to the caller.

    Classes are never considered as thenables: their ``then`` attribute, if
    any, is an unbound function.

    Returns:
        callable: the ``then`` member, bound to `value`.
        None: if `value` has no callable ``then`` member.
    """
    if value is None or isinstance(value, type):
        return None
    then = getattr(value, 'then', None)
    if callable(then):
        return then
    return None


def is_thenable(value):
    """Check if an object can be chained, like a Promise, or is a "result".

    The promise module uses this function to differentiate "chainable" objects
    and direct return values, when using a callback who can returns both.

    Returns:
        boolean: True if the value has an attribute 'then' who is callable.
            False if not, or if the attribute can't be read.
    """
    try:
        return get_then(value) is not None
    except Exception:
        return False
