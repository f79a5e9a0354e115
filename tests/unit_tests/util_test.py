# -*- coding: utf-8 -*-

import pytest

from notnow import Promise
from notnow.util import get_then, is_thenable


class Err(Exception):
    pass


class Thenable(object):
    def then(self, on_fulfilled=None, on_rejected=None):
        pass


class BrokenThenable(object):
    @property
    def then(self):
        raise Err()


class TestIsThenable(object):

    def test_promise(self):
        assert is_thenable(Promise.resolve(1))

    def test_foreign_thenable(self):
        assert is_thenable(Thenable())

    def test_plain_values(self):
        for value in (None, 0, 'then', [], {'then': lambda: None}, object()):
            assert not is_thenable(value)

    def test_class_with_then_method(self):
        assert not is_thenable(Thenable)

    def test_not_callable_then(self):
        class NotThenable(object):
            then = 'not callable'

        assert not is_thenable(NotThenable())

    def test_then_raising(self):
        assert not is_thenable(BrokenThenable())


class TestGetThen(object):

    def test_bound_method(self):
        value = Thenable()
        then = get_then(value)
        assert then.__self__ is value

    def test_no_then(self):
        assert get_then(42) is None

    def test_then_raising(self):
        with pytest.raises(Err):
            get_then(BrokenThenable())
