# -*- coding: utf-8 -*-

import logging

import pytest

from notnow.log import set_debug_mode, set_logs_level


@pytest.fixture
def logger_names(request):
    names = ['notnow.test_a', 'notnow.test_b']

    def _reset():
        for name in names:
            logging.getLogger(name).setLevel(logging.NOTSET)
    request.addfinalizer(_reset)
    return names


class TestLogLevels(object):

    def test_set_level_by_name(self, logger_names):
        set_logs_level({logger_names[0]: 'debug', logger_names[1]: 'Error'})
        assert logging.getLogger(logger_names[0]).level == logging.DEBUG
        assert logging.getLogger(logger_names[1]).level == logging.ERROR

    def test_set_level_by_number(self, logger_names):
        set_logs_level({logger_names[0]: 30, logger_names[1]: '10'})
        assert logging.getLogger(logger_names[0]).level == logging.WARNING
        assert logging.getLogger(logger_names[1]).level == logging.DEBUG

    def test_invalid_level_is_ignored(self, logger_names, caplog):
        set_logs_level({logger_names[0]: 'not_a_level',
                        logger_names[1]: 'info'})
        assert logging.getLogger(logger_names[0]).level == logging.NOTSET
        assert logging.getLogger(logger_names[1]).level == logging.INFO
        assert 'Invalid log level' in caplog.text

    def test_debug_mode(self):
        set_debug_mode(True)
        assert logging.getLogger('notnow').level == logging.DEBUG
        set_debug_mode(False)
        assert logging.getLogger('notnow').level == logging.NOTSET
