# -*- coding: utf-8 -*-

import logging

import pytest

from notnow import config
from notnow.scheduler import Scheduler, set_scheduler


@pytest.fixture(autouse=True)
def scheduler(request):
    """Install a new, empty process-wide scheduler for each test.

    Returns:
        Scheduler: the scheduler used by all the promises of the test.
    """
    new_scheduler = Scheduler()
    previous = set_scheduler(new_scheduler)

    def _restore():
        set_scheduler(previous)
    request.addfinalizer(_restore)
    return new_scheduler


@pytest.fixture(autouse=True)
def clean_config(request, monkeypatch, tmpdir):
    """Isolate the config module and the notnow log levels."""
    monkeypatch.setenv('NOTNOW_CONFIG', str(tmpdir.join('notnow.ini')))
    config.reset()

    def _reset():
        config.reset()
        logging.getLogger('notnow').setLevel(logging.NOTSET)
    request.addfinalizer(_reset)
