# -*- coding: utf-8 -*-
"""Helpers to configure the log levels of the notnow loggers.

The package never installs log handlers by itself: all modules log through
``logging.getLogger(__name__)`` and the application chooses where the
records go.
"""

import logging


def set_logs_level(levels):
    """Configure fine-grained log levels for the different modules.

    Args:
        levels (dict): associates a logger name and a log level. A log level
            can be a number or a str representing one of the logging levels
            (DEBUG, WARNING, ...). The level name is converted to uppercase.
            Invalid values are ignored.

    Example:

        >>> # Log all ignored settle calls, but not the scheduler activity.
        >>> set_logs_level({'notnow.guard': 'debug', 'notnow.scheduler': 30})
    """
    for (name, level) in levels.items():
        try:
            if isinstance(level, str):
                level = level.upper()
                if level.isdigit():
                    level = int(level)
            logging.getLogger(name).setLevel(level)
        except (TypeError, ValueError):
            logging.getLogger(__name__).warning(
                'Invalid log level "%s" for logger "%s". Will be ignored.',
                level, name)


def set_debug_mode(debug):
    """Set, or unset the debug log level of the notnow loggers.

    Args:
        debug (boolean): if True, the notnow log level is set to DEBUG.
            If False, it's reset, and the level of the parent logger applies.
    """
    if debug:
        logging.getLogger('notnow').setLevel(logging.DEBUG)
    else:
        logging.getLogger('notnow').setLevel(logging.NOTSET)
