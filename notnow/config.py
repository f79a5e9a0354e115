# -*- coding: utf-8 -*-

"""Manages the settings of the notnow package.

Settings are loaded from an optional configuration file. If they don't
exist, default values are provided. When an option is set, the config file
is updated.

The file is an INI file with a single ``[config]`` section::

    [config]
    debug_mode = false
    drain_limit = 10000
    log_levels = notnow.scheduler=debug;notnow.guard=warning
"""

import configparser
import logging
import os
import os.path

import appdirs

_logger = logging.getLogger(__name__)

_appdirs = appdirs.AppDirs(appname='notnow', appauthor=False)

# Default config dict. Values not present in this dict are not valid.
# Each entry contains the type expected, and the default value.
_default_config = {
    'debug_mode': {'type': bool, 'default': False},
    'log_levels': {'type': dict, 'default': {}},
    'drain_limit': {'type': int, 'default': 0}
}

_config_parser = configparser.ConfigParser()
_config_parser.add_section('config')

_config_file_path = None


def _get_config_file_path():
    if _config_file_path:
        return _config_file_path
    return os.environ.get('NOTNOW_CONFIG') or \
        os.path.join(_appdirs.user_config_dir, 'notnow.ini')


def load(path=None):
    """Find and load the config file.

    Args:
        path (str, optional): path of the config file. By default, the
            ``NOTNOW_CONFIG`` environment variable is used, or the file
            ``notnow.ini`` in the user config directory.
    Returns:
        boolean: True if the file has been read; False otherwise.
    """
    global _config_file_path

    if path:
        _config_file_path = path
    config_file_path = _get_config_file_path()

    if not _config_parser.read(config_file_path):
        _logger.warning('Unable to load config file: %s', config_file_path)
        return False
    _logger.debug('Config file loaded: %s', config_file_path)
    return True


def reset():
    """Forget all the values set or loaded, and the config file path."""
    global _config_file_path

    _config_file_path = None
    _config_parser.remove_section('config')
    _config_parser.add_section('config')


def get(key):
    """Find and return a configuration entry

    If the entry is not specified in the config file, or its value is
    invalid, the default value is returned.

    Args:
        key (string): the entry key.
    Returns:
        The corresponding value found.
    Raises:
        KeyError: if the config entry doesn't exists.
    """
    if key not in _default_config:
        raise KeyError(key)
    entry_type = _default_config[key]['type']
    try:
        if entry_type is bool:
            return _config_parser.getboolean('config', key)
        elif entry_type is int:
            return _config_parser.getint('config', key)
        elif entry_type is dict:
            # Dict entries are in the form 'key=value;key2=value2'
            dict_str = _config_parser.get('config', key)
            result = {}
            for pair in filter(None, dict_str.split(';')):
                try:
                    (k, v) = pair.split('=')
                    result[k.strip()] = v.strip()
                except ValueError:
                    _logger.warning('Unable to parse pair key=value: "%s"',
                                    pair)
            return result
        else:
            return _config_parser.get('config', key)
    except configparser.NoOptionError:
        return _default_config[key]['default']
    except ValueError:
        _logger.warning('Invalid value for config entry "%s". The default '
                        'value will be used.', key)
        return _default_config[key]['default']


def set(key, value):
    """Set a configuration entry, and save it in the config file.

    Args:
        key (string): the entry key.
        value: the new value to set. Dicts are serialized in the form
            'key=value;key2=value2'; other values are converted to string.
    Raises:
        KeyError: if the config entry is not valid.
    """
    if key not in _default_config:
        raise KeyError(key)
    if isinstance(value, dict):
        value = ';'.join('%s=%s' % pair for pair in value.items())
    _config_parser.set('config', key, str(value))

    config_file_path = _get_config_file_path()
    try:
        config_dir = os.path.dirname(config_file_path)
        if config_dir:
            os.makedirs(config_dir, exist_ok=True)
        with open(config_file_path, 'w') as config_file:
            _config_parser.write(config_file)
        _logger.debug('Config file modified.')
    except (IOError, OSError):
        _logger.warning('Unable to write in the config file', exc_info=True)
