"""
Structured logging on top of structlog and the standard logging module.

Basic usage:
log = get_logger('stakegen.genesis')
log.info('event name', some=data)

Namespaces
stakegen.app
stakegen.config
stakegen.genesis
stakegen.oracle
"""
import json
import logging
import sys

import structlog


class KeyValueRenderer(object):

    """
    Render `event_dict` as a list of ``Key=repr(Value)`` pairs.
    Prefix with event
    """

    def __call__(self, _, __, event_dict):
        msg = event_dict.pop('event', '')
        kvs = ' '.join('{}={!r}'.format(k, event_dict[k]) for k in sorted(event_dict))
        return '%s\t%s' % (msg, kvs) if kvs else msg


class JSONRenderer(object):

    "JSON Render which prefixes namespace"

    def __call__(self, logger, name, event_dict):
        event_dict = dict(event_dict)
        event_dict['event'] = logger.name + '.' + event_dict['event'].lower().replace(' ', '_')
        return json.dumps(event_dict, sort_keys=True, default=repr)


class StderrHandler(logging.StreamHandler):

    "writes to whatever `sys.stderr` is at the time of the record"

    def emit(self, record):
        self.stream = sys.stderr
        super(StderrHandler, self).emit(record)


### configure #####################

JSON_FORMAT = '%(message)s'
PRINT_FORMAT = '%(levelname)s:%(name)s\t%(message)s'

_handler = None


def get_logger(name=None):
    return structlog.get_logger(name)


def set_level(name, level):
    assert not isinstance(level, int)
    logging.getLogger(name).setLevel(getattr(logging, level.upper()))


def configure_loglevels(config_string):
    """
    config_string = ':info,stakegen.genesis:debug'
    """
    assert ':' in config_string
    for name_levels in config_string.split(','):
        name, level = name_levels.split(':')
        set_level(name or None, level)


def setup_stdlib_logging(fmt):
    global _handler
    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    _handler = StderrHandler()
    _handler.setFormatter(logging.Formatter(fmt, None))
    root.addHandler(_handler)


def configure_structlog(log_json=False):
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if log_json:
        processors.append(JSONRenderer())
    else:
        processors.append(KeyValueRenderer())
    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        # loggers are created at import time, pick up a later configure()
        cache_logger_on_first_use=False,
    )


def configure(config_string='', log_json=False):
    configure_structlog(log_json)
    setup_stdlib_logging(JSON_FORMAT if log_json else PRINT_FORMAT)
    if config_string:
        configure_loglevels(config_string)

configure_logging = configure  # for unambigious imports

# setup default config, records go to the root logger
configure_structlog()
