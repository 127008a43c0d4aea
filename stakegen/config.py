"""
Support for simple yaml persisted config dicts.

Building of the configuration
 - start with an (possibly empty) config, loaded from the `-C` file or
   the default location in the app dir
 - recursively update it (w/o overriding values) with `default_config`
 - override single values given on the command line as ``a.b.c=d``
"""
import copy
import os

import click
import yaml

from stakegen import slogging
from stakegen.contract import (
    MAX_VALIDATOR_COUNT,
    MIN_VALIDATOR_COUNT,
    STAKING_CONTRACT_ADDRESS,
)
from stakegen.genesis import PredeployParams
from stakegen.exceptions import ArgumentError
from stakegen.utils import (
    ADDRESS_SIZE,
    encode_hex,
    encode_int32,
    normalize_address,
    parse_int_or_hex,
)


CONFIG_FILE_NAME = 'config.yaml'

log = slogging.get_logger('stakegen.config')

default_data_dir = click.get_app_dir('stakegen')


def get_config_path(data_dir=default_data_dir):
    return os.path.join(data_dir, CONFIG_FILE_NAME)

default_config_path = get_config_path(default_data_dir)


default_config = dict(
    staking=dict(
        min_validator_count=MIN_VALIDATOR_COUNT,
        max_validator_count=MAX_VALIDATOR_COUNT,
        strict_validators=False,
        contract_address=encode_hex(STAKING_CONTRACT_ADDRESS),
    ),
    genesis=dict(
        validators=[],
        premine={},
    ),
)


def update_config_with_defaults(config, default_config):
    "fills in missing entries of `config` from `default_config`, in place"
    for k, v in default_config.items():
        if isinstance(v, dict):
            if not isinstance(config.get(k), dict):
                config[k] = dict()
            update_config_with_defaults(config[k], v)
        elif config.get(k) is None:
            config[k] = copy.deepcopy(v)
    return config


def get_default_config():
    return copy.deepcopy(default_config)


def load_config(path=default_config_path):
    """Load config from a path (file or data dir) or file like object `path`."""
    if hasattr(path, 'read'):
        log.info('loading config', path=getattr(path, 'name', path))
        return yaml.safe_load(path) or dict()
    log.info('loading config', path=path)
    if os.path.exists(path):
        if os.path.isdir(path):
            path = get_config_path(path)
        if not os.path.exists(path):
            return dict()
        with open(path) as f:
            return yaml.safe_load(f) or dict()
    return dict()


def write_config(config, path=default_config_path):
    """Write config to `path`, discarding the one already in place."""
    assert path
    log.info('writing config', path=path)
    with open(path, 'w') as f:
        yaml.safe_dump(config, f, default_flow_style=False)


def set_config_param(config, s, strict=True):
    """Set a specific config parameter.

    :param s: a string of the form ``a.b.c=d`` which will set the value of
              ``config['a']['b']['c']`` to ``yaml.safe_load(d)``
    :param strict: if `True` will only override existing values.
    :raises: :exc:`ValueError` if `s` is malformed or the value to set is not
             valid YAML
    :raises: :exc:`KeyError` if `strict` and the option is unknown
    """
    try:
        param, value = s.split('=', 1)
        keys = param.split('.')
    except ValueError:
        raise ValueError('Invalid config parameter')
    d = config
    for key in keys[:-1]:
        if strict and key not in d:
            raise KeyError('Unknown config option %s' % param)
        d = d.setdefault(key, {})
    if strict and keys[-1] not in d:
        raise KeyError('Unknown config option %s' % param)
    try:
        d[keys[-1]] = yaml.safe_load(value)
    except yaml.YAMLError:
        raise ValueError('Invalid config value')
    return config


def dump_config(config):
    "config as yaml"
    return yaml.safe_dump(config, default_flow_style=False)


def params_from_config(config):
    """:class:`PredeployParams` from the `staking` section."""
    staking = config['staking']
    return PredeployParams(
        min_validator_count=parse_int_or_hex(staking['min_validator_count']),
        max_validator_count=parse_int_or_hex(staking['max_validator_count']),
    )


def address_from_config(value):
    """Address from a config value.

    YAML reads an unquoted ``0x...`` scalar as an integer, such values are
    taken as the numeric address.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        if not 0 <= value < 2 ** (8 * ADDRESS_SIZE):
            raise ArgumentError('address out of range: {}'.format(hex(value)))
        return encode_int32(value)[-ADDRESS_SIZE:]
    return normalize_address(value)


def contract_address_from_config(config):
    return address_from_config(config['staking']['contract_address'])


def validators_from_config(config):
    return [address_from_config(v) for v in config['genesis']['validators'] or []]


def premine_from_config(config):
    "premine as a dict of address bytes to balance in wei"
    premine = config['genesis']['premine'] or {}
    return dict((address_from_config(a), parse_int_or_hex(b)) for a, b in premine.items())
