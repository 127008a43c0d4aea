import json

import click
from click import BadParameter

from stakegen import __version__
from stakegen import config as konfig
from stakegen import slots, slogging
from stakegen.contract import DEFAULT_CONTRACT
from stakegen.exceptions import StakegenError
from stakegen.genesis import make_genesis, make_genesis_alloc
from stakegen.utils import word_to_hex

log = slogging.get_logger('stakegen.app')


@click.group(help='Welcome to stakegen version:{}'.format(__version__))
@click.option('alt_config', '--Config', '-C', type=click.File(), help='Alternative config file')
@click.option('config_values', '-c', multiple=True, type=str,
              help='Single configuration parameters (<param>=<value>)')
@click.option('log_config', '--log_config', '-l', multiple=False, type=str, default=':warning',
              help='log_config string: e.g. ":info,stakegen.genesis:debug"')
@click.option('--log-json/--log-no-json', default=False,
              help='log as structured json output')
@click.pass_context
def app(ctx, alt_config, config_values, log_config, log_json):

    # configure logging
    slogging.configure(log_config, log_json=log_json)

    if alt_config:  # specified config file
        config = konfig.load_config(alt_config)
        if not isinstance(config, dict):
            raise BadParameter('content of config should be an yaml dictionary')
    else:
        config = konfig.load_config()

    # add default config
    konfig.update_config_with_defaults(config, konfig.get_default_config())

    # override values with values from cmd line
    for config_value in config_values:
        try:
            konfig.set_config_param(config, config_value)
        except ValueError:
            raise BadParameter('Config parameter must be of the form "a.b.c=d" where "a.b.c" '
                               'specifies the parameter to set and d is a valid yaml value '
                               '(example: "-c staking.min_validator_count=4")')
        except KeyError as e:
            raise BadParameter(str(e))

    ctx.obj = {'config': config}


def _contract(config):
    return DEFAULT_CONTRACT._replace(address=konfig.contract_address_from_config(config))


@app.command()
@click.argument('validators', nargs=-1)
@click.option('--min', 'min_', type=int, help='minimum number of validators')
@click.option('--max', 'max_', type=int, help='maximum number of validators')
@click.option('--strict/--no-strict', default=None, help='reject duplicate validators')
@click.option('--alloc-only', is_flag=True, help='only output the alloc section')
@click.option('--output', '-o', type=click.File('w'), default='-', help='output file')
@click.pass_context
def genesis(ctx, validators, min_, max_, strict, alloc_only, output):
    """Generate the genesis with the staking contract predeployed.

    VALIDATORS default to `genesis.validators` from the config.
    """
    config = ctx.obj['config']
    if min_ is not None:
        config['staking']['min_validator_count'] = min_
    if max_ is not None:
        config['staking']['max_validator_count'] = max_
    if strict is None:
        strict = config['staking']['strict_validators']

    try:
        validators = list(validators) or konfig.validators_from_config(config)
        params = konfig.params_from_config(config)
        kwargs = dict(params=params, contract=_contract(config),
                      premine=konfig.premine_from_config(config), strict=strict)
        if alloc_only:
            data = make_genesis_alloc(validators, **kwargs)
        else:
            data = make_genesis(validators, **kwargs)
    except StakegenError as e:
        raise click.ClickException(str(e))

    json.dump(data, output, sort_keys=True, indent=4, separators=(',', ': '))
    output.write('\n')
    log.info('genesis generated', validators=len(validators))


@app.command(name='slots')
@click.argument('address')
@click.option('--index', '-i', type=int, default=0, help='position in the validators array')
def show_slots(address, index):
    """Show the storage keys written for a validator."""
    try:
        indexes = slots.get_storage_indexes(address, index)
    except StakegenError as e:
        raise click.ClickException(str(e))
    for name, raw in zip(indexes._fields, indexes):
        click.echo('{:<34} {}'.format(name, word_to_hex(raw)))


@app.command()
@click.pass_context
def config(ctx):
    """Show the config"""
    click.echo(konfig.dump_config(ctx.obj['config']))


if __name__ == '__main__':
    app()
