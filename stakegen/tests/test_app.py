import json

import pytest
from click.testing import CliRunner

from stakegen import app, slogging
from stakegen.contract import DEFAULT_STAKED_BALANCE

VALIDATORS = ['0x' + '11' * 20, '0x' + '22' * 20]
STAKING = '0x0000000000000000000000000000000000001001'

config_yaml = """
staking:
  min_validator_count: 2
  max_validator_count: 9
genesis:
  validators: {}
  premine:
    '0x{}': 1000
""".format(json.dumps(VALIDATORS), '33' * 20)


def run_genesis(args):
    runner = CliRunner()
    with runner.isolated_filesystem():
        result = runner.invoke(app.app, ['genesis', '-o', 'genesis.json'] + args)
        assert result.exit_code == 0, result.output
        with open('genesis.json') as f:
            return json.load(f)


def storage_int(genesis, slot):
    storage = genesis['alloc'][STAKING]['storage']
    return int(storage['0x' + '00' * 31 + '{:02x}'.format(slot)], 16)


def test_show_usage():
    runner = CliRunner()
    result = runner.invoke(app.app, [])
    assert "Usage: app " in result.output


def test_genesis():
    genesis = run_genesis(VALIDATORS + ['--min', '1', '--max', '100'])
    assert genesis['difficulty'] == '0x1'
    assert int(genesis['alloc'][STAKING]['balance'], 16) == 2 * DEFAULT_STAKED_BALANCE
    assert storage_int(genesis, 0) == 2
    assert storage_int(genesis, 5) == 1
    assert storage_int(genesis, 6) == 100


def test_genesis_alloc_only():
    alloc = run_genesis(VALIDATORS + ['--alloc-only'])
    assert list(alloc) == [STAKING]


@pytest.mark.parametrize('option', ['-C', '-c'])
def test_genesis_from_config(option):
    runner = CliRunner()
    with runner.isolated_filesystem():
        if option == '-C':
            with open('myconfig.yaml', 'w') as f:
                f.write(config_yaml)
            args = ['-C', 'myconfig.yaml']
        else:
            args = ['-c', 'staking.min_validator_count=2',
                    '-c', 'staking.max_validator_count=9',
                    '-c', 'genesis.validators={}'.format(json.dumps(VALIDATORS))]
        result = runner.invoke(app.app, args + ['genesis', '-o', 'genesis.json'])
        assert result.exit_code == 0, result.output
        with open('genesis.json') as f:
            genesis = json.load(f)
    assert storage_int(genesis, 0) == 2
    assert storage_int(genesis, 5) == 2
    assert storage_int(genesis, 6) == 9
    if option == '-C':
        assert genesis['alloc']['0x' + '33' * 20]['balance'] == hex(1000)


def test_genesis_invalid_bounds():
    runner = CliRunner()
    result = runner.invoke(app.app, ['genesis', '--min', '5', '--max', '4'] + VALIDATORS)
    assert result.exit_code != 0
    assert 'exceeds max_validator_count' in result.output


def test_genesis_strict_duplicates():
    runner = CliRunner()
    result = runner.invoke(app.app, ['genesis', '--strict'] + VALIDATORS + VALIDATORS[:1])
    assert result.exit_code != 0
    assert 'duplicate validator' in result.output


def test_genesis_bad_address():
    runner = CliRunner()
    result = runner.invoke(app.app, ['genesis', '0x1234'])
    assert result.exit_code != 0
    assert 'address must be 20 bytes' in result.output


def test_invalid_config_param():
    runner = CliRunner()
    result = runner.invoke(app.app, ['-c', 'staking.min_validator_count', 'config'])
    assert result.exit_code != 0
    result = runner.invoke(app.app, ['-c', 'staking.bogus=1', 'config'])
    assert result.exit_code != 0


def test_slots():
    runner = CliRunner()
    result = runner.invoke(app.app, ['slots', VALIDATORS[0], '--index', '1'])
    assert result.exit_code == 0, result.output
    lines = dict(line.split() for line in result.output.strip().splitlines())
    assert lines['validators_index'] == \
        '0x290decd9548b62a8d60345a988386fc84ba6bc95484008f6362f93160ef3e564'
    assert lines['validators_array_size_index'] == '0x' + '00' * 32
    assert lines['staked_amount_index'] == '0x' + '00' * 31 + '04'
    assert len(lines) == 6


def test_config():
    runner = CliRunner()
    result = runner.invoke(app.app, ['-c', 'staking.max_validator_count=21', 'config'])
    assert result.exit_code == 0, result.output
    assert 'max_validator_count: 21' in result.output


def test_contract_address_override():
    runner = CliRunner()
    result = runner.invoke(app.app, [
        '-c', 'staking.contract_address=0x0000000000000000000000000000000000002002',
        'genesis', '--alloc-only'] + VALIDATORS)
    assert result.exit_code == 0, result.output
    alloc = json.loads(result.output)
    assert list(alloc) == ['0x0000000000000000000000000000000000002002']


def test_genesis_unquoted_validators():
    runner = CliRunner()
    with runner.isolated_filesystem():
        with open('myconfig.yaml', 'w') as f:
            f.write('genesis:\n  validators:\n    - 0x{}\n    - 0x{}\n'.format(
                '11' * 20, '22' * 20))
        result = runner.invoke(app.app, ['-C', 'myconfig.yaml', 'genesis', '--alloc-only'])
    assert result.exit_code == 0, result.output
    storage = json.loads(result.output)[STAKING]['storage']
    assert storage['0x' + '00' * 32] == '0x' + '00' * 31 + '02'
    assert storage['0x290decd9548b62a8d60345a988386fc84ba6bc95484008f6362f93160ef3e563'] == \
        '0x' + '00' * 12 + '11' * 20


def test_genesis_empty_config_entries():
    runner = CliRunner()
    with runner.isolated_filesystem():
        with open('myconfig.yaml', 'w') as f:
            f.write('genesis:\n  validators:\n  premine:\n')
        result = runner.invoke(app.app, ['-C', 'myconfig.yaml', 'genesis', '--alloc-only'])
    assert result.exit_code == 0, result.output
    assert list(json.loads(result.output)) == [STAKING]


def test_log_config():
    runner = CliRunner()
    result = runner.invoke(app.app, ['-l', ':info', 'genesis', '--alloc-only'] + VALIDATORS)
    assert result.exit_code == 0, result.output
    assert 'genesis generated\tvalidators=2' in result.output
    try:
        result = runner.invoke(app.app, ['-l', ':info', '--log-json',
                                         'genesis', '--alloc-only'] + VALIDATORS)
    finally:
        slogging.configure(':warning')
    assert result.exit_code == 0, result.output
    assert '"event": "stakegen.app.genesis_generated"' in result.output
