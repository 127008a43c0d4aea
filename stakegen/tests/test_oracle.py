import io
import json

import pytest

from stakegen.contract import DEFAULT_CONTRACT, STAKING_CONTRACT_ADDRESS
from stakegen.exceptions import ArtifactError, ExecutionError
from stakegen.genesis import PredeployParams, predeploy_staking_sc
from stakegen.oracle import (
    ContractArtifact,
    CreationResult,
    ExecutionBackend,
    diff_storage,
    generate_from_artifact,
    load_artifact,
)
from stakegen.utils import encode_hex

artifact_dict = {
    'abi': [],
    'bytecode': '0x6080604052',
    'deployedBytecode': encode_hex(DEFAULT_CONTRACT.bytecode),
}

VALIDATORS = [b'\x11' * 20, b'\x22' * 20]
PARAMS = PredeployParams(1, 10)


class ReplayBackend(ExecutionBackend):
    """Pretends the creation code staked `validators`, storing keys the way
    a trie would (without leading zeros)."""

    def __init__(self, storage, balance, error=None):
        self.storage = storage
        self.balance = balance
        self.error = error
        self.committed = False

    def create_ephemeral_state(self):
        return {}

    def execute_creation(self, state, bytecode, sender, value, gas_limit, address):
        if self.error:
            return CreationResult(self.error, None)
        state[address] = dict(self.storage)
        return CreationResult(None, address)

    def walk_storage(self, state, address):
        for k, v in state[address].items():
            yield k.lstrip(b'\x00'), v.lstrip(b'\x00')

    def commit(self, state):
        self.committed = True

    def get_balance(self, state, address):
        return self.balance

    def get_nonce(self, state, address):
        return 1


@pytest.fixture
def expected():
    return predeploy_staking_sc(VALIDATORS, PARAMS)


def test_load_artifact(tmpdir):
    path = tmpdir.join('Staking.json')
    path.write(json.dumps(artifact_dict))
    for f in (str(path), io.StringIO(json.dumps(artifact_dict))):
        artifact = load_artifact(f)
        assert artifact.bytecode == b'\x60\x80\x60\x40\x52'
        assert artifact.deployed_bytecode == DEFAULT_CONTRACT.bytecode
        assert artifact.abi == []


@pytest.mark.parametrize('content', [
    'not json',
    '[]',
    json.dumps({'bytecode': '0x00'}),
    json.dumps({'bytecode': '0xzz', 'deployedBytecode': '0x00'}),
    json.dumps({'bytecode': 1, 'deployedBytecode': '0x00'}),
])
def test_load_bad_artifact(content):
    with pytest.raises(ArtifactError):
        load_artifact(io.StringIO(content))


def test_load_missing_artifact(tmpdir):
    with pytest.raises(ArtifactError):
        load_artifact(str(tmpdir.join('missing.json')))


def test_generate_matches_direct_computation(expected):
    backend = ReplayBackend(expected.storage, expected.balance)
    account = generate_from_artifact(ContractArtifact.from_dict(artifact_dict), backend)
    assert backend.committed
    assert diff_storage(expected.storage, account.storage) == []
    assert account.balance == expected.balance
    assert account.code == expected.code
    assert account.nonce == 1


def test_generate_reports_differences(expected):
    tampered = dict(expected.storage)
    total_key = b'\x00' * 31 + b'\x04'
    tampered[total_key] = b'\x00' * 31 + b'\x01'
    backend = ReplayBackend(tampered, expected.balance)
    account = generate_from_artifact(ContractArtifact.from_dict(artifact_dict), backend)
    assert diff_storage(expected.storage, account.storage) == [
        (total_key, expected.storage[total_key], b'\x00' * 31 + b'\x01')]


def test_generate_creation_failure(mocker):
    backend = mocker.Mock(spec=ExecutionBackend)
    backend.execute_creation.return_value = CreationResult('revert', None)
    with pytest.raises(ExecutionError):
        generate_from_artifact(ContractArtifact.from_dict(artifact_dict), backend)
    assert not backend.walk_storage.called
    assert not backend.commit.called


def test_generate_wrong_address(mocker):
    backend = mocker.Mock(spec=ExecutionBackend)
    backend.execute_creation.return_value = CreationResult(None, b'\x01' * 20)
    with pytest.raises(ExecutionError):
        generate_from_artifact(ContractArtifact.from_dict(artifact_dict), backend)


def test_generate_calls_backend(mocker):
    backend = mocker.Mock(spec=ExecutionBackend)
    state = backend.create_ephemeral_state.return_value
    backend.execute_creation.return_value = CreationResult(None, STAKING_CONTRACT_ADDRESS)
    backend.walk_storage.return_value = [(b'\x05', b'\x01')]
    backend.get_balance.return_value = 0
    backend.get_nonce.return_value = 1
    artifact = ContractArtifact.from_dict(artifact_dict)

    account = generate_from_artifact(artifact, backend, gas_limit=1000)

    backend.execute_creation.assert_called_once_with(
        state, artifact.bytecode, b'\x00' * 20, 0, 1000, STAKING_CONTRACT_ADDRESS)
    backend.walk_storage.assert_called_once_with(state, STAKING_CONTRACT_ADDRESS)
    backend.commit.assert_called_once_with(state)
    assert account.storage == {b'\x00' * 31 + b'\x05': b'\x00' * 31 + b'\x01'}


def test_backend_is_abstract():
    backend = ExecutionBackend()
    with pytest.raises(NotImplementedError):
        backend.create_ephemeral_state()


def test_diff_storage_missing_entries():
    a = {b'\x01': b'\x01'}
    b = {b'\x02': b'\x01'}
    assert diff_storage(a, b) == [(b'\x01', b'\x01', None), (b'\x02', None, b'\x01')]
