"""
Execution based genesis generation.

Instead of computing the storage layout, the contract creation code is run
on an ephemeral state and the resulting storage is harvested. This is used
as a reference to check :func:`stakegen.genesis.predeploy_staking_sc`
against, the engine itself is supplied by the caller as an
:class:`ExecutionBackend`.
"""
from collections import namedtuple
import json

from stakegen import slogging
from stakegen.contract import STAKING_CONTRACT_ADDRESS
from stakegen.exceptions import ArgumentError, ArtifactError, ExecutionError
from stakegen.genesis import GenesisAccount, ZERO_ADDRESS
from stakegen.utils import INT64_MAX, encode_hex, normalize_address, parse_hex, to_word

log = slogging.get_logger('stakegen.oracle')

CreationResult = namedtuple('CreationResult', ['error', 'address'])


class ContractArtifact(object):
    """Compiled contract as emitted by the solidity toolchain.

    :ivar bytecode: creation bytecode
    :ivar deployed_bytecode: runtime bytecode
    :ivar abi: the abi as decoded from json, or `None`
    """

    def __init__(self, bytecode, deployed_bytecode, abi=None):
        self.bytecode = bytecode
        self.deployed_bytecode = deployed_bytecode
        self.abi = abi

    @classmethod
    def from_dict(cls, d):
        try:
            bytecode = d['bytecode']
            deployed = d['deployedBytecode']
        except KeyError as e:
            raise ArtifactError('artifact is missing {}'.format(e))
        if not isinstance(bytecode, str) or not isinstance(deployed, str):
            raise ArtifactError('artifact bytecode must be a hex string')
        try:
            return cls(parse_hex(bytecode), parse_hex(deployed), d.get('abi'))
        except ArgumentError as e:
            raise ArtifactError('could not decode artifact bytecode: {}'.format(e))


def load_artifact(f):
    """Load a contract artifact.

    :param f: either a path to the json file or an opened file
    :raises: :exc:`~stakegen.exceptions.ArtifactError` if the file can not be
             read or lacks the bytecode fields
    """
    try:
        try:
            data = json.load(f)
        except AttributeError:
            with open(f) as opened:
                data = json.load(opened)
    except (IOError, ValueError) as e:
        raise ArtifactError('could not load artifact: {}'.format(e))
    if not isinstance(data, dict):
        raise ArtifactError('artifact must be a json object')
    return ContractArtifact.from_dict(data)


class ExecutionBackend(object):
    """Interface of the engine the creation transaction is run on.

    A state handle is whatever the backend returns from
    :meth:`create_ephemeral_state`, it is passed back unchanged.
    """

    def create_ephemeral_state(self):
        raise NotImplementedError()

    def execute_creation(self, state, bytecode, sender, value, gas_limit, address):
        """Run `bytecode` as creation code, deploying at `address`.

        :returns: :class:`CreationResult`
        """
        raise NotImplementedError()

    def walk_storage(self, state, address):
        """Iterate over the `(key, value)` pairs stored for `address`."""
        raise NotImplementedError()

    def commit(self, state):
        raise NotImplementedError()

    def get_balance(self, state, address):
        raise NotImplementedError()

    def get_nonce(self, state, address):
        raise NotImplementedError()


def generate_from_artifact(artifact, backend, address=STAKING_CONTRACT_ADDRESS,
                           sender=ZERO_ADDRESS, value=0, gas_limit=INT64_MAX):
    """Deploy `artifact` on a fresh state of `backend` and capture the account.

    :param artifact: :class:`ContractArtifact`, or a path / file to load it from
    :raises: :exc:`~stakegen.exceptions.ExecutionError` if the creation fails
    :returns: :class:`~stakegen.genesis.GenesisAccount` with the runtime code
    """
    if not isinstance(artifact, ContractArtifact):
        artifact = load_artifact(artifact)
    address = normalize_address(address)
    sender = normalize_address(sender)

    state = backend.create_ephemeral_state()
    result = backend.execute_creation(state, artifact.bytecode, sender, value, gas_limit,
                                      address)
    if result.error:
        raise ExecutionError('contract creation failed: {}'.format(result.error))
    if result.address is not None and normalize_address(result.address) != address:
        raise ExecutionError('contract deployed at {}, expected {}'.format(
            encode_hex(normalize_address(result.address)), encode_hex(address)))

    storage = {}
    for k, v in backend.walk_storage(state, address):
        storage[to_word(k)] = to_word(v)
    backend.commit(state)
    log.info('harvested storage', entries=len(storage), address=encode_hex(address))

    return GenesisAccount(
        balance=backend.get_balance(state, address),
        nonce=backend.get_nonce(state, address),
        code=artifact.deployed_bytecode,
        storage=storage,
    )


def diff_storage(expected, actual):
    """Sorted `(key, expected, actual)` triples where the two maps disagree.

    A missing entry is reported as `None`.
    """
    diffs = []
    for key in sorted(set(expected) | set(actual)):
        e, a = expected.get(key), actual.get(key)
        if e != a:
            diffs.append((key, e, a))
    return diffs
