"""
Genesis state of the staking contract, computed without executing it.

The contract is predeployed with every genesis validator already staked,
so the storage written here has to be exactly what calling `stake()` once
per validator (each with the default stake) would have produced.
"""
from collections import namedtuple

from stakegen import slots, slogging
from stakegen.contract import DEFAULT_CONTRACT, MAX_VALIDATOR_COUNT, MIN_VALIDATOR_COUNT
from stakegen.exceptions import ArgumentError
from stakegen.utils import (
    INT64_MAX,
    UINT64_MAX,
    WORD_SIZE,
    encode_hex,
    encode_int32,
    normalize_address,
    word_to_hex,
    zpad,
)

log = slogging.get_logger('stakegen.genesis')


PredeployParams = namedtuple('PredeployParams', ['min_validator_count', 'max_validator_count'])
PredeployParams.__new__.__defaults__ = (MIN_VALIDATOR_COUNT, MAX_VALIDATOR_COUNT)


ZERO_HASH = b'\x00' * 32
ZERO_ADDRESS = b'\x00' * 20

default_genesis = {
    'nonce': '0x0000000000000000',
    'difficulty': '0x1',
    'mixhash': encode_hex(ZERO_HASH),
    'coinbase': encode_hex(ZERO_ADDRESS),
    'timestamp': '0x0',
    'parentHash': encode_hex(ZERO_HASH),
    'extraData': '0x',
    'gasLimit': '0x500000',
}


class GenesisAccount(object):
    """An account of the genesis allocation.

    :ivar balance: balance in wei
    :ivar nonce: account nonce
    :ivar code: runtime bytecode
    :ivar storage: dict of 32 byte storage key to 32 byte value
    """

    def __init__(self, balance=0, nonce=0, code=b'', storage=None):
        self.balance = balance
        self.nonce = nonce
        self.code = code
        self.storage = storage if storage is not None else {}

    def to_dict(self):
        """Render the account in genesis `alloc` form."""
        d = {
            'balance': hex(self.balance),
            'nonce': hex(self.nonce),
        }
        if self.code:
            d['code'] = encode_hex(self.code)
        if self.storage:
            d['storage'] = dict((word_to_hex(k), word_to_hex(v))
                                for k, v in sorted(self.storage.items()))
        return d

    def __eq__(self, other):
        if not isinstance(other, GenesisAccount):
            return NotImplemented
        return (self.balance, self.nonce, self.code, self.storage) == \
            (other.balance, other.nonce, other.code, other.storage)

    def __repr__(self):
        return '<GenesisAccount balance={} nonce={} storage={}>'.format(
            self.balance, self.nonce, len(self.storage))


def _check_uint64(name, value):
    if not isinstance(value, int) or isinstance(value, bool):
        raise ArgumentError('{} must be an integer, got {!r}'.format(name, value))
    if not 0 <= value <= UINT64_MAX:
        raise ArgumentError('{} out of uint64 range: {}'.format(name, value))


def validate_params(params):
    _check_uint64('min_validator_count', params.min_validator_count)
    _check_uint64('max_validator_count', params.max_validator_count)
    if params.min_validator_count > params.max_validator_count:
        raise ArgumentError('min_validator_count {} exceeds max_validator_count {}'.format(
            params.min_validator_count, params.max_validator_count))


def normalize_validators(validators, strict=False):
    """Normalize validator addresses, checking widths and duplicates.

    Duplicates are kept, every occurrence occupies its own slot in the
    validators array, only the last one is reflected in the per address
    mappings. With `strict` they are rejected instead.
    """
    validators = [normalize_address(v) for v in validators]
    if len(validators) > INT64_MAX:
        raise ArgumentError('too many validators: {}'.format(len(validators)))
    seen = set()
    for v in validators:
        if v in seen:
            if strict:
                raise ArgumentError('duplicate validator {}'.format(encode_hex(v)))
            log.warning('duplicate validator', address=encode_hex(v))
        seen.add(v)
    return validators


def predeploy_staking_sc(validators, params=None, contract=DEFAULT_CONTRACT, strict=False):
    """Build the staking contract account with `validators` pre-staked.

    :param validators: ordered list of validator addresses (bytes or hex)
    :param params: :class:`PredeployParams`, defaults to 1 .. 2**53-1
    :param contract: the :class:`~stakegen.contract.StakingContract` layout
    :param strict: reject duplicate validators instead of warning
    :raises: :exc:`~stakegen.exceptions.ArgumentError` on invalid input, before
             any storage is computed
    :returns: :class:`GenesisAccount`
    """
    params = params or PredeployParams()
    validate_params(params)
    validators = normalize_validators(validators, strict=strict)

    storage = {}
    staked_amount = 0
    stake_value = encode_int32(contract.default_stake)
    true_value = encode_int32(1)

    def put(raw_key, value):
        storage[slots.to_storage_key(raw_key)] = value

    for index, validator in enumerate(validators):
        staked_amount += contract.default_stake
        indexes = slots.get_storage_indexes(validator, index, contract)
        log.debug('staking validator', address=encode_hex(validator), index=index)

        put(indexes.validators_index, zpad(validator, WORD_SIZE))
        put(indexes.address_to_is_validator_index, true_value)
        put(indexes.address_to_staked_amount_index, stake_value)
        put(indexes.address_to_validator_index_index, encode_int32(index))
        put(indexes.staked_amount_index, encode_int32(staked_amount))
        put(indexes.validators_array_size_index, encode_int32(index + 1))

    put(slots.scalar_key(contract.min_validators_slot), encode_int32(params.min_validator_count))
    put(slots.scalar_key(contract.max_validators_slot), encode_int32(params.max_validator_count))

    log.info('predeployed staking contract', validators=len(validators),
             total_stake=staked_amount)
    return GenesisAccount(balance=staked_amount, code=contract.bytecode, storage=storage)


def make_genesis_alloc(validators, params=None, contract=DEFAULT_CONTRACT, premine=None,
                       strict=False):
    """Genesis `alloc` with the staking contract and optional premined balances.

    :param premine: dict of address to balance in wei
    """
    alloc = {}
    for address, balance in (premine or {}).items():
        address = normalize_address(address)
        if address == contract.address:
            raise ArgumentError('premine collides with staking contract address')
        alloc[encode_hex(address)] = GenesisAccount(balance=balance).to_dict()
    account = predeploy_staking_sc(validators, params, contract, strict=strict)
    alloc[encode_hex(contract.address)] = account.to_dict()
    return alloc


def make_genesis(validators, params=None, contract=DEFAULT_CONTRACT, premine=None,
                 strict=False, **header):
    """Full genesis declaration, header fields default to `default_genesis`."""
    unknown = set(header) - set(default_genesis)
    if unknown:
        raise ArgumentError('unknown genesis fields: {}'.format(', '.join(sorted(unknown))))
    genesis = dict(default_genesis)
    genesis.update(header)
    genesis['alloc'] = make_genesis_alloc(validators, params, contract, premine, strict)
    return genesis
