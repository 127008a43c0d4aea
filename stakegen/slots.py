"""
Storage key derivation for the staking contract.

Follows the solidity storage layout rules
(https://docs.soliditylang.org/en/latest/internals/layout_in_storage.html):

 - value types live at their declared slot
 - mapping entries live at keccak(pad32(key) . pad32(slot))
 - dynamic array length lives at the slot, element i at keccak(pad32(slot)) + i

`.` stands for concatenation. The raw keys returned here are not padded,
`to_storage_key` turns them into 32 byte storage words.
"""
from collections import namedtuple

from stakegen.contract import DEFAULT_CONTRACT
from stakegen.exceptions import ArgumentError
from stakegen.utils import (
    ADDRESS_SIZE,
    WORD_SIZE,
    decode_int,
    int_to_bytes,
    normalize_address,
    sha3,
    to_word,
    zpad,
)


StorageIndexes = namedtuple('StorageIndexes', [
    'validators_index',                  # address[]
    'validators_array_size_index',       # address[] size
    'address_to_is_validator_index',     # mapping(address => bool)
    'address_to_staked_amount_index',    # mapping(address => uint256)
    'address_to_validator_index_index',  # mapping(address => uint256)
    'staked_amount_index',               # uint256
])


def _check_slot(slot):
    if not isinstance(slot, int) or slot < 0:
        raise ArgumentError('invalid storage slot {!r}'.format(slot))


def _check_width(data, width, what):
    if len(data) != width:
        raise ArgumentError('{} must be {} bytes, got {}'.format(what, width, len(data)))


def mapping_slot(address, slot):
    """Key of the entry for `address` in the mapping declared at `slot`.

    :param address: 20 byte address
    :param slot: logical slot number of the mapping
    :returns: 32 byte keccak hash of the left padded address followed by the
              left padded slot
    """
    _check_slot(slot)
    _check_width(address, ADDRESS_SIZE, 'address')
    preimage = zpad(address, WORD_SIZE) + zpad(int_to_bytes(slot), WORD_SIZE)
    _check_width(preimage, 2 * WORD_SIZE, 'mapping preimage')
    return sha3(preimage)


def array_slot(slot):
    """Base hash of the dynamic array declared at `slot`."""
    _check_slot(slot)
    preimage = zpad(int_to_bytes(slot), WORD_SIZE)
    _check_width(preimage, WORD_SIZE, 'array preimage')
    return sha3(preimage)


def index_with_offset(base_hash, offset):
    """Add `offset` to the integer value of `base_hash`.

    The result is the minimal big endian encoding of the sum and may be
    shorter than 32 bytes, or one byte longer when the sum overflows.
    """
    _check_width(base_hash, WORD_SIZE, 'base hash')
    if offset < 0:
        raise ArgumentError('negative array offset {}'.format(offset))
    return int_to_bytes(decode_int(base_hash) + offset)


def array_length_key(slot):
    _check_slot(slot)
    if slot > 0xff:
        raise ArgumentError('array slot {} does not fit a single byte'.format(slot))
    return bytes([slot])


def scalar_key(slot):
    _check_slot(slot)
    return int_to_bytes(slot)


def to_storage_key(raw):
    """Normalize a raw key to a 32 byte storage word, wrapping like the EVM."""
    key = to_word(raw)
    assert len(key) == WORD_SIZE
    return key


def get_storage_indexes(address, index, contract=DEFAULT_CONTRACT):
    """Keys touched when the validator `address` is appended at `index`.

    Layout specific: see :mod:`stakegen.contract`.
    """
    address = normalize_address(address)
    return StorageIndexes(
        validators_index=index_with_offset(array_slot(contract.validators_slot), index),
        validators_array_size_index=array_length_key(contract.validators_slot),
        address_to_is_validator_index=mapping_slot(address, contract.is_validator_slot),
        address_to_staked_amount_index=mapping_slot(address, contract.staked_amount_slot),
        address_to_validator_index_index=mapping_slot(address, contract.validator_index_slot),
        staked_amount_index=scalar_key(contract.total_staked_slot),
    )
