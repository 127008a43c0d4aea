import binascii

from eth_utils import (
    big_endian_to_int,
    decode_hex,
    encode_hex,
    int_to_big_endian,
    keccak,
    remove_0x_prefix,
)

from stakegen.exceptions import ArgumentError

WORD_SIZE = 32
ADDRESS_SIZE = 20
UINT64_MAX = 2 ** 64 - 1
INT64_MAX = 2 ** 63 - 1
UINT256_MOD = 2 ** 256


def zpad(x, l):
    """Left zero-pad `x` to `l` bytes (no-op if already long enough)."""
    return b'\x00' * max(0, l - len(x)) + x


def int_to_bytes(v):
    """Minimal big-endian encoding, empty for zero."""
    if v < 0:
        raise ArgumentError('cannot encode negative integer {}'.format(v))
    return int_to_big_endian(v).lstrip(b'\x00')


def encode_int32(v):
    if not 0 <= v < UINT256_MOD:
        raise ArgumentError('integer {} does not fit a 256 bit word'.format(v))
    return zpad(int_to_bytes(v), WORD_SIZE)


def decode_int(b):
    return big_endian_to_int(b) if b else 0


def sha3(data):
    return keccak(data)


def to_word(b):
    """Normalize a byte string to a 32 byte storage word.

    Longer inputs keep their low order 32 bytes.
    """
    return zpad(b[-WORD_SIZE:], WORD_SIZE)


def word_to_hex(b):
    return encode_hex(to_word(b))


def parse_hex(s):
    """Decode a hex string, with or without `0x`, tolerating odd length."""
    s = remove_0x_prefix(s)
    if len(s) % 2:
        s = '0' + s
    try:
        return decode_hex(s)
    except (binascii.Error, ValueError) as e:
        raise ArgumentError('invalid hex string {!r}: {}'.format(s, e))


def parse_int_or_hex(s):
    if isinstance(s, int):
        return s
    if not isinstance(s, str):
        raise ArgumentError('not an integer: {!r}'.format(s))
    if s.startswith(('0x', '0X')):
        return decode_int(parse_hex(s))
    try:
        return int(s)
    except ValueError:
        raise ArgumentError('not an integer: {!r}'.format(s))


def normalize_address(x):
    """Return the 20 raw bytes of an address given as bytes or hex string."""
    if isinstance(x, str):
        x = parse_hex(x)
    if not isinstance(x, bytes):
        raise ArgumentError('invalid address type {}'.format(type(x).__name__))
    if len(x) != ADDRESS_SIZE:
        raise ArgumentError('address must be {} bytes, got {}'.format(ADDRESS_SIZE, len(x)))
    return x

