"""
Order UID codec.

An order UID is the 56-byte concatenation

    orderDigest (32) | owner (20) | validTo (4, big-endian uint32)

and is treated by callers as an opaque key, so the layout never changes.
"""
from typing import NamedTuple

from eth_utils import to_canonical_address, to_checksum_address

from eip712_core import Address, b32
from log_config import get_logger
from order_struct import Order, hash_order

log = get_logger(__name__)

ORDER_DIGEST_LENGTH = 32
OWNER_LENGTH = 20
VALID_TO_LENGTH = 4
ORDER_UID_LENGTH = ORDER_DIGEST_LENGTH + OWNER_LENGTH + VALID_TO_LENGTH

_OWNER_OFFSET = ORDER_DIGEST_LENGTH
_VALID_TO_OFFSET = _OWNER_OFFSET + OWNER_LENGTH


class OrderUidError(ValueError):
    pass


class BufferOverflow(OrderUidError):
    """Target buffer for packing is not exactly ORDER_UID_LENGTH bytes."""

    def __init__(self, message: str = "uid buffer overflow"):
        super().__init__(message)


class InvalidUid(OrderUidError):
    """Encoded UID is not exactly ORDER_UID_LENGTH bytes."""

    def __init__(self, message: str = "invalid uid"):
        super().__init__(message)


class OrderUidParams(NamedTuple):
    order_digest: bytes
    owner: str
    valid_to: int


def pack_order_uid_params_into(
    buffer: bytearray,
    order_digest: bytes,
    owner: Address,
    valid_to: int,
) -> None:
    """
    Write (order_digest, owner, valid_to) into a caller-owned buffer.

    The buffer is left untouched when any check fails.
    """
    if len(buffer) != ORDER_UID_LENGTH:
        log.debug("uid_pack_rejected", buffer_length=len(buffer))
        raise BufferOverflow()

    digest = b32(order_digest)
    owner_bytes = to_canonical_address(owner)
    valid_to_bytes = valid_to.to_bytes(VALID_TO_LENGTH, "big")

    buffer[:_OWNER_OFFSET] = digest
    buffer[_OWNER_OFFSET:_VALID_TO_OFFSET] = owner_bytes
    buffer[_VALID_TO_OFFSET:] = valid_to_bytes


def pack_order_uid_params(
    order_digest: bytes,
    owner: Address,
    valid_to: int,
    uid_length: int = ORDER_UID_LENGTH,
) -> bytes:
    if uid_length != ORDER_UID_LENGTH:
        log.debug("uid_pack_rejected", buffer_length=uid_length)
        raise BufferOverflow()

    buffer = bytearray(uid_length)
    pack_order_uid_params_into(buffer, order_digest, owner, valid_to)
    return bytes(buffer)


def extract_order_uid_params(uid: bytes) -> OrderUidParams:
    """
    Split a 56-byte UID back into its digest, owner and validTo.

    The owner is returned as an EIP-55 checksummed address.
    """
    if len(uid) != ORDER_UID_LENGTH:
        log.debug("uid_extract_rejected", uid_length=len(uid))
        raise InvalidUid()

    return OrderUidParams(
        order_digest=bytes(uid[:_OWNER_OFFSET]),
        owner=to_checksum_address(bytes(uid[_OWNER_OFFSET:_VALID_TO_OFFSET])),
        valid_to=int.from_bytes(uid[_VALID_TO_OFFSET:], "big"),
    )


def compute_order_uid(domain_separator: bytes, order: Order, owner: Address) -> bytes:
    return pack_order_uid_params(hash_order(domain_separator, order), owner, order.valid_to)
