from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence, Tuple

from eth_hash.auto import keccak
from eip712_core import Address, u256, addr, b32, boolean, eip712_digest


class OrderKind(IntEnum):
    # wire values are fixed, encoded as uint8
    SELL = 0
    BUY = 1


# EIP-712 field table for a trade Order, in declaration order.
# Reordering or retyping any entry changes ORDER_TYPEHASH.
ORDER_TYPE_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("sellToken", "address"),
    ("buyToken", "address"),
    ("receiver", "address"),
    ("sellAmount", "uint256"),
    ("buyAmount", "uint256"),
    ("validTo", "uint32"),
    ("appData", "bytes32"),
    ("feeAmount", "uint256"),
    ("kind", "uint8"),
    ("partiallyFillable", "bool"),
)


def encode_type(name: str, fields: Sequence[Tuple[str, str]]) -> str:
    """
    Builds the EIP-712 type signature, e.g. "Order(address sellToken,...)".
    """
    return name + "(" + ",".join(f"{type_} {field}" for field, type_ in fields) + ")"


# Order(address sellToken,address buyToken,address receiver,uint256 sellAmount,uint256 buyAmount,uint32 validTo,bytes32 appData,uint256 feeAmount,uint8 kind,bool partiallyFillable)
ORDER_TYPE_STR = encode_type("Order", ORDER_TYPE_FIELDS).encode("utf-8")
ORDER_TYPEHASH = keccak(ORDER_TYPE_STR)


def type_hash() -> bytes:
    return ORDER_TYPEHASH


@dataclass(frozen=True)
class Order:
    sell_token: Address
    buy_token: Address
    receiver: Address
    sell_amount: int
    buy_amount: int
    valid_to: int
    app_data: bytes
    fee_amount: int
    kind: OrderKind
    partially_fillable: bool


def order_struct_hash(order: Order) -> bytes:
    """
    Computes the EIP-712 structHash for an Order.
    Addresses are padded to 32 bytes, integers (validTo and kind included)
    are big-endian 32-byte words, appData is used as-is.
    """
    return keccak(
        ORDER_TYPEHASH +
        addr(order.sell_token) +
        addr(order.buy_token) +
        addr(order.receiver) +
        u256(order.sell_amount) +
        u256(order.buy_amount) +
        u256(order.valid_to) +          # uint32 encoded as uint256 in hashed struct
        b32(order.app_data) +
        u256(order.fee_amount) +
        u256(OrderKind(order.kind)) +   # uint8 encoded as uint256 in hashed struct
        boolean(order.partially_fillable)
    )


def hash_order(domain_separator: bytes, order: Order) -> bytes:
    """
    EIP-712 signing hash of an order under the given domain.
    """
    return eip712_digest(domain_separator, order_struct_hash(order))
