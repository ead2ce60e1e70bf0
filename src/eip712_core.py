from typing import Union

from eth_hash.auto import keccak
from eth_utils import to_canonical_address

Address = Union[str, bytes]

# ---------- fixed-width helpers ----------

def u256(x: int) -> bytes:
    return x.to_bytes(32, "big")

def addr(a: Address) -> bytes:
    # "0x..." hex string or raw 20 bytes -> 20 bytes left-padded to 32.
    # Mixed-case input is not checked against its EIP-55 checksum.
    return b"\x00" * 12 + to_canonical_address(a)

def b32(x: bytes) -> bytes:
    if len(x) != 32:
        raise ValueError(f"expected 32 bytes, got {len(x)}")
    return bytes(x)

def boolean(x: bool) -> bytes:
    return u256(1 if x else 0)

# ---------- EIP-712 core ----------

EIP191_PREFIX = b"\x19\x01"

# EIP-712 Domain TypeHash (standard per EIP-712)
DOMAIN_TYPE_STR = b"EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
DOMAIN_TYPEHASH = keccak(DOMAIN_TYPE_STR)

def domain_separator(name: str, version: str, chain_id: int, verifying_contract: Address) -> bytes:
    """
    Computes the EIP-712 Domain Separator.
    """
    return keccak(
        DOMAIN_TYPEHASH +
        keccak(name.encode('utf-8')) +
        keccak(version.encode('utf-8')) +
        u256(chain_id) +
        addr(verifying_contract)
    )

def eip712_digest(domain_separator: bytes, struct_hash: bytes) -> bytes:
    return keccak(EIP191_PREFIX + b32(domain_separator) + b32(struct_hash))
