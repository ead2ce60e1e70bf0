# ============================================================================
# MODULE: order_uid_cli.py
# PURPOSE: Command line access to order hashing and order UID packing.
# ============================================================================

import argparse
import json
import os
import sys
from typing import List, Optional

from eth_utils import to_bytes

import audit_log
from eip712_core import domain_separator
from log_config import configure_logging, get_logger
from order_struct import ORDER_TYPE_STR, Order, OrderKind, hash_order, order_struct_hash, type_hash
from order_uid import (
    ORDER_UID_LENGTH,
    OrderUidError,
    extract_order_uid_params,
    pack_order_uid_params,
)

log = get_logger(__name__)


def parse_kind(value) -> OrderKind:
    """Accept "sell"/"buy" or the 0/1 wire ordinal."""
    if isinstance(value, str) and not value.isdigit():
        try:
            return OrderKind[value.upper()]
        except KeyError:
            raise ValueError(f"unknown order kind: {value!r}") from None
    return OrderKind(int(value))


def parse_flag(value) -> bool:
    """Accept a JSON boolean or the strings "true"/"false"."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise ValueError(f"invalid boolean: {value!r}")


def order_from_json(data: dict) -> Order:
    """Build an Order from its camelCase JSON representation."""
    return Order(
        sell_token=data["sellToken"],
        buy_token=data["buyToken"],
        receiver=data["receiver"],
        sell_amount=int(data["sellAmount"]),
        buy_amount=int(data["buyAmount"]),
        valid_to=int(data["validTo"]),
        app_data=to_bytes(hexstr=data["appData"]),
        fee_amount=int(data["feeAmount"]),
        kind=parse_kind(data["kind"]),
        partially_fillable=parse_flag(data["partiallyFillable"]),
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="order-uid",
        description="Compute EIP-712 order hashes and pack/unpack 56-byte order UIDs",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--audit",
        action="store_true",
        default=os.environ.get("ORDER_UID_AUDIT", "false").lower() == "true",
        help="Append results to the JSONL audit trail ($ORDER_UID_AUDIT_LOG)",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("ORDER_UID_LOG_LEVEL", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("typehash", help="Print the Order type string and type hash")

    hash_p = sub.add_parser("hash", help="Hash an order read from a JSON file")
    hash_p.add_argument("--order", required=True, help="Path to order JSON ('-' for stdin)")
    hash_p.add_argument("--domain-name", help="EIP-712 domain name")
    hash_p.add_argument("--domain-version", default="v2", help="EIP-712 domain version")
    hash_p.add_argument("--chain-id", type=int, default=1, help="EIP-712 domain chain id")
    hash_p.add_argument("--verifying-contract", help="EIP-712 domain verifying contract")

    pack_p = sub.add_parser("pack", help="Pack digest, owner and validTo into an order UID")
    pack_p.add_argument("--digest", required=True, help="32-byte order digest (hex)")
    pack_p.add_argument("--owner", required=True, help="Owner address")
    pack_p.add_argument("--valid-to", type=int, required=True, help="Expiry as Unix timestamp")
    pack_p.add_argument("--uid-length", type=int, default=ORDER_UID_LENGTH, help="Target buffer length")

    unpack_p = sub.add_parser("unpack", help="Split an order UID into its parameters")
    unpack_p.add_argument("uid", help="56-byte order UID (hex)")

    return parser.parse_args(argv)


def load_order(path: str) -> Order:
    if path == "-":
        return order_from_json(json.load(sys.stdin))
    with open(path) as f:
        return order_from_json(json.load(f))


def run(args: argparse.Namespace) -> dict:
    if args.command == "typehash":
        return {
            "typeString": ORDER_TYPE_STR.decode("utf-8"),
            "typeHash": "0x" + type_hash().hex(),
        }

    if args.command == "hash":
        order = load_order(args.order)
        result = {"structHash": "0x" + order_struct_hash(order).hex()}
        if args.domain_name and args.verifying_contract:
            domain = domain_separator(
                args.domain_name, args.domain_version, args.chain_id, args.verifying_contract
            )
            result["domainSeparator"] = "0x" + domain.hex()
            result["orderDigest"] = "0x" + hash_order(domain, order).hex()
        return result

    if args.command == "pack":
        uid = pack_order_uid_params(
            to_bytes(hexstr=args.digest), args.owner, args.valid_to, args.uid_length
        )
        return {"orderUid": "0x" + uid.hex()}

    params = extract_order_uid_params(to_bytes(hexstr=args.uid))
    return {
        "orderDigest": "0x" + params.order_digest.hex(),
        "owner": params.owner,
        "validTo": params.valid_to,
    }


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(level=args.log_level)

    try:
        result = run(args)
    except KeyError as e:
        log.info("command_failed", command=args.command, error=f"missing field {e}")
        print(f"[ERROR] missing order field: {e}")
        return 1
    except (OrderUidError, ValueError, OverflowError, OSError) as e:
        log.info("command_failed", command=args.command, error=str(e))
        print(f"[ERROR] {e}")
        return 1

    for key, value in result.items():
        print(f"{key}: {value}")

    if args.audit:
        audit_log.append({"event": args.command, **result})

    return 0


if __name__ == "__main__":
    sys.exit(main())
