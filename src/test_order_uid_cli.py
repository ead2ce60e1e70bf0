import json

import pytest
from eth_utils import to_checksum_address

from conftest import fill_distinct_bytes
from order_struct import OrderKind, order_struct_hash, type_hash
from order_uid_cli import main, order_from_json, parse_flag, parse_kind

ORDER_JSON = {
    "sellToken": "0x" + "01" * 20,
    "buyToken": "0x" + "02" * 20,
    "receiver": "0x" + "03" * 20,
    "sellAmount": "42000000000000000000",
    "buyAmount": "13370000000000000000",
    "validTo": 0xFFFFFFFF,
    "appData": "0x" + "00" * 32,
    "feeAmount": "1000000000000000000",
    "kind": "sell",
    "partiallyFillable": False,
}


def output_fields(capsys) -> dict:
    out = capsys.readouterr().out
    return dict(line.split(": ", 1) for line in out.splitlines())


def test_parse_kind():
    assert parse_kind("sell") is OrderKind.SELL
    assert parse_kind("BUY") is OrderKind.BUY
    assert parse_kind(1) is OrderKind.BUY
    assert parse_kind("0") is OrderKind.SELL
    with pytest.raises(ValueError):
        parse_kind("limit")
    with pytest.raises(ValueError):
        parse_kind(2)


def test_typehash_command(capsys):
    assert main(["typehash"]) == 0
    fields = output_fields(capsys)
    assert fields["typeHash"] == "0x" + type_hash().hex()
    assert fields["typeString"].startswith("Order(address sellToken,")


def test_hash_command(tmp_path, capsys):
    path = tmp_path / "order.json"
    path.write_text(json.dumps(ORDER_JSON))

    assert main(["hash", "--order", str(path)]) == 0
    fields = output_fields(capsys)
    assert fields["structHash"] == "0x" + order_struct_hash(order_from_json(ORDER_JSON)).hex()
    assert "orderDigest" not in fields


def test_hash_command_with_domain(tmp_path, capsys):
    path = tmp_path / "order.json"
    path.write_text(json.dumps(ORDER_JSON))

    assert main([
        "hash", "--order", str(path),
        "--domain-name", "Gnosis Protocol",
        "--verifying-contract", "0x" + "44" * 20,
    ]) == 0
    fields = output_fields(capsys)
    assert len(bytes.fromhex(fields["orderDigest"][2:])) == 32
    assert fields["orderDigest"] != fields["structHash"]


def test_pack_then_unpack(capsys):
    digest = "0x" + fill_distinct_bytes(32, 1).hex()
    owner = to_checksum_address(fill_distinct_bytes(20, 33))
    valid_to = int.from_bytes(fill_distinct_bytes(4, 53), "big")

    assert main(["pack", "--digest", digest, "--owner", owner, "--valid-to", str(valid_to)]) == 0
    uid = output_fields(capsys)["orderUid"]
    assert uid == "0x" + fill_distinct_bytes(56, 1).hex()

    assert main(["unpack", uid]) == 0
    fields = output_fields(capsys)
    assert fields == {"orderDigest": digest, "owner": owner, "validTo": str(valid_to)}


def test_pack_overflow_exits_nonzero(capsys):
    code = main([
        "pack", "--digest", "0x" + "00" * 32, "--owner", "0x" + "00" * 20,
        "--valid-to", "0", "--uid-length", "57",
    ])
    assert code == 1
    assert "uid buffer overflow" in capsys.readouterr().out


def test_unpack_invalid_uid_exits_nonzero(capsys):
    assert main(["unpack", "0x" + "00" * 55]) == 1
    assert "invalid uid" in capsys.readouterr().out


def test_audit_flag_appends_entry(tmp_path, monkeypatch, capsys):
    path = tmp_path / "audit.jsonl"
    monkeypatch.setenv("ORDER_UID_AUDIT_LOG", str(path))

    assert main(["--audit", "typehash"]) == 0
    entry = json.loads(path.read_text())
    assert entry["event"] == "typehash"
    assert entry["typeHash"] == "0x" + type_hash().hex()


def test_parse_flag():
    assert parse_flag(True) is True
    assert parse_flag("false") is False
    assert parse_flag("TRUE") is True
    with pytest.raises(ValueError):
        parse_flag("no")
    with pytest.raises(ValueError):
        parse_flag(1)


def test_string_false_keeps_order_fill_or_kill(tmp_path, capsys):
    as_bool = tmp_path / "bool.json"
    as_bool.write_text(json.dumps(ORDER_JSON))
    as_text = tmp_path / "text.json"
    as_text.write_text(json.dumps(dict(ORDER_JSON, partiallyFillable="false")))

    assert order_from_json(json.loads(as_text.read_text())).partially_fillable is False
    assert main(["hash", "--order", str(as_bool)]) == 0
    expected = output_fields(capsys)["structHash"]
    assert main(["hash", "--order", str(as_text)]) == 0
    assert output_fields(capsys)["structHash"] == expected


def test_invalid_flag_exits_nonzero(tmp_path, capsys):
    path = tmp_path / "order.json"
    path.write_text(json.dumps(dict(ORDER_JSON, partiallyFillable="maybe")))
    assert main(["hash", "--order", str(path)]) == 1
    assert "invalid boolean" in capsys.readouterr().out


def test_missing_order_field_exits_nonzero(tmp_path, capsys):
    order = dict(ORDER_JSON)
    del order["receiver"]
    path = tmp_path / "order.json"
    path.write_text(json.dumps(order))
    assert main(["hash", "--order", str(path)]) == 1
    assert "missing order field" in capsys.readouterr().out


def test_missing_order_file_exits_nonzero(tmp_path, capsys):
    assert main(["hash", "--order", str(tmp_path / "absent.json")]) == 1
    assert capsys.readouterr().out.startswith("[ERROR]")
