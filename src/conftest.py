import pytest

from order_struct import Order, OrderKind


def fill_bytes(count: int, byte: int) -> bytes:
    return bytes([byte] * count)


def fill_distinct_bytes(count: int, start: int) -> bytes:
    return bytes((start + i) % 256 for i in range(count))


@pytest.fixture
def sample_order() -> Order:
    return Order(
        sell_token="0x" + fill_bytes(20, 0x01).hex(),
        buy_token="0x" + fill_bytes(20, 0x02).hex(),
        receiver="0x" + fill_bytes(20, 0x03).hex(),
        sell_amount=42 * 10**18,
        buy_amount=1337 * 10**16,
        valid_to=0xFFFFFFFF,
        app_data=b"\x00" * 32,
        fee_amount=10**18,
        kind=OrderKind.SELL,
        partially_fillable=False,
    )
