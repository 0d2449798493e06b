from __future__ import annotations

import pytest

from avro_registry.common.exceptions import FramingError
from avro_registry.messaging.avro import wire_format


def test_encode_prefixes_magic_byte_and_big_endian_id() -> None:
    assert wire_format.encode(1, b"\x18") == b"\x00\x00\x00\x00\x01\x18"
    assert wire_format.encode(0x01020304, b"") == b"\x00\x01\x02\x03\x04"


def test_encode_accepts_full_unsigned_range() -> None:
    assert wire_format.encode(0xFFFFFFFF, b"x") == b"\x00\xff\xff\xff\xffx"


@pytest.mark.parametrize("schema_id", [-1, 2**32])
def test_encode_rejects_out_of_range_id(schema_id: int) -> None:
    with pytest.raises(FramingError):
        wire_format.encode(schema_id, b"")


def test_decode_splits_id_and_payload() -> None:
    assert wire_format.decode(b"\x00\x00\x00\x01\x00payload") == (256, b"payload")


def test_decode_allows_empty_payload() -> None:
    assert wire_format.decode(b"\x00\x00\x00\x00\x07") == (7, b"")


def test_decode_accepts_memoryview() -> None:
    assert wire_format.decode(memoryview(b"\x00\x00\x00\x00\x02ab")) == (2, b"ab")


@pytest.mark.parametrize(
    "data",
    [b"", b"test", b"\x00\x00\x00\x01", b"\x01\x00\x00\x00\x01payload"],
)
def test_decode_rejects_missing_schema_identifier(data: bytes) -> None:
    with pytest.raises(FramingError) as exc_info:
        wire_format.decode(data)
    assert str(exc_info.value) == "Message doesn't contain schema identifier byte."


def test_framing_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        wire_format.decode(b"")
