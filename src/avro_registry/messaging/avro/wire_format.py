"""
Confluent Wire Format 프레이밍

| offset | size | field     |
|--------|------|-----------|
| 0      | 1    | magic (0) |
| 1      | 4    | schema id (big-endian unsigned) |
| 5      | 가변  | payload   |
"""

from __future__ import annotations

import struct

from avro_registry.common.exceptions import FramingError

# Confluent Schema Registry 매직 바이트 (0x0)
MAGIC_BYTE = 0

_HEADER = struct.Struct("!BI")
HEADER_SIZE = _HEADER.size

_MAX_SCHEMA_ID = 0xFFFFFFFF

MISSING_SCHEMA_ID_MESSAGE = "Message doesn't contain schema identifier byte."


def encode(schema_id: int, payload: bytes) -> bytes:
    """
    [MAGIC_BYTE][SCHEMA_ID][PAYLOAD] 형태로 프레이밍합니다.

    Raises:
        FramingError: schema_id가 unsigned 32-bit 범위를 벗어난 경우
    """
    if not 0 <= schema_id <= _MAX_SCHEMA_ID:
        raise FramingError(f"Schema id out of range: {schema_id}")
    return _HEADER.pack(MAGIC_BYTE, schema_id) + bytes(payload)


def decode(data: bytes) -> tuple[int, bytes]:
    """
    프레임에서 스키마 ID와 페이로드를 분리합니다.

    Args:
        data: Confluent Wire Format 바이트

    Returns:
        (schema_id, payload) - payload는 비어 있을 수 있음

    Raises:
        FramingError: 5바이트 미만이거나 매직 바이트가 0이 아닌 경우
    """
    if len(data) < HEADER_SIZE:
        raise FramingError(MISSING_SCHEMA_ID_MESSAGE)

    magic_byte, schema_id = _HEADER.unpack_from(data)
    if magic_byte != MAGIC_BYTE:
        raise FramingError(MISSING_SCHEMA_ID_MESSAGE)

    return schema_id, bytes(data[HEADER_SIZE:])
