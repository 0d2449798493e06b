"""
Avro 페이로드 직렬화/역직렬화 구현

fastavro schemaless 인코딩만 담당합니다.
Wire Format 헤더(매직 바이트 + 스키마 ID)는 wire_format 모듈의 몫입니다.
"""

from __future__ import annotations

import io
from typing import Any, Protocol

import fastavro
from fastavro.schema import SchemaParseException

from avro_registry.common.exceptions import CodecError
from avro_registry.common.logger import PipelineLogger
from avro_registry.common.serde import AvroSchema

logger = PipelineLogger.get_logger("avro_serializers", "avro")


class PayloadCodec(Protocol):
    """AvroRegistry가 의존하는 페이로드 코덱 계약"""

    def serialize(self, schema: AvroSchema, message: Any) -> bytes: ...

    def deserialize(self, schema: AvroSchema, data: bytes) -> Any: ...


class FastAvroPayloadCodec:
    """
    fastavro 기반 페이로드 코덱

    파싱된 스키마는 canonical 문자열 단위로 재사용합니다.
    """

    def __init__(self) -> None:
        # Any 사용 사유: fastavro parsed schema는 중첩된 dict/list/str 구조
        self._parsed: dict[str, Any] = {}

    def _parse(self, schema: AvroSchema) -> Any:
        parsed = self._parsed.get(schema.canonical)
        if parsed is None:
            try:
                parsed = fastavro.parse_schema(schema.definition)
            except (SchemaParseException, TypeError, ValueError, KeyError) as e:
                raise CodecError(f"Invalid Avro schema: {e}") from e
            self._parsed[schema.canonical] = parsed
        return parsed

    def serialize(self, schema: AvroSchema, message: Any) -> bytes:
        """
        메시지를 Avro 바이너리로 인코딩합니다.

        Raises:
            CodecError: 메시지가 스키마와 맞지 않는 경우
        """
        parsed = self._parse(schema)
        bytes_writer = io.BytesIO()
        try:
            fastavro.schemaless_writer(bytes_writer, parsed, message)
        except (TypeError, ValueError, KeyError, AttributeError) as e:
            raise CodecError(f"Avro serialization failed: {e}") from e

        avro_bytes = bytes_writer.getvalue()
        logger.debug(f"Avro 직렬화 완료: size={len(avro_bytes)} bytes")
        return avro_bytes

    def deserialize(self, schema: AvroSchema, data: bytes) -> Any:
        """
        Avro 바이너리를 writer 스키마로 디코딩합니다.

        Raises:
            CodecError: 바이트가 스키마로 해석되지 않는 경우
        """
        parsed = self._parse(schema)
        bytes_reader = io.BytesIO(data)
        try:
            result = fastavro.schemaless_reader(bytes_reader, parsed)
        except (EOFError, TypeError, ValueError, KeyError, IndexError, UnicodeDecodeError) as e:
            raise CodecError(f"Avro deserialization failed: {e}") from e

        logger.debug(f"Avro 역직렬화 완료: size={len(data)} bytes")
        return result
