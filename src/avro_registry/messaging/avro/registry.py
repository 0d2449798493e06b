"""
Avro Registry 퍼사드

Wire Format 프레이밍 + 스키마 해석 + 페이로드 코덱을 조합한 공개 API입니다.

사용 예시:
    async with create_avro_registry("http://localhost:8081") as registry:
        data = await registry.encode_message("orders", schema, {"id": 1})
        message = await registry.decode(data)
"""

from __future__ import annotations

from typing import Any

from avro_registry.common.serde import AvroSchema, SchemaDefinition
from avro_registry.config.settings import schema_registry_settings
from avro_registry.messaging.avro import wire_format
from avro_registry.messaging.avro.resolver import SchemaResolver
from avro_registry.messaging.avro.schema_cache import SchemaCache
from avro_registry.messaging.avro.schema_registry import (
    SchemaRegistryClient,
    SchemaRegistryTransport,
)
from avro_registry.messaging.avro.serializers import FastAvroPayloadCodec, PayloadCodec
from avro_registry.messaging.avro.subjects import key_subject, value_subject


class AvroRegistry:
    """
    Schema Registry 연동 Avro 인코더/디코더

    인스턴스마다 독립적인 스키마 캐시와 진행 중 요청 테이블을 가집니다.
    """

    def __init__(
        self,
        transport: SchemaRegistryTransport,
        codec: PayloadCodec | None = None,
        cache: SchemaCache | None = None,
    ) -> None:
        self.transport = transport
        self.codec: PayloadCodec = codec if codec is not None else FastAvroPayloadCodec()
        self.resolver = SchemaResolver(transport, cache)

    @property
    def cache(self) -> SchemaCache:
        return self.resolver.cache

    async def __aenter__(self) -> AvroRegistry:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """전송 계층이 close를 제공하면 닫습니다."""
        close = getattr(self.transport, "close", None)
        if close is not None:
            await close()

    async def encode(
        self, subject: str, schema: AvroSchema | SchemaDefinition, message: Any
    ) -> bytes:
        """
        정규화된 subject로 메시지를 인코딩합니다.

        Returns:
            Confluent Wire Format 바이트

        Raises:
            SchemaRegistryError: 스키마 등록 실패
            CodecError: 메시지가 스키마와 맞지 않음
        """
        schema = AvroSchema.of(schema)
        schema_id = await self.resolver.resolve_id_for_schema(subject, schema)
        payload = self.codec.serialize(schema, message)
        return wire_format.encode(schema_id, payload)

    async def encode_message(
        self, topic: str, schema: AvroSchema | SchemaDefinition, message: Any
    ) -> bytes:
        """<topic>-value subject로 메시지 값을 인코딩합니다."""
        return await self.encode(value_subject(topic), schema, message)

    async def encode_key(
        self, topic: str, schema: AvroSchema | SchemaDefinition, message: Any
    ) -> bytes:
        """<topic>-key subject로 메시지 키를 인코딩합니다."""
        return await self.encode(key_subject(topic), schema, message)

    async def decode(self, data: bytes) -> Any:
        """
        Wire Format 바이트를 디코딩합니다.

        Raises:
            FramingError: 헤더가 없거나 매직 바이트가 다름
            SchemaRegistryError: 스키마 조회 실패
            CodecError: 페이로드가 스키마로 해석되지 않음
        """
        schema_id, payload = wire_format.decode(data)
        schema = await self.resolver.resolve_schema_for_id(schema_id)
        return self.codec.deserialize(schema, payload)

    decode_message = decode


def create_avro_registry(
    url: str | None = None,
    auth: tuple[str, str] | None = None,
    timeout: float | None = None,
    codec: PayloadCodec | None = None,
) -> AvroRegistry:
    """
    aiohttp 전송 계층과 fastavro 코덱으로 AvroRegistry를 생성합니다.
    인자가 없으면 SCHEMA_REGISTRY_* 설정값을 사용합니다.

    Args:
        url: Schema Registry URL
        auth: Basic 인증 (사용자명, 비밀번호)
        timeout: 요청 타임아웃 (초)
        codec: 페이로드 코덱 (기본: FastAvroPayloadCodec)

    Returns:
        AvroRegistry 인스턴스
    """
    transport = SchemaRegistryClient(
        base_url=url or schema_registry_settings.url,
        auth=auth or schema_registry_settings.auth,
        timeout=timeout if timeout is not None else schema_registry_settings.timeout,
        schema_type=schema_registry_settings.schema_type,
    )
    return AvroRegistry(transport, codec=codec)
