"""
스키마 해석기

캐시 조회, 요청 병합, 레지스트리 호출을 조합하여
- 인코딩: (subject, 스키마) -> 스키마 ID
- 디코딩: 스키마 ID -> 스키마
를 해석합니다. 키마다 동시에 최대 한 번의 레지스트리 요청만 나갑니다.
"""

from __future__ import annotations

from avro_registry.common.logger import PipelineLogger
from avro_registry.common.serde import AvroSchema, SchemaDefinition
from avro_registry.messaging.avro.schema_cache import SchemaCache
from avro_registry.messaging.avro.schema_registry import SchemaRegistryTransport
from avro_registry.messaging.avro.single_flight import PendingRequests

logger = PipelineLogger.get_logger("schema_resolver", "avro")


class SchemaResolver:
    """
    캐시 + 싱글-플라이트 기반 스키마 해석기

    실패한 요청은 캐시에 아무것도 남기지 않으며 (네거티브 캐싱 없음),
    다음 호출자가 처음부터 다시 시도합니다.
    """

    def __init__(
        self,
        transport: SchemaRegistryTransport,
        cache: SchemaCache | None = None,
    ) -> None:
        self.transport = transport
        self.cache = cache if cache is not None else SchemaCache()
        self._registrations: PendingRequests[int] = PendingRequests()
        self._fetches: PendingRequests[AvroSchema] = PendingRequests()

    async def resolve_id_for_schema(
        self, subject: str, schema: AvroSchema | SchemaDefinition
    ) -> int:
        """
        인코딩용 스키마 ID를 해석합니다.

        canonical 스키마 키가 subject와 무관하므로 먼저 조회하고,
        그 다음 subject 키를 조회합니다. subject 키는 subject 단위이므로
        같은 subject에 다른 스키마를 쓰면 마지막으로 등록된 ID가 반환됩니다.

        Args:
            subject: 정규화된 subject 이름 (예: orders-value)
            schema: 스키마 정의

        Returns:
            스키마 ID

        Raises:
            SchemaRegistryError: 레지스트리 등록 실패
        """
        schema = AvroSchema.of(schema)

        schema_id = self.cache.get_by_schema(schema)
        if schema_id is None:
            schema_id = self.cache.get_by_name(subject)
        if schema_id is not None:
            logger.debug(f"스키마 ID 캐시 히트: subject={subject}, id={schema_id}")
            return schema_id

        return await self._registrations.run(
            ("subject", subject, schema.canonical),
            lambda: self._register(subject, schema),
        )

    async def _register(self, subject: str, schema: AvroSchema) -> int:
        schema_id = await self.transport.register_schema(subject, schema)
        self.cache.set_by_name(subject, schema_id)
        self.cache.set_by_schema(schema, schema_id)
        if self.cache.get_by_id(schema_id) is None:
            self.cache.set_by_id(schema_id, schema)
        return schema_id

    async def resolve_schema_for_id(self, schema_id: int) -> AvroSchema:
        """
        디코딩용 스키마를 해석합니다.

        Args:
            schema_id: Wire Format 헤더의 스키마 ID

        Returns:
            스키마 값 객체

        Raises:
            SchemaRegistryError: 레지스트리 조회 실패
        """
        schema = self.cache.get_by_id(schema_id)
        if schema is not None:
            logger.debug(f"스키마 캐시 히트: id={schema_id}")
            return schema

        return await self._fetches.run(
            ("id", schema_id),
            lambda: self._fetch(schema_id),
        )

    async def _fetch(self, schema_id: int) -> AvroSchema:
        schema = AvroSchema.of(await self.transport.fetch_schema_by_id(schema_id))
        self.cache.set_by_id(schema_id, schema)
        if self.cache.get_by_schema(schema) is None:
            self.cache.set_by_schema(schema, schema_id)
        logger.debug(f"스키마 조회 완료: id={schema_id}")
        return schema
