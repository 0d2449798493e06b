"""
Schema Registry 연동 Avro 인코딩/디코딩 모듈

주요 기능:
- Confluent Wire Format 프레이밍 (매직 바이트 + 4바이트 스키마 ID)
- 스키마 캐시 (id / subject / canonical 스키마)
- 동일 키 동시 요청 병합 (싱글-플라이트)
- Schema Registry 클라이언트 (aiohttp)
- fastavro 페이로드 코덱
"""

from avro_registry.messaging.avro.registry import AvroRegistry, create_avro_registry
from avro_registry.messaging.avro.resolver import SchemaResolver
from avro_registry.messaging.avro.schema_cache import SchemaCache
from avro_registry.messaging.avro.schema_registry import (
    SchemaRegistryClient,
    SchemaRegistryTransport,
)
from avro_registry.messaging.avro.serializers import FastAvroPayloadCodec, PayloadCodec
from avro_registry.messaging.avro.single_flight import PendingRequests

__all__ = [
    # Facade
    "AvroRegistry",
    "create_avro_registry",
    # Core
    "SchemaResolver",
    "SchemaCache",
    "PendingRequests",
    # Collaborators
    "SchemaRegistryClient",
    "SchemaRegistryTransport",
    "FastAvroPayloadCodec",
    "PayloadCodec",
]
