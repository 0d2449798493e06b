"""
스키마 캐시

세 가지 독립적인 매핑을 유지하는 순수 인메모리 저장소입니다.
- id -> 스키마
- subject -> id
- 스키마 canonical 문자열 -> id

네트워크 I/O와 동시성 제어는 없으며 호출자(resolver)의 책임입니다.
한 번 캐시된 (id, 스키마) 쌍은 인스턴스 수명 동안 제거되지 않습니다.
"""

from __future__ import annotations

from avro_registry.common.serde import AvroSchema, SchemaDefinition


class SchemaCache:
    """Schema Registry 조회 결과 캐시"""

    def __init__(self) -> None:
        self._schemas_by_id: dict[int, AvroSchema] = {}
        self._ids_by_name: dict[str, int] = {}
        self._ids_by_schema: dict[str, int] = {}

    def set_by_id(self, schema_id: int, schema: AvroSchema | SchemaDefinition) -> int:
        self._schemas_by_id[schema_id] = AvroSchema.of(schema)
        return schema_id

    def set_by_name(self, name: str, schema_id: int) -> str:
        # subject 단위 키: 같은 subject에 다른 스키마가 등록되면 마지막 값이 남습니다.
        self._ids_by_name[name] = schema_id
        return name

    def set_by_schema(
        self, schema: AvroSchema | SchemaDefinition, schema_id: int
    ) -> AvroSchema:
        schema = AvroSchema.of(schema)
        self._ids_by_schema[schema.canonical] = schema_id
        return schema

    def get_by_id(self, schema_id: int) -> AvroSchema | None:
        return self._schemas_by_id.get(schema_id)

    def get_by_name(self, name: str) -> int | None:
        return self._ids_by_name.get(name)

    def get_by_schema(self, schema: AvroSchema | SchemaDefinition) -> int | None:
        return self._ids_by_schema.get(AvroSchema.of(schema).canonical)

    def __len__(self) -> int:
        return len(self._schemas_by_id)
