from __future__ import annotations

import asyncio
from typing import Any

from avro_registry.common.exceptions import SchemaRegistryError
from avro_registry.common.serde import AvroSchema

STRING_SCHEMA: dict[str, Any] = {"type": "string"}
TEST_MESSAGE = "test message"

# [magic][id=1][avro string "test message"]
ENCODED_TEST_MESSAGE = bytes(
    [0x00, 0x00, 0x00, 0x00, 0x01, 0x18]
) + b"test message"


def build_user_schema() -> dict[str, Any]:
    return {
        "type": "record",
        "name": "User",
        "namespace": "com.example",
        "fields": [
            {"name": "id", "type": "long"},
            {"name": "name", "type": "string"},
            {"name": "email", "type": ["null", "string"], "default": None},
        ],
    }


class FakeRegistryTransport:
    """메모리 기반 Schema Registry 대역 (호출 횟수 기록)"""

    def __init__(self, delay: float = 0.01) -> None:
        self.delay = delay
        self.schemas: dict[int, Any] = {}
        self.ids_by_subject: dict[tuple[str, str], int] = {}
        self.fetch_calls: list[int] = []
        self.register_calls: list[tuple[str, str]] = []
        self.fetch_errors: list[SchemaRegistryError] = []
        self.register_errors: list[SchemaRegistryError] = []

    def add_schema(self, schema_id: int, definition: Any) -> None:
        self.schemas[schema_id] = definition

    async def fetch_schema_by_id(self, schema_id: int) -> Any:
        self.fetch_calls.append(schema_id)
        await asyncio.sleep(self.delay)
        if self.fetch_errors:
            raise self.fetch_errors.pop(0)
        if schema_id not in self.schemas:
            raise SchemaRegistryError(40403, "Schema not found", status=404)
        return self.schemas[schema_id]

    async def register_schema(self, subject: str, schema: Any) -> int:
        canonical = AvroSchema.of(schema).canonical
        self.register_calls.append((subject, canonical))
        await asyncio.sleep(self.delay)
        if self.register_errors:
            raise self.register_errors.pop(0)

        for schema_id, definition in self.schemas.items():
            if AvroSchema.of(definition).canonical == canonical:
                self.ids_by_subject[(subject, canonical)] = schema_id
                return schema_id

        schema_id = max(self.schemas, default=0) + 1
        self.schemas[schema_id] = AvroSchema.of(schema).definition
        self.ids_by_subject[(subject, canonical)] = schema_id
        return schema_id
