from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

import orjson

# Any 사용 사유: Avro 스키마는 dict/list/str 중첩 구조라 정확한 타입 정의가 어려움
SchemaDefinition = Union[dict[str, Any], list[Any], str]


def to_bytes(value: Any) -> bytes:
    """객체를 UTF-8 JSON bytes(orjson)로 직렬화"""
    return orjson.dumps(value)


def parse_schema_definition(value: SchemaDefinition) -> Any:
    """스키마 정의를 파이썬 값으로 정규화합니다.

    - JSON 문자열은 파싱합니다 ('{"type": "string"}' == {"type": "string"})
    - 객체/배열/문자열 리터럴이 아닌 문자열은 원시 타입 이름으로 취급합니다
      ("string", "null")
    """
    if isinstance(value, bytes):
        value = value.decode("utf-8")
    if isinstance(value, str):
        if value.lstrip()[:1] not in ("{", "[", '"'):
            return value
        try:
            return orjson.loads(value)
        except orjson.JSONDecodeError:
            return value
    return value


def canonical_json(value: SchemaDefinition) -> str:
    """키 순서를 정렬한 결정적 JSON 문자열 (캐시 키 용도)"""
    return orjson.dumps(
        parse_schema_definition(value), option=orjson.OPT_SORT_KEYS
    ).decode("utf-8")


@dataclass(slots=True, frozen=True, eq=False)
class AvroSchema:
    """
    불변 스키마 값 객체

    내부 구조는 페이로드 코덱의 몫이며, 캐시/동일성 판단은 canonical 문자열로만 합니다.
    """

    definition: Any
    canonical: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        definition = parse_schema_definition(self.definition)
        # frozen=True로 인해 object.__setattr__ 사용
        object.__setattr__(self, "definition", definition)
        object.__setattr__(self, "canonical", canonical_json(definition))

    @classmethod
    def of(cls, value: AvroSchema | SchemaDefinition) -> AvroSchema:
        if isinstance(value, AvroSchema):
            return value
        return cls(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AvroSchema):
            return NotImplemented
        return self.canonical == other.canonical

    def __hash__(self) -> int:
        return hash(self.canonical)

    def __str__(self) -> str:
        return self.canonical
