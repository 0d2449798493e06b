"""
Schema Registry 클라이언트 구현

Confluent Schema Registry와의 통신을 담당합니다.
캐시는 두지 않으며, 캐싱과 요청 병합은 SchemaResolver가 담당합니다.
"""

from __future__ import annotations

from typing import Any, Protocol
from urllib.parse import quote

import aiohttp
import orjson

from avro_registry.common.exceptions import (
    SchemaNotFoundError,
    SchemaRegistryConnectionError,
    SchemaRegistryError,
)
from avro_registry.common.logger import PipelineLogger
from avro_registry.common.serde import AvroSchema, SchemaDefinition, to_bytes

logger = PipelineLogger.get_logger("schema_registry", "avro")


class SchemaRegistryTransport(Protocol):
    """SchemaResolver가 의존하는 레지스트리 전송 계약"""

    async def fetch_schema_by_id(self, schema_id: int) -> SchemaDefinition: ...

    async def register_schema(
        self, subject: str, schema: AvroSchema | SchemaDefinition
    ) -> int: ...


class SchemaRegistryClient:
    """
    Schema Registry 클라이언트

    Confluent Schema Registry와 비동기 통신을 통해 스키마 등록/조회를 수행합니다.
    """

    def __init__(
        self,
        base_url: str,
        auth: tuple[str, str] | None = None,
        timeout: float = 30.0,
        schema_type: str = "AVRO",
    ):
        self.base_url = base_url
        self.auth = auth
        self.timeout = timeout
        self.schema_type = schema_type
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """HTTP 세션을 생성하거나 재사용합니다."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(limit=100, limit_per_host=30)
            timeout = aiohttp.ClientTimeout(total=self.timeout)

            auth = None
            if self.auth:
                auth = aiohttp.BasicAuth(self.auth[0], self.auth[1])

            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=timeout,
                auth=auth,
                headers={"Accept": "application/vnd.schemaregistry.v1+json, application/json"},
            )
        return self._session

    async def close(self) -> None:
        """HTTP 세션을 종료합니다."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def _request(
        self, method: str, path: str, field: str, data: dict[str, Any] | None = None
    ) -> Any:
        """Schema Registry API 요청을 수행하고 응답 본문의 field 값을 반환합니다."""
        session = await self._ensure_session()

        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

        try:
            async with session.request(
                method,
                url,
                data=to_bytes(data) if data is not None else None,
                headers=(
                    {"Content-Type": "application/vnd.schemaregistry.v1+json"}
                    if data is not None
                    else None
                ),
            ) as response:
                body = await response.read()
                if response.status >= 400:
                    raise self._error_from_response(response.status, response.reason, body)
                return self._field_from_response(response.status, response.reason, body, field)

        except (aiohttp.ClientError, TimeoutError) as e:
            raise SchemaRegistryConnectionError(f"{method} {url}: {e!r}") from e

    @staticmethod
    def _error_from_response(
        status: int, reason: str | None, body: bytes
    ) -> SchemaRegistryError:
        """오류 응답 본문의 error_code/message를 예외로 변환합니다."""
        try:
            payload = orjson.loads(body)
        except orjson.JSONDecodeError:
            payload = None

        if not isinstance(payload, dict):
            payload = {}

        error_code = payload.get("error_code", status)
        message = payload.get("message") or body.decode("utf-8", "replace") or reason or ""

        error_cls = SchemaNotFoundError if status == 404 else SchemaRegistryError
        return error_cls(error_code, message, status=status)

    @staticmethod
    def _field_from_response(
        status: int, reason: str | None, body: bytes, field: str
    ) -> Any:
        """성공 응답 본문에서 field 값을 꺼냅니다. 형식이 다르면 SchemaRegistryError."""
        try:
            payload = orjson.loads(body)
        except orjson.JSONDecodeError:
            payload = None

        if not isinstance(payload, dict) or field not in payload:
            detail = body.decode("utf-8", "replace") or reason or ""
            raise SchemaRegistryError(
                status, f"Unexpected response without '{field}': {detail}", status=status
            )
        return payload[field]

    async def register_schema(
        self, subject: str, schema: AvroSchema | SchemaDefinition
    ) -> int:
        """
        스키마를 등록하고 스키마 ID를 반환합니다.
        이미 같은 스키마가 등록되어 있으면 레지스트리는 기존 ID를 반환합니다.

        Args:
            subject: 스키마 주제명
            schema: 스키마 정의 (dict 또는 JSON 문자열)

        Returns:
            등록된 스키마의 ID
        """
        data: dict[str, Any] = {"schema": AvroSchema.of(schema).canonical}
        if self.schema_type != "AVRO":
            data["schemaType"] = self.schema_type

        schema_id = int(
            await self._request(
                "POST", f"subjects/{quote(subject, safe='')}/versions", "id", data
            )
        )

        logger.info(f"스키마 등록 완료: subject={subject}, id={schema_id}")
        return schema_id

    async def fetch_schema_by_id(self, schema_id: int) -> SchemaDefinition:
        """
        스키마 ID로 스키마를 조회합니다.

        Args:
            schema_id: 스키마 ID

        Returns:
            파싱된 스키마 정의
        """
        schema = await self._request("GET", f"schemas/ids/{schema_id}", "schema")
        return AvroSchema(schema).definition
