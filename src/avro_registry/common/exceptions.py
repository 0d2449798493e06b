"""
Avro Registry 예외 계층

- FramingError: Confluent Wire Format 헤더 오류 (재시도 불가)
- SchemaRegistryError: Schema Registry 응답/통신 오류 (캐시는 그대로, 재시도 가능)
- CodecError: 페이로드가 스키마와 맞지 않음
"""

from __future__ import annotations


class AvroRegistryError(Exception):
    """avro_registry 기본 예외"""

    pass


class FramingError(AvroRegistryError, ValueError):
    """Wire Format 프레이밍 오류"""

    pass


class SchemaRegistryError(AvroRegistryError):
    """Schema Registry가 오류 응답을 반환했을 때 발생하는 예외

    Attributes:
        error_code: 레지스트리가 내려준 error_code (없으면 HTTP 상태 코드)
        registry_message: 레지스트리가 내려준 message
        status: HTTP 상태 코드 (통신 실패 시 None)
    """

    def __init__(
        self,
        error_code: int | str | None,
        message: str,
        status: int | None = None,
    ) -> None:
        self.error_code = error_code
        self.registry_message = message
        self.status = status
        super().__init__(self._format())

    def _format(self) -> str:
        return f"Schema registry error: {self.error_code} - {self.registry_message}"


class SchemaNotFoundError(SchemaRegistryError):
    """스키마를 찾을 수 없을 때 발생하는 예외 (HTTP 404)"""

    pass


class SchemaRegistryConnectionError(SchemaRegistryError):
    """Schema Registry에 요청 자체가 실패했을 때 발생하는 예외

    응답이 없으므로 error_code/status는 None이며,
    메시지는 다른 레지스트리 오류와 같은 "Schema registry error:" 접두사를 씁니다.
    """

    def __init__(self, message: str) -> None:
        super().__init__(None, message)

    def _format(self) -> str:
        return f"Schema registry error: request failed - {self.registry_message}"


class CodecError(AvroRegistryError):
    """페이로드 직렬화/역직렬화 실패"""

    pass
