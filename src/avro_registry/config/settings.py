"""통합 Settings 모듈 - 환경변수 기반

이 모듈의 역할:
    1. 코드에 합리적인 기본값 제공
    2. 환경변수로 오버라이드 (우선순위 높음)
    3. 타입 안전성 보장 (Pydantic 자동 검증)

설정 우선순위:
    1. 환경변수 (최우선) - export SCHEMA_REGISTRY_URL=...
    2. .env 파일 - 현재 작업 디렉토리의 .env
    3. 코드 기본값 (settings.py 내부)
"""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def env_settings(prefix: str) -> SettingsConfigDict:
    """.env + 환경변수 통합 설정

    Args:
        prefix: 환경변수 접두사 (예: SCHEMA_REGISTRY_, LOG_)

    Returns:
        Pydantic 설정 딕셔너리
    """
    return SettingsConfigDict(
        env_prefix=prefix,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class SchemaRegistrySettings(BaseSettings):
    """Schema Registry 설정 (환경변수 기반)

    환경변수 오버라이드:
        SCHEMA_REGISTRY_URL: Schema Registry URL (기본: http://localhost:8081)
        SCHEMA_REGISTRY_TIMEOUT: 요청 타임아웃 초 (기본: 30.0)
        SCHEMA_REGISTRY_USERNAME: Basic 인증 사용자명
        SCHEMA_REGISTRY_PASSWORD: Basic 인증 비밀번호 (보안상 환경변수 권장)
        SCHEMA_REGISTRY_SCHEMA_TYPE: 등록 시 스키마 타입 (기본: AVRO)
    """

    url: str = "http://localhost:8081"
    timeout: float = 30.0
    username: str | None = None
    password: str | None = None
    schema_type: str = "AVRO"

    model_config = env_settings("SCHEMA_REGISTRY_")

    @property
    def auth(self) -> tuple[str, str] | None:
        """사용자명/비밀번호가 모두 있을 때만 Basic 인증 튜플 반환"""
        if self.username and self.password:
            return (self.username, self.password)
        return None


class LoggingSettings(BaseSettings):
    """로깅 설정 (환경변수 기반)

    환경변수 오버라이드:
        LOG_LEVEL: 로깅 레벨 (기본: INFO)
        LOG_TO_FILE: 파일 로깅 여부 (기본: false)
        LOG_DIR: 로그 디렉토리 (기본: logs)
    """

    level: str = "INFO"
    to_file: bool = False
    dir: str = "logs"

    model_config = env_settings("LOG_")

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.upper()


# ========================================
# 설정 인스턴스 (싱글톤)
# ========================================

schema_registry_settings = SchemaRegistrySettings()
logging_settings = LoggingSettings()
