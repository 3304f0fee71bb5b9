"""통합 Settings 모듈 - 환경변수 기반

설정 우선순위:
    1. 환경변수 (최우선) - export SERIALIZER_CHANNEL_PREFIX=...
    2. .env 파일 - config/.env
    3. 코드 기본값 (settings.py 내부)

사용 예시:
    # 기본값 사용
    from tws_bridge.config.settings import serializer_settings
    serializer_settings.channel_prefix  # → "TWS:TICKS:"

    # 환경변수 오버라이드
    export SERIALIZER_INCLUDE_ISO_TIME=true
    export LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# 설정 파일 경로
config_dir = Path(__file__).parent


def env_settings(prefix: str) -> SettingsConfigDict:
    """환경변수 + .env 통합 설정

    Args:
        prefix: 환경변수 접두사 (예: SERIALIZER_, LOG_)

    Returns:
        Pydantic 설정 딕셔너리
    """
    return SettingsConfigDict(
        env_prefix=prefix,
        env_file=config_dir / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class SerializerSettings(BaseSettings):
    """스냅샷 직렬화 설정

    환경변수 오버라이드:
        SERIALIZER_CHANNEL_PREFIX: 틱 스냅샷 채널 접두사 (기본: TWS:TICKS:)
        SERIALIZER_INCLUDE_ISO_TIME: ISO 8601 "time" 필드 추가 여부 (기본: false)
    """

    channel_prefix: str = "TWS:TICKS:"
    include_iso_time: bool = False

    model_config = env_settings("SERIALIZER_")


class LoggingSettings(BaseSettings):
    """로깅 설정

    환경변수 오버라이드:
        LOG_LEVEL: 로그 레벨 (기본: INFO)
        LOG_TO_FILE: 파일 로깅 여부 (기본: false)
        LOG_DIR: 로그 디렉토리 (기본: logs)
    """

    level: str = "INFO"
    to_file: bool = False
    dir: str = "logs"

    model_config = env_settings("LOG_")


# ========================================
# 설정 인스턴스 (싱글톤)
# ========================================

serializer_settings = SerializerSettings()
logging_settings = LoggingSettings()
