"""I/O 경계 DTO 공통 설정 모듈

Pydantic v2 ConfigDict를 한 곳에서 정의하여 모든 DTO가 재사용합니다.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

# ========================================
# ConfigDict 최적화 (전역 설정)
# ========================================

OPTIMIZED_CONFIG = ConfigDict(
    # 런타임 검증
    use_enum_values=True,  # Enum → 값 직렬화
    extra="forbid",  # 알 수 없는 필드 금지
    validate_default=True,  # 기본값도 검증
    # 심볼은 입력 그대로 출력되어야 하므로 자동 트림하지 않음
    str_strip_whitespace=False,
    # 불변성: 직렬화 도중 스냅샷이 변경될 수 없음
    frozen=True,
    arbitrary_types_allowed=False,
    json_schema_extra={
        "$schema": "https://json-schema.org/draft/2020-12/schema",
    },
)


class BaseIOModelDTO(BaseModel):
    """I/O 경계용 공통 Pydantic v2 베이스 모델.

    특징:
    - 불변 객체 (frozen=True), 변경은 model_copy(update=...)로 새 인스턴스 생성
    - Enum 직렬화를 값(value)로 고정
    - 알 수 없는 필드 금지 (extra="forbid")
    """

    model_config = OPTIMIZED_CONFIG
