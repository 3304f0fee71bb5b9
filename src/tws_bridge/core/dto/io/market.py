"""시장 데이터 DTO 모듈

InstrumentState(종목 스냅샷)와 TickUpdate(부분 갱신)를 정의합니다.
재사용 패턴: OPTIMIZED_CONFIG 기반 BaseIOModelDTO 상속
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, field_validator

from tws_bridge.core.dto.io._base import BaseIOModelDTO
from tws_bridge.core.types import TickUpdateType

# ========================================
# 정수 범위 제약 (JSON 직렬화 가능 범위)
# ========================================

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# 수량/ID/타임스탬프 공통 (orjson은 64비트 초과 정수를 직렬화하지 못함)
Int64 = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]


def _ensure_utf8(v: str) -> str:
    # lone surrogate 등 UTF-8로 인코딩할 수 없는 문자열 거부
    try:
        v.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValueError(f"not UTF-8 encodable: {v!r}") from e
    return v


# ========================================
# 종목 스냅샷 DTO
# ========================================


class InstrumentState(BaseIOModelDTO):
    """단일 종목의 시장 상태 스냅샷 (불변).

    BidAsk/AllLast 부분 갱신을 병합한 완전한 상태로, 직렬화기는 읽기만 합니다.
    기본값(모든 숫자 0, 플래그 False, exchange 빈 문자열)도 유효한 스냅샷입니다.

    Example:
        >>> state = InstrumentState(
        ...     symbol="AAPL",
        ...     con_id=265598,
        ...     bid_price=171.55,
        ...     ask_price=171.57,
        ...     last_price=171.56,
        ... )
    """

    symbol: str = Field(..., description="종목 심볼", examples=["AAPL", "SPY"])
    con_id: Int64 = Field(0, description="거래소/벤더 계약 ID", examples=[265598])
    ticker_id: Int64 = Field(0, description="내부 구독 ID", examples=[1001])

    # Quote (tickByTickBidAsk)
    bid_price: float = Field(0.0, description="매수 호가")
    ask_price: float = Field(0.0, description="매도 호가")
    bid_size: Int64 = Field(0, description="매수 호가 수량")
    ask_size: Int64 = Field(0, description="매도 호가 수량")
    quote_timestamp: Int64 = Field(0, description="호가 시각 (Unix milliseconds)")
    has_quote: bool = Field(False, description="호가 데이터 수신 여부")

    # Trade (tickByTickAllLast)
    last_price: float = Field(0.0, description="최종 체결가")
    last_size: Int64 = Field(0, description="최종 체결량")
    trade_timestamp: Int64 = Field(0, description="체결 시각 (Unix milliseconds)")
    has_trade: bool = Field(False, description="체결 데이터 수신 여부")

    # Attributes
    exchange: str = Field("", description="거래소 코드", examples=["NASDAQ"])
    past_limit: bool = Field(False, description="체결 속성 pastLimit")

    @field_validator("symbol", "exchange")
    @classmethod
    def _validate_text(cls, v: str) -> str:
        return _ensure_utf8(v)

    @property
    def latest_timestamp(self) -> int:
        """호가/체결 중 가장 최근 시각"""
        return max(self.quote_timestamp, self.trade_timestamp)


# ========================================
# 부분 갱신 DTO
# ========================================


class TickUpdate(BaseIOModelDTO):
    """정규화된 틱 업데이트 (불변).

    type에 따라 사용하는 필드가 다릅니다.
    - bid_ask: bid/ask 가격 및 수량
    - all_last: last 가격/수량, past_limit, exchange
    """

    ticker_id: Int64 = Field(..., description="구독 ID")
    type: TickUpdateType = Field(..., description="업데이트 종류")
    timestamp: Int64 = Field(0, description="이벤트 시각 (Unix milliseconds)")

    bid_price: float = 0.0
    ask_price: float = 0.0
    bid_size: Int64 = 0
    ask_size: Int64 = 0

    last_price: float = 0.0
    last_size: Int64 = 0
    past_limit: bool = False
    exchange: str = ""

    @field_validator("exchange")
    @classmethod
    def _validate_exchange(cls, v: str) -> str:
        return _ensure_utf8(v)
