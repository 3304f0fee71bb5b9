"""
종목 스냅샷 JSON 직렬화기

InstrumentState → compact JSON 텍스트 (orjson).
키 스키마는 STATE_KEY_SCHEMA 테이블 하나로 정의되며 삽입 순서가 곧 출력 순서입니다.

스키마 v1:
    {
      "instrument": str, "conId": int, "tickerId": int, "timestamp": int,
      "price": {"bid": float, "ask": float, "last": float},
      "size": {"bid": int, "ask": int, "last": int},
      "timestamps": {"quote": int, "trade": int},
      "hasQuote": bool, "hasTrade": bool,
      "exchange": str,
      "tickAttrib": {"pastLimit": bool}
    }

hasQuote/hasTrade/pastLimit는 값으로만 포함되며 다른 필드의 출력을 막지 않습니다.
"""

from __future__ import annotations

from operator import attrgetter
from typing import Any, Callable, Final

import orjson

from tws_bridge.common.timefmt import format_timestamp
from tws_bridge.config.settings import serializer_settings
from tws_bridge.core.dto.io.market import InstrumentState

STATE_SCHEMA_VERSION: Final[int] = 1

StateGetter = Callable[[InstrumentState], Any]

STATE_KEY_SCHEMA: Final[tuple[tuple[tuple[str, ...], StateGetter], ...]] = (
    (("instrument",), attrgetter("symbol")),
    (("conId",), attrgetter("con_id")),
    (("tickerId",), attrgetter("ticker_id")),
    (("timestamp",), attrgetter("latest_timestamp")),
    (("price", "bid"), attrgetter("bid_price")),
    (("price", "ask"), attrgetter("ask_price")),
    (("price", "last"), attrgetter("last_price")),
    (("size", "bid"), attrgetter("bid_size")),
    (("size", "ask"), attrgetter("ask_size")),
    (("size", "last"), attrgetter("last_size")),
    (("timestamps", "quote"), attrgetter("quote_timestamp")),
    (("timestamps", "trade"), attrgetter("trade_timestamp")),
    (("hasQuote",), attrgetter("has_quote")),
    (("hasTrade",), attrgetter("has_trade")),
    (("exchange",), attrgetter("exchange")),
    (("tickAttrib", "pastLimit"), attrgetter("past_limit")),
)


def _iso_time(state: InstrumentState) -> str | None:
    try:
        return format_timestamp(state.latest_timestamp)
    except OverflowError:
        # datetime 범위(9999년)를 넘는 값은 null
        return None


def build_state_document(
    state: InstrumentState, include_iso_time: bool = False
) -> dict[str, Any]:
    """스키마 테이블에 따라 중첩 dict를 구성"""
    document: dict[str, Any] = {}
    for path, getter in STATE_KEY_SCHEMA:
        node = document
        for key in path[:-1]:
            node = node.setdefault(key, {})
        node[path[-1]] = getter(state)

    if include_iso_time:
        document["time"] = _iso_time(state)
    return document


class StateSerializer:
    """
    InstrumentState 직렬화기 (상태 없음, 스레드 안전)

    - __call__: JSON 텍스트(str)
    - to_bytes: UTF-8 JSON bytes (메시징 경계용)

    float는 orjson의 최단 왕복 표현을 사용하므로 171.55 → "171.55".
    NaN/Infinity는 orjson 규칙에 따라 null로 출력되어 예외가 발생하지 않습니다.
    """

    def __init__(self, include_iso_time: bool | None = None) -> None:
        self.include_iso_time = (
            serializer_settings.include_iso_time
            if include_iso_time is None
            else include_iso_time
        )

    def __call__(self, state: InstrumentState) -> str:
        return self.to_bytes(state).decode("utf-8")

    def to_bytes(self, state: InstrumentState) -> bytes:
        # UTF-8 문자열, 64비트 정수 범위는 InstrumentState 검증이 보장
        return orjson.dumps(build_state_document(state, self.include_iso_time))


_default_serializer = StateSerializer(include_iso_time=False)


def serialize_state(state: InstrumentState) -> str:
    """InstrumentState를 JSON 텍스트로 직렬화 (스키마 v1, 순수 함수)"""
    return _default_serializer(state)
