from __future__ import annotations

from enum import StrEnum


class TickUpdateType(StrEnum):
    """틱 업데이트 종류

    - BID_ASK: 호가 갱신 (tickByTickBidAsk)
    - ALL_LAST: 체결 갱신 (tickByTickAllLast)
    """

    BID_ASK = "bid_ask"
    ALL_LAST = "all_last"
