"""
종목 상태 병합기

BidAsk/AllLast 부분 갱신을 종목별 InstrumentState 스냅샷으로 병합합니다.
소비자 쪽에서 병합 로직이 필요 없도록 항상 완전한 스냅샷을 유지합니다.

단일 워커 소유를 전제로 하며 스레드 안전하지 않습니다.
"""

from __future__ import annotations

from typing import Any, TypeAlias

from tws_bridge.common.logger import PipelineLogger
from tws_bridge.core.dto.io.market import InstrumentState, TickUpdate
from tws_bridge.core.types import TickUpdateType

Symbol: TypeAlias = str
logger = PipelineLogger.get_logger("state_aggregator", "app")


class InstrumentStateAggregator:
    """종목 상태 레지스트리 및 병합기

    하나의 종목에 여러 구독 ID(tickerId)가 매핑될 수 있습니다.
    """

    def __init__(self) -> None:
        self._symbols: dict[int, Symbol] = {}
        self._states: dict[Symbol, InstrumentState] = {}

    def register(self, ticker_id: int, symbol: str, con_id: int = 0) -> None:
        """구독 ID를 종목에 매핑

        Args:
            ticker_id: 구독 ID
            symbol: 종목 심볼
            con_id: 계약 ID (이미 등록된 종목이면 0이 아닐 때만 갱신)
        """
        self._symbols[ticker_id] = symbol
        current = self._states.get(symbol)
        if current is None:
            self._states[symbol] = InstrumentState(
                symbol=symbol, con_id=con_id, ticker_id=ticker_id
            )
        elif con_id and current.con_id != con_id:
            self._states[symbol] = current.model_copy(update={"con_id": con_id})
        logger.debug(f"Ticker registered: {ticker_id} -> {symbol}")

    def symbol_for(self, ticker_id: int) -> Symbol | None:
        return self._symbols.get(ticker_id)

    def get(self, symbol: str) -> InstrumentState | None:
        return self._states.get(symbol)

    def snapshots(self) -> list[InstrumentState]:
        """등록 순서대로 현재 스냅샷 목록"""
        return list(self._states.values())

    def apply(self, update: TickUpdate) -> InstrumentState | None:
        """부분 갱신을 병합하고 새 스냅샷을 반환

        Returns:
            병합된 스냅샷, 알 수 없는 tickerId면 None (갱신은 버려짐)
        """
        symbol = self._symbols.get(update.ticker_id)
        if symbol is None:
            logger.warning(
                f"Unknown tickerId: {update.ticker_id}, dropping {update.type} update",
                extra={"ticker_id": update.ticker_id},
            )
            return None

        changes: dict[str, Any] = {"ticker_id": update.ticker_id}
        if update.type == TickUpdateType.BID_ASK:
            changes.update(
                bid_price=update.bid_price,
                ask_price=update.ask_price,
                bid_size=update.bid_size,
                ask_size=update.ask_size,
                quote_timestamp=update.timestamp,
                has_quote=True,
            )
        else:
            changes.update(
                last_price=update.last_price,
                last_size=update.last_size,
                trade_timestamp=update.timestamp,
                past_limit=update.past_limit,
                has_trade=True,
            )
            if update.exchange:
                changes["exchange"] = update.exchange

        state = self._states[symbol].model_copy(update=changes)
        self._states[symbol] = state
        return state

    @staticmethod
    def is_publishable(state: InstrumentState) -> bool:
        """호가와 체결을 모두 수신한 스냅샷만 발행 대상"""
        return state.has_quote and state.has_trade
