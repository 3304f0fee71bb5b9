"""
스냅샷 파이프라인

TickUpdate → 상태 병합 → (채널, JSON) 메시지.
전송(pub/sub)은 이 모듈의 책임이 아니며 호출자가 SnapshotMessage를 발행합니다.
"""

from __future__ import annotations

from pydantic import Field

from tws_bridge.application.state_aggregator import InstrumentStateAggregator
from tws_bridge.common.logger import PipelineLogger
from tws_bridge.core.dto.io._base import BaseIOModelDTO
from tws_bridge.core.dto.io.market import TickUpdate
from tws_bridge.infra.messaging.channels import tick_channel
from tws_bridge.infra.messaging.serializers.state_serializer import StateSerializer

logger = PipelineLogger.get_logger("snapshot_pipeline", "app")


class SnapshotMessage(BaseIOModelDTO):
    """발행 대상 스냅샷 메시지"""

    channel: str = Field(..., description="발행 채널", examples=["TWS:TICKS:AAPL"])
    symbol: str = Field(..., description="종목 심볼")
    payload: str = Field(..., description="직렬화된 스냅샷 JSON")


class SnapshotPipeline:
    """틱 업데이트를 발행 가능한 스냅샷 메시지로 변환

    카운터:
    - processed: 입력된 업데이트 수
    - emitted: 메시지로 변환된 수
    - dropped: 알 수 없는 tickerId로 버려진 수
    """

    def __init__(
        self,
        aggregator: InstrumentStateAggregator | None = None,
        serializer: StateSerializer | None = None,
        channel_prefix: str | None = None,
    ) -> None:
        self.aggregator = aggregator or InstrumentStateAggregator()
        self.serializer = serializer or StateSerializer()
        self.channel_prefix = channel_prefix
        self._processed = 0
        self._emitted = 0
        self._dropped = 0

    def process(self, update: TickUpdate) -> SnapshotMessage | None:
        self._processed += 1

        state = self.aggregator.apply(update)
        if state is None:
            self._dropped += 1
            return None

        if not self.aggregator.is_publishable(state):
            return None

        message = SnapshotMessage(
            channel=tick_channel(state.symbol, self.channel_prefix),
            symbol=state.symbol,
            payload=self.serializer(state),
        )
        self._emitted += 1
        logger.debug(
            f"Snapshot ready: {state.symbol} | Bid: {state.bid_price} "
            f"| Ask: {state.ask_price} | Last: {state.last_price}",
            extra={"channel": message.channel},
        )
        return message

    def stats(self) -> dict[str, int]:
        return {
            "processed": self._processed,
            "emitted": self._emitted,
            "dropped": self._dropped,
        }
