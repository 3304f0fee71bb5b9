"""종목 시장 상태 스냅샷 → JSON 브리지"""

from tws_bridge.core.dto.io.market import InstrumentState, TickUpdate
from tws_bridge.infra.messaging.serializers.state_serializer import (
    StateSerializer,
    serialize_state,
)

__all__ = ["InstrumentState", "TickUpdate", "StateSerializer", "serialize_state"]
