from tws_bridge.core.types._tick_types import TickUpdateType

__all__ = ["TickUpdateType"]
