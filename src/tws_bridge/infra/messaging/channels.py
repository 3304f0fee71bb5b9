from __future__ import annotations

from tws_bridge.config.settings import serializer_settings


def tick_channel(symbol: str, prefix: str | None = None) -> str:
    """종목 스냅샷 채널 이름 (예: TWS:TICKS:AAPL)

    prefix 미지정 시 SERIALIZER_CHANNEL_PREFIX 설정값을 사용합니다.
    """
    if prefix is None:
        prefix = serializer_settings.channel_prefix
    return f"{prefix}{symbol}"
