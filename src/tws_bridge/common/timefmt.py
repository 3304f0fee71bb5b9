"""Unix 밀리초 타임스탬프 포맷 유틸리티"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def format_timestamp(timestamp_ms: int) -> str:
    """Unix 타임스탬프(ms)를 ISO 8601 UTC 문자열로 변환.

    형식: ``YYYY-MM-DDTHH:MM:SS.mmmZ``

    Example:
        >>> format_timestamp(1700000000500)
        '2023-11-14T22:13:20.500Z'
    """
    seconds, millis = divmod(int(timestamp_ms), 1000)
    # fromtimestamp는 플랫폼에 따라 음수를 거부하므로 epoch 기준 덧셈 사용
    moment = _EPOCH + timedelta(seconds=seconds)
    return f"{moment:%Y-%m-%dT%H:%M:%S}.{millis:03d}Z"
