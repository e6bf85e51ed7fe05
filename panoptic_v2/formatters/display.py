"""
Display Formatter - 주소, 해시, 시간, 큰 수 표시용 문자열

타임스탬프는 UTC 기준입니다 (format_timestamp_locale은 tz 인자를 따름).
"""

from datetime import datetime, timezone, tzinfo
from typing import Optional

from .amount import format_token_amount
from .price import format_ratio


def _shorten(value: str, chars: int) -> str:
    """앞 (0x + chars)자 ... 뒤 chars자"""
    if len(value) <= chars * 2 + 4:
        return value
    return f"{value[:chars + 2]}...{value[-chars:]}"


def truncate_address(address: str, chars: int = 4) -> str:
    """예: 0x1234...cdef"""
    return _shorten(address, chars)


def format_tx_hash(tx_hash: str, chars: int = 6) -> str:
    return _shorten(tx_hash, chars)


def _utc(timestamp: int) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def format_timestamp(timestamp: int) -> str:
    """Unix 초 → 'YYYY-MM-DD' (UTC)

    Example:
        >>> format_timestamp(1700000000)
        '2023-11-14'
    """
    return _utc(timestamp).strftime("%Y-%m-%d")


def format_datetime(timestamp: int) -> str:
    """Unix 초 → ISO 8601 (UTC, 예: '2023-11-14T22:13:20.000Z')"""
    dt = _utc(timestamp)
    return f"{dt.strftime('%Y-%m-%dT%H:%M:%S')}.{dt.microsecond // 1000:03d}Z"


# locale → 날짜 형식 (없는 locale은 ISO)
_LOCALE_DATE_FORMATS = {
    "en-US": "{m}/{d}/{y}",
    "en-GB": "{d:02d}/{m:02d}/{y}",
    "de-DE": "{d}.{m}.{y}",
    "fr-FR": "{d:02d}/{m:02d}/{y}",
    "ja-JP": "{y}/{m}/{d}",
    "ko-KR": "{y}. {m}. {d}.",
    "zh-CN": "{y}/{m}/{d}",
}


def format_timestamp_locale(
    timestamp: int, locale: str = "en-US", tz: Optional[tzinfo] = None
) -> str:
    """Unix 초 → locale 형식 날짜

    tz가 없으면 로컬 시간대를 사용합니다.

    Example:
        >>> format_timestamp_locale(1700000000, "de-DE", timezone.utc)
        '14.11.2023'
    """
    dt = datetime.fromtimestamp(timestamp, tz=tz)
    date_format = _LOCALE_DATE_FORMATS.get(locale, "{y}-{m:02d}-{d:02d}")
    return date_format.format(y=dt.year, m=dt.month, d=dt.day)


def format_duration(ms: int) -> str:
    """밀리초 → 사람이 읽는 기간

    - 1초 미만: '500ms'
    - 1분 미만: 0.1초 단위 반올림 ('1.5s')
    - 1시간 미만: '1m 30s'
    - 그 이상: '1h 1m'
    """
    sign = "-" if ms < 0 else ""
    abs_ms = abs(ms)

    if abs_ms < 1000:
        return f"{sign}{abs_ms}ms"

    if abs_ms < 60_000:
        seconds, tenths = divmod((abs_ms + 50) // 100, 10)
        return f"{sign}{seconds}.{tenths}s"

    if abs_ms < 3_600_000:
        minutes = abs_ms // 60_000
        seconds = (abs_ms % 60_000 + 500) // 1000
        return f"{sign}{minutes}m {seconds}s" if seconds > 0 else f"{sign}{minutes}m"

    hours = abs_ms // 3_600_000
    minutes = (abs_ms % 3_600_000 + 30_000) // 60_000
    return f"{sign}{hours}h {minutes}m" if minutes > 0 else f"{sign}{hours}h"


def format_duration_seconds(seconds: int) -> str:
    return format_duration(seconds * 1000)


def format_block_number(block_number: int) -> str:
    """예: 18000000 -> '18,000,000'"""
    return f"{block_number:,}"


def format_gas(gas: int) -> str:
    """예: 21000 -> '21,000'"""
    return f"{gas:,}"


def format_token_id_hex(token_id: int) -> str:
    return hex(token_id)


def format_pool_id_hex(pool_id: int) -> str:
    """64비트 poolId → 16자리 0 채움 16진수"""
    return f"0x{pool_id:016x}"


def format_token_id_short(token_id: int, chars: int = 4) -> str:
    return _shorten(hex(token_id), chars)


def format_compact(value: int, precision: int = 1) -> str:
    """큰 수를 K / M / B 접미사로 (반올림)

    Example:
        >>> format_compact(1_500_000)
        '1.5M'
    """
    sign = "-" if value < 0 else ""
    abs_value = abs(value)

    if abs_value < 1_000:
        formatted = str(abs_value)
    elif abs_value < 1_000_000:
        formatted = f"{format_ratio(abs_value, 1_000, precision)}K"
    elif abs_value < 1_000_000_000:
        formatted = f"{format_ratio(abs_value, 1_000_000, precision)}M"
    else:
        formatted = f"{format_ratio(abs_value, 1_000_000_000, precision)}B"

    return f"{sign}{formatted}"


def format_wei(wei: int) -> str:
    return f"{wei} wei"


def format_gwei(wei: int, precision: int) -> str:
    return f"{format_token_amount(wei, 9, precision)} gwei"
