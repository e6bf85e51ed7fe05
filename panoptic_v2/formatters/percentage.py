"""
Percentage Formatter - basis points, 풀 utilization, 비율

1 bps = 0.01%, 10000 bps = 100%
"""

import re

from ..constants import MAX_PARSE_DIGITS
from ..errors import ParseError
from .price import format_ratio

_PERCENT_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)$")


def format_bps(bps: int, precision: int) -> str:
    """bps → 퍼센트 문자열 (버림)

    Example:
        >>> format_bps(1234, 2)
        '12.34%'
        >>> format_bps(5000, 0)
        '50%'
    """
    negative = bps < 0
    scale = 10 ** precision
    integer_part, fractional_part = divmod(abs(bps) * scale // 100, scale)

    sign = "-" if negative else ""
    if precision > 0:
        return f"{sign}{integer_part}.{str(fractional_part).zfill(precision)}%"
    return f"{sign}{integer_part}%"


def format_utilization(utilization: int, precision: int) -> str:
    """풀 utilization (bps, PositionBalance.utilization0/1)"""
    return format_bps(utilization, precision)


def parse_bps(percent: str) -> int:
    """퍼센트 문자열 → bps (소수 둘째 자리까지, 나머지는 버림)

    Example:
        >>> parse_bps("12.34%")
        1234
    """
    text = percent.strip()
    if text.endswith("%"):
        text = text[:-1].strip()
    if not _PERCENT_RE.match(text):
        raise ParseError(f"퍼센트를 해석할 수 없습니다: {percent[:32]!r}")

    negative = text.startswith("-")
    integer_str, _, fractional_str = text.lstrip("+-").partition(".")
    if len(integer_str) + len(fractional_str) > MAX_PARSE_DIGITS:
        raise ParseError(f"퍼센트 자릿수가 {MAX_PARSE_DIGITS}자리를 넘습니다")

    result = int(integer_str or "0") * 100 + int(fractional_str.ljust(2, "0")[:2])
    return -result if negative else result


def format_ratio_percent(numerator: int, denominator: int, precision: int) -> str:
    """numerator / denominator를 퍼센트로 (반올림, 분모 0이면 '0')

    Example:
        >>> format_ratio_percent(1, 3, 2)
        '33.33%'
    """
    if precision < 0:
        raise ValueError(f"precision은 음수일 수 없습니다: {precision}")
    if denominator == 0:
        return "0"
    return f"{format_ratio(numerator * 100, denominator, precision)}%"
