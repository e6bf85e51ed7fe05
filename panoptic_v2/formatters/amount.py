"""
Token Amount Formatter

토큰 최소 단위 정수 ↔ 소수 문자열.
포맷은 반올림하지 않고 버립니다 (잔고를 실제보다 크게 보이지 않도록).
"""

import re

from ..constants import MAX_PARSE_DIGITS
from ..data.types import FormattedTokenFlow, TokenFlow
from ..errors import AmountParseError

_AMOUNT_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)$")


def format_token_amount(amount: int, decimals: int, precision: int) -> str:
    """최소 단위 정수 → 소수점 `precision`자리 문자열 (버림)

    Example:
        >>> format_token_amount(1_500_000, 6, 2)
        '1.50'
        >>> format_token_amount(-1_234_567, 6, 3)
        '-1.234'
    """
    if decimals < 0 or precision < 0:
        raise ValueError(f"decimals/precision은 음수일 수 없습니다: {decimals}, {precision}")

    negative = amount < 0
    integer_part, fractional_part = divmod(abs(amount), 10 ** decimals)

    fractional_str = str(fractional_part).zfill(decimals) if decimals else ""
    fractional_str = fractional_str[:precision].ljust(precision, "0")

    sign = "-" if negative else ""
    if precision > 0:
        return f"{sign}{integer_part}.{fractional_str}"
    return f"{sign}{integer_part}"


def format_token_amount_signed(amount: int, decimals: int, precision: int) -> str:
    """양수에 '+' 부호를 붙인 format_token_amount"""
    formatted = format_token_amount(amount, decimals, precision)
    if amount > 0:
        return f"+{formatted}"
    return formatted


format_token_delta = format_token_amount_signed


def format_token_flow(
    flow: TokenFlow,
    decimals0: int,
    decimals1: int,
    precision0: int,
    precision1: int,
) -> FormattedTokenFlow:
    """TokenFlow의 각 필드를 토큰별 decimals / precision으로 포맷

    delta는 부호를 붙이고 (format_token_delta), 잔고는 그대로 포맷합니다.
    """
    return FormattedTokenFlow(
        delta0=format_token_delta(flow.delta0, decimals0, precision0),
        delta1=format_token_delta(flow.delta1, decimals1, precision1),
        balance_before0=format_token_amount(flow.balance_before0, decimals0, precision0),
        balance_before1=format_token_amount(flow.balance_before1, decimals1, precision1),
        balance_after0=format_token_amount(flow.balance_after0, decimals0, precision0),
        balance_after1=format_token_amount(flow.balance_after1, decimals1, precision1),
    )


def parse_token_amount(amount: str, decimals: int) -> int:
    """소수 문자열 → 최소 단위 정수

    소수부가 decimals보다 길면 버립니다.

    Example:
        >>> parse_token_amount("1.5", 6)
        1500000

    Raises:
        AmountParseError: 십진수 형식이 아니거나 MAX_PARSE_DIGITS자리를 넘는 경우
    """
    text = amount.strip()
    if not _AMOUNT_RE.match(text):
        raise AmountParseError(f"토큰 수량을 해석할 수 없습니다: {amount[:32]!r}")

    negative = text.startswith("-")
    integer_str, _, fractional_str = text.lstrip("+-").partition(".")
    if len(integer_str) + len(fractional_str) > MAX_PARSE_DIGITS:
        raise AmountParseError(f"토큰 수량 자릿수가 {MAX_PARSE_DIGITS}자리를 넘습니다")

    padded_fractional = fractional_str.ljust(decimals, "0")[:decimals]
    result = int(integer_str or "0") * 10 ** decimals + int(padded_fractional or "0")

    return -result if negative else result
