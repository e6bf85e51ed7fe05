"""
WAD Formatter (1e18 = 1.0)
"""

from .amount import format_token_amount, parse_token_amount

WAD_DECIMALS = 18


def format_wad(wad: int, precision: int) -> str:
    return format_token_amount(wad, WAD_DECIMALS, precision)


def format_wad_signed(wad: int, precision: int) -> str:
    formatted = format_wad(wad, precision)
    if wad > 0:
        return f"+{formatted}"
    return formatted


def format_wad_percent(wad: int, precision: int) -> str:
    """WAD 비율 → 퍼센트 (예: 5e16 -> '5.00%')"""
    return f"{format_token_amount(wad * 100, WAD_DECIMALS, precision)}%"


def format_rate_wad(rate_wad: int, precision: int) -> str:
    """WAD 이자율 → 퍼센트"""
    return format_wad_percent(rate_wad, precision)


def parse_wad(value: str) -> int:
    return parse_token_amount(value, WAD_DECIMALS)
