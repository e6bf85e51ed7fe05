"""
Price Formatter - 틱/sqrtPrice → 사람이 읽는 가격 문자열

모든 변환은 정확한 분수에서 시작해 마지막에 한 번만 반올림합니다 (half-up).
소수점 자릿수(decimals)는 항상 호출자가 넘기며 숨은 기본값이 없습니다.
"""

from ..math.tick_math import (
    price_to_tick,
    scale_ratio_for_decimals,
    sqrt_price_x96_to_price_ratio,
    tick_to_price,
)
from ..data.types import PricePair, PriceRatio
from .amount import format_token_amount, parse_token_amount

RAW_PRICE_PRECISION = 40


def format_ratio(numerator: int, denominator: int, precision: int) -> str:
    """분수를 소수점 `precision`자리 문자열로 (half-up 반올림)

    scaled = (|n| * 10^precision + d // 2) // d

    Example:
        >>> format_ratio(1, 3, 4)
        '0.3333'
        >>> format_ratio(-2, 3, 2)
        '-0.67'
    """
    if precision < 0:
        raise ValueError(f"precision은 음수일 수 없습니다: {precision}")
    if denominator == 0:
        raise ValueError("분모가 0입니다")

    negative = (numerator < 0) != (denominator < 0)
    abs_numerator = abs(numerator)
    abs_denominator = abs(denominator)

    scale = 10 ** precision
    scaled = (abs_numerator * scale + abs_denominator // 2) // abs_denominator
    integer_part, fractional_part = divmod(scaled, scale)

    sign = "-" if negative else ""
    if precision == 0:
        return f"{sign}{integer_part}"
    return f"{sign}{integer_part}.{str(fractional_part).zfill(precision)}"


def trim_trailing_zeros(value: str) -> str:
    """'1.2300' -> '1.23', '1.000' -> '1'"""
    if "." not in value:
        return value
    return value.rstrip("0").rstrip(".")


def tick_to_price_string(tick: int) -> str:
    """raw 가격 (1.0001^tick, 소수점 조정 없음) 문자열

    Example:
        >>> tick_to_price_string(0)
        '1'
    """
    ratio = tick_to_price(tick)
    return trim_trailing_zeros(format_ratio(ratio.numerator, ratio.denominator, RAW_PRICE_PRECISION))


def _scaled_tick_ratio(tick: int, decimals0: int, decimals1: int) -> PriceRatio:
    return scale_ratio_for_decimals(tick_to_price(tick), decimals0, decimals1)


def tick_to_price_decimal_scaled(
    tick: int,
    decimals0: int,
    decimals1: int,
    precision: int
) -> str:
    """틱 → 소수점 조정된 가격 (token1 per token0)

    price = 1.0001^tick * 10^(decimals0 - decimals1)

    Example:
        >>> tick_to_price_decimal_scaled(0, 18, 18, 2)
        '1.00'
    """
    ratio = _scaled_tick_ratio(tick, decimals0, decimals1)
    return format_ratio(ratio.numerator, ratio.denominator, precision)


def sqrt_price_x96_to_price_decimal_scaled(
    sqrt_price_x96: int,
    decimals0: int,
    decimals1: int,
    precision: int
) -> str:
    """sqrtPriceX96 → 소수점 조정된 가격 (token1 per token0)"""
    ratio = scale_ratio_for_decimals(
        sqrt_price_x96_to_price_ratio(sqrt_price_x96), decimals0, decimals1
    )
    return format_ratio(ratio.numerator, ratio.denominator, precision)


def get_prices_at_tick(
    tick: int,
    decimals0: int,
    decimals1: int,
    precision: int
) -> PricePair:
    """한 번의 틱 계산으로 양방향 가격

    Returns:
        PricePair(token1_per_token0, token0_per_token1)
    """
    ratio = _scaled_tick_ratio(tick, decimals0, decimals1)
    return PricePair(
        token1_per_token0=format_ratio(ratio.numerator, ratio.denominator, precision),
        token0_per_token1=format_ratio(ratio.denominator, ratio.numerator, precision),
    )


def format_tick(tick: int) -> str:
    return str(tick)


def format_tick_range(tick_lower: int, tick_upper: int) -> str:
    """예: '-50000 - 200000'"""
    return f"{tick_lower} - {tick_upper}"


def format_price_range(
    tick_lower: int,
    tick_upper: int,
    decimals0: int,
    decimals1: int,
    precision: int
) -> str:
    """예: format_price_range(0, 0, 18, 18, 2) -> '1.00 - 1.00'"""
    lower = tick_to_price_decimal_scaled(tick_lower, decimals0, decimals1, precision)
    upper = tick_to_price_decimal_scaled(tick_upper, decimals0, decimals1, precision)
    return f"{lower} - {upper}"


class PoolFormatters:
    """풀 하나의 토큰 decimals를 묶어 둔 포매터

    Example:
        >>> fmt = PoolFormatters(decimals0=18, decimals1=6)
        >>> fmt.tick_to_price_scaled(pool.tick, 2)
        '2000.12'
    """

    def __init__(self, decimals0: int, decimals1: int):
        self.decimals0 = decimals0
        self.decimals1 = decimals1

    def __repr__(self) -> str:
        return f"PoolFormatters(decimals0={self.decimals0}, decimals1={self.decimals1})"

    def tick_to_price(self, tick: int) -> str:
        return tick_to_price_string(tick)

    def tick_to_price_scaled(self, tick: int, precision: int) -> str:
        """token1 per token0"""
        return tick_to_price_decimal_scaled(tick, self.decimals0, self.decimals1, precision)

    def tick_to_inverse_price_scaled(self, tick: int, precision: int) -> str:
        """token0 per token1"""
        return get_prices_at_tick(tick, self.decimals0, self.decimals1, precision).token0_per_token1

    def sqrt_price_to_price_scaled(self, sqrt_price_x96: int, precision: int) -> str:
        return sqrt_price_x96_to_price_decimal_scaled(
            sqrt_price_x96, self.decimals0, self.decimals1, precision
        )

    def price_to_tick(self, price) -> int:
        return price_to_tick(price, self.decimals0, self.decimals1)

    def format_price_range(self, tick_lower: int, tick_upper: int, precision: int) -> str:
        return format_price_range(tick_lower, tick_upper, self.decimals0, self.decimals1, precision)

    def format_amount0(self, amount: int, precision: int) -> str:
        return format_token_amount(amount, self.decimals0, precision)

    def format_amount1(self, amount: int, precision: int) -> str:
        return format_token_amount(amount, self.decimals1, precision)

    def parse_amount0(self, amount: str) -> int:
        return parse_token_amount(amount, self.decimals0)

    def parse_amount1(self, amount: str) -> int:
        return parse_token_amount(amount, self.decimals1)
