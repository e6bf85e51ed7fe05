"""
Tick Math - Tick ↔ Price ↔ sqrtPrice 변환

Uniswap V3 / V4 풀 위에서 동작하는 Panoptic 컨트랙트와 동일한 정밀도로 구현.
정수 연산만 사용합니다 (부동소수점은 온체인 반올림을 재현할 수 없음).

References:
- Uniswap V3 Core: contracts/libraries/TickMath.sol
- 백서 Section 6.1: Ticks and Tick Spacing

핵심 공식:
    price = 1.0001^tick
    sqrtPriceX96 = sqrt(price) * 2^96
    price = sqrtPriceX96^2 / 2^192
"""

import re
from decimal import Decimal
from fractions import Fraction
from typing import Callable, Tuple, Union

from ..constants import (
    Q192,
    MIN_TICK,
    MAX_TICK,
    MIN_SQRT_RATIO,
    MAX_SQRT_RATIO,
    TICK_SPACINGS,
    MAX_PARSE_DIGITS,
    MAX_PARSE_EXPONENT,
    UINT256_MAX,
)
from ..data.types import PriceRatio
from ..errors import (
    TickRangeError,
    SqrtPriceRangeError,
    InvalidPriceError,
    PriceParseError,
)

PriceInput = Union[str, int, float, Decimal, Fraction]

_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def get_sqrt_ratio_at_tick(tick: int) -> int:
    """틱에서 sqrtPriceX96 계산

    Solidity TickMath.getSqrtRatioAtTick()과 동일한 구현.
    |tick|의 각 비트마다 미리 계산된 상수를 곱하고 128비트 시프트 (Q128.128 곱셈),
    tick > 0이면 역수를 취한 뒤 하위 32비트에 나머지가 있으면 올림합니다.

    Args:
        tick: 틱 인덱스 (-887272 ~ 887272)

    Returns:
        sqrtPriceX96 (Q64.96 형식)

    Raises:
        TickRangeError: 틱이 유효 범위를 벗어난 경우
    """
    if tick < MIN_TICK or tick > MAX_TICK:
        raise TickRangeError(f"틱이 유효 범위를 벗어났습니다: {tick} (범위: {MIN_TICK} ~ {MAX_TICK})")

    abs_tick = abs(tick)

    # 매직 넘버를 사용한 비트 연산 (Solidity 구현과 동일)
    ratio = 0xfffcb933bd6fad37aa2d162d1a594001 if abs_tick & 0x1 \
        else 0x100000000000000000000000000000000

    if abs_tick & 0x2:
        ratio = (ratio * 0xfff97272373d413259a46990580e213a) >> 128
    if abs_tick & 0x4:
        ratio = (ratio * 0xfff2e50f5f656932ef12357cf3c7fdcc) >> 128
    if abs_tick & 0x8:
        ratio = (ratio * 0xffe5caca7e10e4e61c3624eaa0941cd0) >> 128
    if abs_tick & 0x10:
        ratio = (ratio * 0xffcb9843d60f6159c9db58835c926644) >> 128
    if abs_tick & 0x20:
        ratio = (ratio * 0xff973b41fa98c081472e6896dfb254c0) >> 128
    if abs_tick & 0x40:
        ratio = (ratio * 0xff2ea16466c96a3843ec78b326b52861) >> 128
    if abs_tick & 0x80:
        ratio = (ratio * 0xfe5dee046a99a2a811c461f1969c3053) >> 128
    if abs_tick & 0x100:
        ratio = (ratio * 0xfcbe86c7900a88aedcffc83b479aa3a4) >> 128
    if abs_tick & 0x200:
        ratio = (ratio * 0xf987a7253ac413176f2b074cf7815e54) >> 128
    if abs_tick & 0x400:
        ratio = (ratio * 0xf3392b0822b70005940c7a398e4b70f3) >> 128
    if abs_tick & 0x800:
        ratio = (ratio * 0xe7159475a2c29b7443b29c7fa6e889d9) >> 128
    if abs_tick & 0x1000:
        ratio = (ratio * 0xd097f3bdfd2022b8845ad8f792aa5825) >> 128
    if abs_tick & 0x2000:
        ratio = (ratio * 0xa9f746462d870fdf8a65dc1f90e061e5) >> 128
    if abs_tick & 0x4000:
        ratio = (ratio * 0x70d869a156d2a1b890bb3df62baf32f7) >> 128
    if abs_tick & 0x8000:
        ratio = (ratio * 0x31be135f97d08fd981231505542fcfa6) >> 128
    if abs_tick & 0x10000:
        ratio = (ratio * 0x9aa508b5b7a84e1c677de54f3e99bc9) >> 128
    if abs_tick & 0x20000:
        ratio = (ratio * 0x5d6af8dedb81196699c329225ee604) >> 128
    if abs_tick & 0x40000:
        ratio = (ratio * 0x2216e584f5fa1ea926041bedfe98) >> 128
    if abs_tick & 0x80000:
        ratio = (ratio * 0x48a170391f7dc42444e8fa2) >> 128

    if tick > 0:
        ratio = UINT256_MAX // ratio

    # Q128.128 -> Q64.96, 나머지가 있으면 올림
    return (ratio >> 32) + (1 if ratio & 0xFFFFFFFF else 0)


tick_to_sqrt_price_x96 = get_sqrt_ratio_at_tick


def get_tick_at_sqrt_ratio(sqrt_price_x96: int) -> int:
    """sqrtPriceX96에서 틱 계산 (내림)

    Solidity TickMath.getTickAtSqrtRatio()과 동일한 구현.
    get_sqrt_ratio_at_tick(tick) <= sqrt_price_x96 인 최대 틱을 반환합니다.
    가장 가까운 틱이 필요하면 sqrt_price_x96_to_tick()을 사용하세요.

    Args:
        sqrt_price_x96: sqrtPriceX96 (Q64.96 형식)

    Returns:
        틱 인덱스

    Raises:
        SqrtPriceRangeError: [MIN_SQRT_RATIO, MAX_SQRT_RATIO) 범위를 벗어난 경우
    """
    if sqrt_price_x96 < MIN_SQRT_RATIO or sqrt_price_x96 >= MAX_SQRT_RATIO:
        raise SqrtPriceRangeError(
            f"sqrtPriceX96이 유효 범위를 벗어났습니다: {sqrt_price_x96}"
        )

    ratio = sqrt_price_x96 << 32

    # 최상위 비트 찾기
    msb = ratio.bit_length() - 1

    if msb >= 128:
        r = ratio >> (msb - 127)
    else:
        r = ratio << (127 - msb)

    log_2 = (msb - 128) << 64

    # 로그 계산 (소수부 14비트)
    for i in range(14):
        r = (r * r) >> 127
        f = r >> 128
        log_2 |= f << (63 - i)
        r >>= f

    log_sqrt10001 = log_2 * 255738958999603826347141

    tick_low = (log_sqrt10001 - 3402992956809132418596140100660247210) >> 128
    tick_high = (log_sqrt10001 + 291339464771989622907027621153398088495) >> 128

    if tick_low == tick_high:
        return tick_low

    if get_sqrt_ratio_at_tick(tick_high) <= sqrt_price_x96:
        return tick_high
    return tick_low


def invert_monotone(
    forward: Callable[[int], object],
    compare: Callable[[object], int],
    floor_is_closer: Callable[[object, object], bool],
    low: int = MIN_TICK,
    high: int = MAX_TICK,
) -> int:
    """단조 증가 함수 forward의 역함수를 이진 탐색으로 계산

    sqrt_price_x96_to_tick()과 price_to_tick()이 같은 탐색/동률 규칙을 쓰도록
    공통화한 루틴입니다. 정확히 일치하는 틱이 없으면 타깃을 감싸는 두 틱 중
    오차가 작은 쪽을 반환하고, 동률이면 낮은 틱을 반환합니다.

    Args:
        forward: 틱 → 값 (단조 증가)
        compare: 값 → 타깃과의 비교 (음수: 값 < 타깃, 0: 같음, 양수: 값 > 타깃)
        floor_is_closer: (낮은 틱의 값, 높은 틱의 값) → 낮은 틱이 더 가깝거나 같으면 True
        low: 탐색 하한 틱
        high: 탐색 상한 틱

    Returns:
        타깃에 가장 가까운 틱
    """
    lower_bound, upper_bound = low, high

    while low <= high:
        mid = (low + high) // 2
        cmp = compare(forward(mid))

        if cmp == 0:
            return mid
        if cmp < 0:
            low = mid + 1
        else:
            high = mid - 1

    floor_tick = high
    ceil_tick = low

    if floor_tick < lower_bound:
        return lower_bound
    if ceil_tick > upper_bound:
        return upper_bound

    if floor_is_closer(forward(floor_tick), forward(ceil_tick)):
        return floor_tick
    return ceil_tick


def sqrt_price_x96_to_tick(sqrt_price_x96: int) -> int:
    """sqrtPriceX96에서 가장 가까운 틱 계산

    Args:
        sqrt_price_x96: sqrtPriceX96 (Q64.96 형식)

    Returns:
        sqrtPriceX96 오차가 가장 작은 틱 (동률이면 낮은 틱)

    Raises:
        InvalidPriceError: sqrt_price_x96 <= 0
        SqrtPriceRangeError: [sqrtPrice(MIN_TICK), sqrtPrice(MAX_TICK)] 범위를 벗어난 경우
    """
    if sqrt_price_x96 <= 0:
        raise InvalidPriceError(f"sqrtPriceX96은 양수여야 합니다: {sqrt_price_x96}")
    if sqrt_price_x96 < MIN_SQRT_RATIO or sqrt_price_x96 > MAX_SQRT_RATIO:
        raise SqrtPriceRangeError(
            f"sqrtPriceX96이 유효 범위를 벗어났습니다: {sqrt_price_x96}"
        )

    def compare(value: int) -> int:
        return (value > sqrt_price_x96) - (value < sqrt_price_x96)

    def floor_is_closer(floor_value: int, ceil_value: int) -> bool:
        return sqrt_price_x96 - floor_value <= ceil_value - sqrt_price_x96

    return invert_monotone(get_sqrt_ratio_at_tick, compare, floor_is_closer)


def tick_to_price(tick: int) -> PriceRatio:
    """틱을 정확한 가격 비율로 변환 (소수점 조정 없음)

    price = sqrtPriceX96^2 / 2^192 ≈ 1.0001^tick

    Args:
        tick: 틱 인덱스

    Returns:
        PriceRatio(numerator, denominator) - token1/token0 raw 비율
    """
    return sqrt_price_x96_to_price_ratio(get_sqrt_ratio_at_tick(tick))


def sqrt_price_x96_to_price_ratio(sqrt_price_x96: int) -> PriceRatio:
    """sqrtPriceX96 → raw 가격 비율 (sqrtPriceX96^2 / 2^192)"""
    return PriceRatio(sqrt_price_x96 * sqrt_price_x96, Q192)


def scale_ratio_for_decimals(
    ratio: PriceRatio,
    decimals0: int,
    decimals1: int
) -> PriceRatio:
    """raw 비율에 10^(decimals0 - decimals1)를 곱해 human-readable 비율로 변환

    Args:
        ratio: raw 가격 비율 (token1 최소단위 / token0 최소단위)
        decimals0: token0 소수점 자릿수
        decimals1: token1 소수점 자릿수

    Returns:
        소수점 조정된 비율 (token1 / token0)
    """
    diff = decimals0 - decimals1
    if diff > 0:
        return PriceRatio(ratio.numerator * 10 ** diff, ratio.denominator)
    if diff < 0:
        return PriceRatio(ratio.numerator, ratio.denominator * 10 ** (-diff))
    return ratio


def parse_price(price: PriceInput) -> PriceRatio:
    """가격 입력을 정확한 분수로 해석

    문자열은 "1.5", "-2", ".5", "1e-3" 같은 십진 표기를 허용합니다.
    float은 repr 문자열을 거쳐 해석합니다.

    Raises:
        PriceParseError: 해석할 수 없는 입력
    """
    if isinstance(price, bool):
        raise PriceParseError(f"가격은 숫자여야 합니다: {price!r}")
    if isinstance(price, int):
        return PriceRatio(price, 1)
    if isinstance(price, Fraction):
        return PriceRatio(price.numerator, price.denominator)
    if isinstance(price, Decimal):
        if not price.is_finite():
            raise PriceParseError(f"가격은 유한한 숫자여야 합니다: {price}")
        _, digits, exponent = price.as_tuple()
        if len(digits) > MAX_PARSE_DIGITS or abs(exponent) > MAX_PARSE_EXPONENT:
            raise PriceParseError(f"가격의 자릿수/지수가 너무 큽니다: {price:.6e}")
        numerator, denominator = price.as_integer_ratio()
        return PriceRatio(numerator, denominator)
    if isinstance(price, float):
        price = repr(price)
    if not isinstance(price, str):
        raise PriceParseError(f"가격은 숫자여야 합니다: {price!r}")

    numerator, denominator = parse_decimal_to_fraction(price)
    return PriceRatio(numerator, denominator)


def parse_decimal_to_fraction(value: str) -> Tuple[int, int]:
    """십진 문자열 → (분자, 분모)

    가수 자릿수는 MAX_PARSE_DIGITS, 지수 절댓값은 MAX_PARSE_EXPONENT까지 허용합니다.

    Raises:
        PriceParseError: 십진수 형식이 아니거나 한도를 넘는 경우
    """
    text = value.strip()
    if not _DECIMAL_RE.match(text):
        raise PriceParseError(f"가격은 숫자여야 합니다: {value[:32]!r}")

    negative = text.startswith("-")
    unsigned = text.lstrip("+-").lower()

    base, _, exponent_str = unsigned.partition("e")
    integer_str, _, fractional_str = base.partition(".")

    if len(integer_str) + len(fractional_str) > MAX_PARSE_DIGITS:
        raise PriceParseError(f"가격 자릿수가 {MAX_PARSE_DIGITS}자리를 넘습니다")
    if len(exponent_str.lstrip("+-").lstrip("0")) > len(str(MAX_PARSE_EXPONENT)):
        raise PriceParseError(f"가격 지수가 {MAX_PARSE_EXPONENT}를 넘습니다")

    numerator = int((integer_str or "0") + fractional_str)
    denominator = 10 ** len(fractional_str)

    if exponent_str:
        exponent = int(exponent_str)
        if abs(exponent) > MAX_PARSE_EXPONENT:
            raise PriceParseError(f"가격 지수가 {MAX_PARSE_EXPONENT}를 넘습니다")
        if exponent > 0:
            numerator *= 10 ** exponent
        elif exponent < 0:
            denominator *= 10 ** (-exponent)

    return (-numerator if negative else numerator), denominator


def price_to_tick(price: PriceInput, decimals0: int, decimals1: int) -> int:
    """Human-readable 가격을 가장 가까운 틱으로 변환

    목표 비율을 10^(decimals0 - decimals1)로 나눠 raw 비율로 되돌린 뒤,
    raw 비율에 대해 sqrt_price_x96_to_tick()과 같은 이진 탐색을 수행합니다.
    비교는 모두 교차 곱셈으로 하므로 나눗셈 오차가 없습니다.

    Args:
        price: 가격 (token1/token0, 예: "3000" USDC per WETH)
        decimals0: token0 소수점 자릿수
        decimals1: token1 소수점 자릿수

    Returns:
        틱 인덱스 (범위 밖 가격은 MIN_TICK / MAX_TICK으로 고정)

    Raises:
        PriceParseError: 가격을 해석할 수 없는 경우
        InvalidPriceError: 가격이 0 이하인 경우

    Example:
        >>> price_to_tick("1", 18, 18)
        0
    """
    parsed = parse_price(price)
    if parsed.numerator <= 0:
        raise InvalidPriceError(f"가격은 양수여야 합니다: {price}")

    target_num, target_den = parsed.numerator, parsed.denominator
    diff = decimals0 - decimals1
    if diff > 0:
        target_den *= 10 ** diff
    elif diff < 0:
        target_num *= 10 ** (-diff)

    def compare(ratio: PriceRatio) -> int:
        left = ratio.numerator * target_den
        right = target_num * ratio.denominator
        return (left > right) - (left < right)

    def floor_is_closer(floor_ratio: PriceRatio, ceil_ratio: PriceRatio) -> bool:
        # |target - floor| <= |ceil - target|, 공통 분모로 교차 곱셈
        floor_diff_num = abs(target_num * floor_ratio.denominator - floor_ratio.numerator * target_den)
        ceil_diff_num = abs(target_num * ceil_ratio.denominator - ceil_ratio.numerator * target_den)
        floor_diff_den = target_den * floor_ratio.denominator
        ceil_diff_den = target_den * ceil_ratio.denominator
        return floor_diff_num * ceil_diff_den <= ceil_diff_num * floor_diff_den

    return invert_monotone(tick_to_price, compare, floor_is_closer)


def round_tick_to_spacing(tick: int, tick_spacing: int) -> int:
    """틱을 유효한 틱 간격으로 반올림

    각 풀의 tick spacing에 따라 유효한 틱만 사용 가능합니다.
    가장 가까운 유효 틱으로 반올림합니다.

    동률은 부호와 관계없이 항상 위쪽(+ 방향)으로 보냅니다.
    음수 틱도 마찬가지라서 (-12345, 10)은 -12350이 아니라 -12340입니다.
    (0에서 먼 쪽으로 보내는 Math.round 계열 구현과 음수 동률에서 결과가 다름)

    Args:
        tick: 반올림할 틱
        tick_spacing: 틱 간격 (예: 60 for 0.3% fee)

    Returns:
        반올림된 틱 (가장 가까운 유효 틱, 동률이면 위쪽)
    """
    if tick_spacing <= 0:
        raise ValueError(f"틱 간격은 양수여야 합니다: {tick_spacing}")

    lower = (tick // tick_spacing) * tick_spacing
    upper = lower + tick_spacing

    if tick - lower < upper - tick:
        return lower
    return upper


def get_tick_spacing_for_fee(fee_tier: int) -> int:
    """수수료 티어에 해당하는 틱 간격 반환

    표준 티어(100, 500, 3000, 10000)는 Uniswap 정의를 따르고,
    그 외에는 fee / 50 (최소 1)을 사용합니다.

    Args:
        fee_tier: 수수료 티어 (Uniswap 표기, 예: 500 = 0.05%)

    Returns:
        틱 간격
    """
    if fee_tier in TICK_SPACINGS:
        return TICK_SPACINGS[fee_tier]
    if fee_tier < 0:
        raise ValueError(f"수수료 티어는 음수일 수 없습니다: {fee_tier}")
    return max(fee_tier // 50, 1)
