"""
Tick Math 테스트

tick_math.py의 함수들을 테스트합니다.
온체인 값과 비교하여 정확도를 검증합니다.
"""

from decimal import Decimal
from fractions import Fraction

import pytest

from ..math.tick_math import (
    get_sqrt_ratio_at_tick,
    tick_to_sqrt_price_x96,
    get_tick_at_sqrt_ratio,
    sqrt_price_x96_to_tick,
    tick_to_price,
    price_to_tick,
    invert_monotone,
    round_tick_to_spacing,
    get_tick_spacing_for_fee,
    parse_price,
)
from ..constants import (
    Q96,
    Q192,
    MIN_TICK,
    MAX_TICK,
    MIN_SQRT_RATIO,
    MAX_SQRT_RATIO,
    MAX_PARSE_DIGITS,
    MAX_PARSE_EXPONENT,
)
from ..errors import (
    TickRangeError,
    SqrtPriceRangeError,
    InvalidPriceError,
    PriceParseError,
)

SAMPLE_TICKS = [MIN_TICK, -500000, -200000, -50000, -1000, -1, 0, 1, 1000, 50000, 200000, 500000, MAX_TICK]


class TestGetSqrtRatioAtTick:
    """get_sqrt_ratio_at_tick 테스트"""

    def test_min_tick(self):
        """최소 틱에서의 sqrtPrice"""
        assert get_sqrt_ratio_at_tick(MIN_TICK) == MIN_SQRT_RATIO

    def test_max_tick(self):
        """최대 틱에서의 sqrtPrice"""
        assert get_sqrt_ratio_at_tick(MAX_TICK) == MAX_SQRT_RATIO

    def test_tick_0(self):
        """틱 0에서의 sqrtPrice는 정확히 2^96"""
        assert get_sqrt_ratio_at_tick(0) == Q96

    def test_alias(self):
        assert tick_to_sqrt_price_x96(1234) == get_sqrt_ratio_at_tick(1234)

    def test_positive_tick(self):
        """양수 틱 테스트"""
        assert get_sqrt_ratio_at_tick(100) > Q96

    def test_negative_tick(self):
        """음수 틱 테스트"""
        assert get_sqrt_ratio_at_tick(-100) < Q96

    def test_strictly_increasing(self):
        """틱이 커지면 sqrtPrice도 엄격히 증가"""
        values = [get_sqrt_ratio_at_tick(t) for t in SAMPLE_TICKS]
        assert all(a < b for a, b in zip(values, values[1:]))

        for tick in (-887000, -1, 0, 12345, 887000):
            assert get_sqrt_ratio_at_tick(tick) < get_sqrt_ratio_at_tick(tick + 1)

    def test_invalid_tick_too_low(self):
        """유효 범위를 벗어난 틱 (너무 낮음)"""
        with pytest.raises(TickRangeError):
            get_sqrt_ratio_at_tick(MIN_TICK - 1)

    def test_invalid_tick_too_high(self):
        """유효 범위를 벗어난 틱 (너무 높음)"""
        with pytest.raises(TickRangeError):
            get_sqrt_ratio_at_tick(MAX_TICK + 1)

    def test_range_error_is_value_error(self):
        with pytest.raises(ValueError):
            get_sqrt_ratio_at_tick(10 ** 7)


class TestGetTickAtSqrtRatio:
    """get_tick_at_sqrt_ratio 테스트 (내림)"""

    def test_min_sqrt_ratio(self):
        """최소 sqrtRatio에서의 틱"""
        assert get_tick_at_sqrt_ratio(MIN_SQRT_RATIO) == MIN_TICK

    def test_sqrt_ratio_at_tick_0(self):
        """sqrtPrice 2^96에서의 틱"""
        assert get_tick_at_sqrt_ratio(Q96) == 0

    def test_roundtrip(self):
        """틱 -> sqrtPrice -> 틱 왕복 테스트"""
        for tick in [-50000, -1000, 0, 1000, 50000]:
            sqrt_price = get_sqrt_ratio_at_tick(tick)
            assert get_tick_at_sqrt_ratio(sqrt_price) == tick

    def test_floor_between_ticks(self):
        """두 틱 사이 값은 낮은 틱으로 내림"""
        just_below_101 = get_sqrt_ratio_at_tick(101) - 1
        assert get_tick_at_sqrt_ratio(just_below_101) == 100

    def test_invalid_sqrt_ratio_too_low(self):
        """유효 범위를 벗어난 sqrtRatio (너무 낮음)"""
        with pytest.raises(SqrtPriceRangeError):
            get_tick_at_sqrt_ratio(MIN_SQRT_RATIO - 1)

    def test_max_sqrt_ratio_excluded(self):
        with pytest.raises(SqrtPriceRangeError):
            get_tick_at_sqrt_ratio(MAX_SQRT_RATIO)


class TestSqrtPriceX96ToTick:
    """sqrt_price_x96_to_tick 테스트 (가장 가까운 틱)"""

    def test_roundtrip_exact(self):
        """틱 -> sqrtPrice -> 틱 왕복 (경계 포함)"""
        for tick in SAMPLE_TICKS:
            assert sqrt_price_x96_to_tick(get_sqrt_ratio_at_tick(tick)) == tick

    def test_q96_is_tick_0(self):
        assert sqrt_price_x96_to_tick(Q96) == 0

    def test_nearest_tick(self):
        """사이 값은 가까운 틱으로"""
        s100 = get_sqrt_ratio_at_tick(100)
        s101 = get_sqrt_ratio_at_tick(101)
        assert sqrt_price_x96_to_tick(s100 + 1) == 100
        assert sqrt_price_x96_to_tick(s101 - 1) == 101

    def test_midpoint_prefers_lower(self):
        """중간값(내림)은 낮은 틱으로"""
        s100 = get_sqrt_ratio_at_tick(100)
        s101 = get_sqrt_ratio_at_tick(101)
        assert sqrt_price_x96_to_tick((s100 + s101) // 2) == 100

    def test_bounds(self):
        assert sqrt_price_x96_to_tick(MIN_SQRT_RATIO) == MIN_TICK
        assert sqrt_price_x96_to_tick(MAX_SQRT_RATIO) == MAX_TICK

    def test_non_positive(self):
        with pytest.raises(InvalidPriceError):
            sqrt_price_x96_to_tick(0)
        with pytest.raises(InvalidPriceError):
            sqrt_price_x96_to_tick(-5)

    def test_out_of_range(self):
        with pytest.raises(SqrtPriceRangeError):
            sqrt_price_x96_to_tick(MIN_SQRT_RATIO - 1)
        with pytest.raises(SqrtPriceRangeError):
            sqrt_price_x96_to_tick(MAX_SQRT_RATIO + 1)


class TestTickToPrice:
    """tick_to_price 테스트 (정확한 비율)"""

    def test_tick_0(self):
        """틱 0 (가격 = 1)"""
        ratio = tick_to_price(0)
        assert ratio.numerator == ratio.denominator == Q192

    def test_positive_tick(self):
        """양수 틱은 1보다 큼"""
        ratio = tick_to_price(1000)
        expected = 1.0001 ** 1000
        assert abs(ratio.numerator / ratio.denominator - expected) / expected < 1e-9

    def test_negative_tick(self):
        """음수 틱은 1보다 작음"""
        ratio = tick_to_price(-1000)
        expected = 1.0001 ** (-1000)
        assert abs(ratio.numerator / ratio.denominator - expected) / expected < 1e-9


class TestPriceToTick:
    """price_to_tick 테스트"""

    def test_price_1_same_decimals(self):
        """가격 1, 동일 소수점"""
        assert price_to_tick("1", 18, 18) == 0
        assert price_to_tick(1, 18, 18) == 0
        assert price_to_tick(1.0, 18, 18) == 0
        assert price_to_tick(Decimal("1.000"), 18, 18) == 0

    def test_one_tick(self):
        assert price_to_tick("1.0001", 18, 18) == 1
        assert price_to_tick("0.9999", 18, 18) == -1

    def test_exact_ratio_roundtrip(self):
        """tick_to_price의 정확한 비율은 같은 틱으로 돌아옴"""
        for tick in [-200000, -1000, 0, 1000, 200000]:
            ratio = tick_to_price(tick)
            assert price_to_tick(Fraction(ratio.numerator, ratio.denominator), 18, 18) == tick

    def test_decimal_adjusted_roundtrip(self):
        """decimals가 다른 풀: 가격에 10^(d0-d1)이 곱해짐"""
        ratio = tick_to_price(200000)
        human_price = Fraction(ratio.numerator * 10 ** 12, ratio.denominator)
        assert price_to_tick(human_price, 18, 6) == 200000

        human_price = Fraction(ratio.numerator, ratio.denominator * 10 ** 12)
        assert price_to_tick(human_price, 6, 18) == 200000

    def test_exponent_notation(self):
        assert price_to_tick("1e0", 18, 18) == 0
        assert price_to_tick("5e-1", 18, 18) == price_to_tick("0.5", 18, 18)
        assert price_to_tick("2E3", 18, 18) == price_to_tick("2000", 18, 18)

    def test_clamped_to_bounds(self):
        """범위 밖 가격은 MIN_TICK / MAX_TICK"""
        assert price_to_tick("1e-60", 18, 18) == MIN_TICK
        assert price_to_tick("1e60", 18, 18) == MAX_TICK

    def test_invalid_price_zero(self):
        """가격 0은 유효하지 않음"""
        with pytest.raises(InvalidPriceError):
            price_to_tick("0", 18, 18)

    def test_invalid_price_negative(self):
        """음수 가격은 유효하지 않음"""
        with pytest.raises(InvalidPriceError):
            price_to_tick("-1.0", 18, 18)

    def test_unparseable(self):
        for bad in ["", "abc", "1.2.3", "1e", "--1", "0x10"]:
            with pytest.raises(PriceParseError):
                price_to_tick(bad, 18, 18)


class TestParsePrice:

    def test_decimal_string(self):
        assert parse_price("1.25") == (125, 100)
        assert parse_price(".5") == (5, 10)
        assert parse_price("-2") == (-2, 1)

    def test_exponent(self):
        assert parse_price("1.5e2") == (150, 1)
        assert parse_price("15e-1") == (15, 10)

    def test_bool_rejected(self):
        with pytest.raises(PriceParseError):
            parse_price(True)

    def test_too_many_digits_rejected(self):
        """자릿수 한도를 넘으면 int 변환 전에 PriceParseError"""
        with pytest.raises(PriceParseError):
            parse_price("1" * 5000)
        with pytest.raises(PriceParseError):
            parse_price("0." + "1" * 5000)
        assert parse_price("1" * MAX_PARSE_DIGITS).denominator == 1

    def test_huge_exponent_rejected(self):
        """10 ** exponent를 만들기 전에 거부"""
        for text in ("1e999999999", "1e-999999999", "1e" + "9" * 5000):
            with pytest.raises(PriceParseError):
                parse_price(text)
        assert parse_price(f"1e{MAX_PARSE_EXPONENT}") == (10 ** MAX_PARSE_EXPONENT, 1)

    def test_huge_decimal_rejected(self):
        with pytest.raises(PriceParseError):
            parse_price(Decimal("1e999999999"))
        with pytest.raises(PriceParseError):
            parse_price(Decimal("1e-999999999"))

    def test_price_to_tick_rejects_oversized_input(self):
        with pytest.raises(PriceParseError):
            price_to_tick("1" * 5000, 18, 18)
        with pytest.raises(PriceParseError):
            price_to_tick("1e999999999", 18, 18)


class TestInvertMonotone:
    """invert_monotone 테스트"""

    def _invert(self, target, low=0, high=100):
        return invert_monotone(
            lambda t: 3 * t,
            lambda v: (v > target) - (v < target),
            lambda lo, hi: target - lo <= hi - target,
            low,
            high,
        )

    def test_exact(self):
        assert self._invert(30) == 10

    def test_nearest(self):
        assert self._invert(10) == 3  # 9 vs 12
        assert self._invert(11) == 4  # 9 vs 12

    def test_clamped(self):
        assert self._invert(-10) == 0
        assert self._invert(1000) == 100


class TestRoundTickToSpacing:
    """round_tick_to_spacing 테스트

    가장 가까운 유효 틱으로 반올림합니다.
    """

    def test_already_aligned(self):
        """이미 정렬된 틱"""
        assert round_tick_to_spacing(60, 60) == 60
        assert round_tick_to_spacing(120, 60) == 120
        assert round_tick_to_spacing(-60, 60) == -60
        assert round_tick_to_spacing(0, 60) == 0

    def test_round_nearest_positive(self):
        """양수 틱 - 가장 가까운 틱으로"""
        assert round_tick_to_spacing(65, 60) == 60
        assert round_tick_to_spacing(89, 60) == 60
        assert round_tick_to_spacing(91, 60) == 120
        # 정확히 중간인 경우 올림
        assert round_tick_to_spacing(90, 60) == 120

    def test_round_nearest_negative(self):
        """음수 틱 - 가장 가까운 틱으로"""
        assert round_tick_to_spacing(-65, 60) == -60
        assert round_tick_to_spacing(-1, 60) == 0
        assert round_tick_to_spacing(-31, 60) == -60
        assert round_tick_to_spacing(-29, 60) == 0

    def test_negative_tie_rounds_up(self):
        """음수 동률도 + 방향"""
        assert round_tick_to_spacing(-12345, 10) == -12340
        assert round_tick_to_spacing(-30, 60) == 0
        assert round_tick_to_spacing(-90, 60) == -60

    def test_invalid_spacing(self):
        with pytest.raises(ValueError):
            round_tick_to_spacing(10, 0)


class TestGetTickSpacingForFee:

    def test_standard_tiers(self):
        assert get_tick_spacing_for_fee(100) == 1
        assert get_tick_spacing_for_fee(500) == 10
        assert get_tick_spacing_for_fee(3000) == 60
        assert get_tick_spacing_for_fee(10000) == 200

    def test_custom_tier(self):
        """표준 티어가 아니면 fee / 50 (최소 1)"""
        assert get_tick_spacing_for_fee(2500) == 50
        assert get_tick_spacing_for_fee(10) == 1
