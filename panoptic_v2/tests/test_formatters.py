"""
Formatter 테스트

formatters 패키지의 문자열 변환을 테스트합니다.
"""

from datetime import timezone

import pytest

from ..constants import MAX_PARSE_DIGITS, Q96
from ..data.types import PricePair, TokenFlow, TokenListId
from ..errors import AmountParseError, ParseError
from ..formatters import (
    format_ratio,
    tick_to_price_string,
    tick_to_price_decimal_scaled,
    sqrt_price_x96_to_price_decimal_scaled,
    get_prices_at_tick,
    format_tick,
    format_tick_range,
    format_price_range,
    PoolFormatters,
    format_token_amount,
    format_token_amount_signed,
    format_token_delta,
    format_token_flow,
    parse_token_amount,
    format_bps,
    format_utilization,
    parse_bps,
    format_ratio_percent,
    format_wad,
    format_wad_signed,
    format_wad_percent,
    format_rate_wad,
    parse_wad,
    truncate_address,
    format_tx_hash,
    format_timestamp,
    format_datetime,
    format_duration,
    format_duration_seconds,
    format_timestamp_locale,
    format_block_number,
    format_gas,
    format_token_id_hex,
    format_pool_id_hex,
    format_token_id_short,
    format_compact,
    format_wei,
    format_gwei,
    get_token_list_id,
    parse_token_list_id,
    format_fee_tier,
    get_pool_display_id,
)

WETH_USDC_POOL = "0x88e6A0c2dDD26FEEb64F039a2c41296FcB3f5640"


class TestFormatRatio:
    """format_ratio 테스트 (half-up 반올림)"""

    def test_basic(self):
        assert format_ratio(1, 3, 4) == "0.3333"
        assert format_ratio(2, 3, 2) == "0.67"
        assert format_ratio(10, 1, 0) == "10"

    def test_half_up(self):
        assert format_ratio(5, 1000, 2) == "0.01"
        assert format_ratio(1, 2, 0) == "1"

    def test_negative(self):
        assert format_ratio(-2, 3, 2) == "-0.67"
        assert format_ratio(2, -3, 2) == "-0.67"

    def test_invalid(self):
        with pytest.raises(ValueError):
            format_ratio(1, 0, 2)
        with pytest.raises(ValueError):
            format_ratio(1, 3, -1)


class TestPriceFormatters:
    """틱 → 가격 문자열 테스트"""

    def test_raw_price(self):
        assert tick_to_price_string(0) == "1"
        assert abs(float(tick_to_price_string(1)) - 1.0001) < 1e-12

    def test_scaled_same_decimals(self):
        assert tick_to_price_decimal_scaled(0, 18, 18, 2) == "1.00"

    def test_scaled_different_decimals(self):
        """price = 1.0001^tick * 10^(decimals0 - decimals1)"""
        assert tick_to_price_decimal_scaled(0, 18, 6, 2) == "1000000000000.00"
        assert tick_to_price_decimal_scaled(0, 6, 18, 4) == "0.0000"

    def test_sqrt_price(self):
        assert sqrt_price_x96_to_price_decimal_scaled(Q96, 18, 18, 3) == "1.000"
        assert sqrt_price_x96_to_price_decimal_scaled(2 * Q96, 18, 18, 1) == "4.0"

    def test_prices_at_tick(self):
        assert get_prices_at_tick(0, 18, 18, 2) == PricePair("1.00", "1.00")

        pair = get_prices_at_tick(6932, 18, 18, 2)
        assert pair.token1_per_token0 == "2.00"
        assert pair.token0_per_token1 == "0.50"

    def test_ranges(self):
        assert format_tick(-100) == "-100"
        assert format_tick_range(-10, 20) == "-10 - 20"
        assert format_price_range(0, 0, 18, 18, 2) == "1.00 - 1.00"


class TestPoolFormatters:
    """PoolFormatters 테스트"""

    def setup_method(self):
        self.fmt = PoolFormatters(decimals0=18, decimals1=6)

    def test_amounts(self):
        assert self.fmt.format_amount0(15 * 10 ** 17, 2) == "1.50"
        assert self.fmt.format_amount1(1_500_000, 2) == "1.50"
        assert self.fmt.parse_amount0("1.5") == 15 * 10 ** 17
        assert self.fmt.parse_amount1("1.5") == 1_500_000

    def test_price_roundtrip(self):
        assert self.fmt.price_to_tick("1000000000000") == 0
        assert self.fmt.tick_to_price_scaled(0, 0) == "1000000000000"

    def test_inverse_price(self):
        fmt = PoolFormatters(decimals0=18, decimals1=18)
        assert fmt.tick_to_inverse_price_scaled(6932, 2) == "0.50"
        assert fmt.tick_to_price(0) == "1"
        assert fmt.sqrt_price_to_price_scaled(Q96, 2) == "1.00"
        assert fmt.format_price_range(0, 6932, 1) == "1.0 - 2.0"

    def test_repr(self):
        assert repr(self.fmt) == "PoolFormatters(decimals0=18, decimals1=6)"


class TestTokenAmount:
    """토큰 수량 포맷/파싱 테스트 (버림)"""

    def test_format(self):
        assert format_token_amount(1_500_000, 6, 2) == "1.50"
        assert format_token_amount(-1_234_567, 6, 3) == "-1.234"
        assert format_token_amount(1_999_999, 6, 0) == "1"
        assert format_token_amount(0, 18, 2) == "0.00"

    def test_precision_longer_than_decimals(self):
        assert format_token_amount(123, 2, 4) == "1.2300"
        assert format_token_amount(1, 0, 2) == "1.00"

    def test_signed(self):
        assert format_token_amount_signed(1_500_000, 6, 2) == "+1.50"
        assert format_token_amount_signed(-1_500_000, 6, 2) == "-1.50"
        assert format_token_amount_signed(0, 6, 2) == "0.00"
        assert format_token_delta(1, 0, 0) == "+1"

    def test_parse(self):
        assert parse_token_amount("1.5", 6) == 1_500_000
        assert parse_token_amount(".5", 6) == 500_000
        assert parse_token_amount("-0.000001", 6) == -1
        assert parse_token_amount(" 42 ", 0) == 42

    @pytest.mark.parametrize("decimals", [6, 18])
    def test_full_precision_roundtrip(self, decimals):
        """precision == decimals이면 format -> parse가 원래 값"""
        for amount in (0, 1, -1, 123456789, 5 * 10 ** decimals + 7, -(10 ** decimals)):
            formatted = format_token_amount(amount, decimals, decimals)
            assert parse_token_amount(formatted, decimals) == amount

    def test_parse_truncates_extra_digits(self):
        assert parse_token_amount("1.1234567", 6) == 1_123_456

    def test_parse_invalid(self):
        for bad in ["", "abc", "1e5", "1.2.3", "1,000"]:
            with pytest.raises(AmountParseError):
                parse_token_amount(bad, 6)

    def test_parse_too_many_digits(self):
        """자릿수 한도를 넘는 입력은 int 변환 전에 거부"""
        with pytest.raises(AmountParseError):
            parse_token_amount("1" * 5000, 6)
        with pytest.raises(AmountParseError):
            parse_token_amount("0." + "1" * 5000, 6)
        assert parse_token_amount("1" * MAX_PARSE_DIGITS, 0) == int("1" * MAX_PARSE_DIGITS)

    def test_token_flow(self):
        flow = TokenFlow(
            delta0=1_500_000,
            delta1=-2 * 10 ** 18,
            balance_before0=10_000_000,
            balance_before1=5 * 10 ** 18,
            balance_after0=11_500_000,
            balance_after1=3 * 10 ** 18,
        )
        formatted = format_token_flow(flow, 6, 18, 2, 3)
        assert formatted.delta0 == "+1.50"
        assert formatted.delta1 == "-2.000"
        assert formatted.balance_before0 == "10.00"
        assert formatted.balance_before1 == "5.000"
        assert formatted.balance_after0 == "11.50"
        assert formatted.balance_after1 == "3.000"


class TestPercentage:
    """bps / 퍼센트 테스트"""

    def test_format_bps(self):
        assert format_bps(1234, 2) == "12.34%"
        assert format_bps(5000, 0) == "50%"
        assert format_bps(-25, 2) == "-0.25%"
        assert format_bps(1, 1) == "0.0%"

    def test_utilization(self):
        assert format_utilization(10000, 1) == "100.0%"

    def test_parse_bps(self):
        assert parse_bps("12.34%") == 1234
        assert parse_bps("50") == 5000
        assert parse_bps("0.125%") == 12
        assert parse_bps("-1%") == -100

    def test_parse_bps_invalid(self):
        with pytest.raises(ParseError):
            parse_bps("abc%")
        with pytest.raises(ParseError):
            parse_bps("1" * 5000 + "%")

    def test_ratio_percent(self):
        assert format_ratio_percent(1, 3, 2) == "33.33%"
        assert format_ratio_percent(1, 0, 2) == "0"


class TestWad:
    """WAD 포맷 테스트"""

    def test_format_wad(self):
        assert format_wad(10 ** 18, 2) == "1.00"
        assert format_wad_signed(-5 * 10 ** 17, 1) == "-0.5"
        assert format_wad_signed(5 * 10 ** 17, 1) == "+0.5"

    def test_wad_percent(self):
        assert format_wad_percent(5 * 10 ** 16, 2) == "5.00%"
        assert format_rate_wad(10 ** 18, 0) == "100%"

    def test_parse_wad(self):
        assert parse_wad("1.5") == 15 * 10 ** 17


class TestDisplay:
    """표시용 포맷 테스트"""

    def test_addresses(self):
        assert truncate_address(WETH_USDC_POOL) == "0x88e6...5640"
        assert truncate_address("0x1234") == "0x1234"

        tx_hash = "0x" + "ab" * 32
        assert format_tx_hash(tx_hash) == "0xababab...ababab"

    def test_time(self):
        assert format_timestamp(1700000000) == "2023-11-14"
        assert format_datetime(1700000000) == "2023-11-14T22:13:20.000Z"

    def test_locale_timestamp(self):
        assert format_timestamp_locale(1700000000, "en-US", timezone.utc) == "11/14/2023"
        assert format_timestamp_locale(1700000000, "de-DE", timezone.utc) == "14.11.2023"
        assert format_timestamp_locale(1700000000, "en-GB", timezone.utc) == "14/11/2023"
        assert format_timestamp_locale(1700000000, "xx-XX", timezone.utc) == "2023-11-14"
        # 2023-01-05: en-US / de-DE는 0을 채우지 않음
        assert format_timestamp_locale(1672876800, "en-US", timezone.utc) == "1/5/2023"
        assert format_timestamp_locale(1672876800, "de-DE", timezone.utc) == "5.1.2023"

    def test_duration(self):
        assert format_duration(500) == "500ms"
        assert format_duration(1500) == "1.5s"
        assert format_duration(90_000) == "1m 30s"
        assert format_duration(120_000) == "2m"
        assert format_duration(3_660_000) == "1h 1m"
        assert format_duration(3_600_000) == "1h"
        assert format_duration(-500) == "-500ms"
        assert format_duration_seconds(90) == "1m 30s"

    def test_numbers(self):
        assert format_block_number(18000000) == "18,000,000"
        assert format_gas(21000) == "21,000"
        assert format_gas(0) == "0"
        assert format_compact(999) == "999"
        assert format_compact(1500) == "1.5K"
        assert format_compact(1_500_000) == "1.5M"
        assert format_compact(2_000_000_000) == "2.0B"
        assert format_compact(-1500) == "-1.5K"

    def test_ids(self):
        assert format_token_id_hex(255) == "0xff"
        assert format_pool_id_hex(0x000a04ddc2a0e688) == "0x000a04ddc2a0e688"
        assert format_pool_id_hex(1) == "0x0000000000000001"
        assert format_token_id_short(2 ** 200) == "0x1000...0000"

    def test_wei(self):
        assert format_wei(5) == "5 wei"
        assert format_gwei(1_500_000_000, 2) == "1.50 gwei"


class TestTokenList:
    """토큰 리스트 / 풀 표시 이름 테스트"""

    WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"

    def test_token_list_id_roundtrip(self):
        token_list_id = get_token_list_id(1, self.WETH)
        assert token_list_id == "1:0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"
        assert parse_token_list_id(token_list_id) == TokenListId(
            chain_id=1, address="0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"
        )

    @pytest.mark.parametrize("bad", ["", "1", "1:", ":0xabc", "mainnet:0xabc"])
    def test_parse_invalid(self, bad):
        with pytest.raises(ParseError):
            parse_token_list_id(bad)

    def test_fee_tier(self):
        assert format_fee_tier(500) == "0.05%"
        assert format_fee_tier(3000) == "0.30%"
        assert format_fee_tier(10000) == "1.0%"

    def test_pool_display_id(self):
        assert get_pool_display_id("WETH", "USDC", 500) == "WETH/USDC 0.05%"
        assert get_pool_display_id("WBTC", "ETH", 3000) == "WBTC/ETH 0.30%"
        assert get_pool_display_id("ETH", "USDC", 10000) == "ETH/USDC 1.0%"
