"""
Formatters for Panoptic V2

모든 포매터는 precision / decimals를 명시적으로 받습니다 (숨은 기본값 없음).
- price: 틱 / sqrtPrice → 가격 문자열, PoolFormatters
- amount: 토큰 수량
- percentage: bps, utilization
- wad: WAD 고정소수점
- display: 주소, 해시, 시간, 큰 수, gas
- token_list: 토큰 리스트 ID, 풀 표시 이름, fee tier
"""

from .price import (
    format_ratio,
    tick_to_price_string,
    tick_to_price_decimal_scaled,
    sqrt_price_x96_to_price_decimal_scaled,
    get_prices_at_tick,
    format_tick,
    format_tick_range,
    format_price_range,
    PoolFormatters,
)
from .amount import (
    format_token_amount,
    format_token_amount_signed,
    format_token_delta,
    format_token_flow,
    parse_token_amount,
)
from .percentage import (
    format_bps,
    format_utilization,
    parse_bps,
    format_ratio_percent,
)
from .wad import (
    format_wad,
    format_wad_signed,
    format_wad_percent,
    format_rate_wad,
    parse_wad,
)
from .display import (
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
)
from .token_list import (
    get_token_list_id,
    parse_token_list_id,
    format_fee_tier,
    get_pool_display_id,
)
