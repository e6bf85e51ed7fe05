"""
Math layer for Panoptic V2

온체인 수준 정밀도의 수학 함수들:
- bit_math: 고정폭 필드, 부호 확장, Solidity 나눗셈
- tick_math: Tick ↔ Price ↔ sqrtPrice 변환
- greeks: 레그/포지션 value, delta, gamma
- hedge: 델타 헤지 loan 파라미터 (tokenid에 의존하므로 직접 import)
- account: 계정 전체 그릭스 곡선 (hedge와 같은 이유로 직접 import)
"""

from .bit_math import (
    sign_extend,
    to_unsigned,
    extract_bits,
    div_trunc,
)
from .tick_math import (
    get_sqrt_ratio_at_tick,
    tick_to_sqrt_price_x96,
    get_tick_at_sqrt_ratio,
    sqrt_price_x96_to_tick,
    tick_to_price,
    price_to_tick,
    invert_monotone,
    round_tick_to_spacing,
    get_tick_spacing_for_fee,
)
from .greeks import (
    is_call,
    is_defined_risk,
    leg_value,
    leg_delta,
    leg_gamma,
    leg_greeks,
    position_value,
    position_delta,
    position_gamma,
    position_greeks,
)
