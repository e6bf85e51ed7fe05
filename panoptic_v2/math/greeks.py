"""
Greeks - 레그/포지션 value, delta, gamma

Panoptic 옵션 레그는 집중 유동성 포지션이므로 payoff가 구간별로 정의됩니다.
(quote tick 공간, asset이 token0이면 틱 부호를 뒤집음)

    P = 현재 가격, K = strike 가격, r = 1.0001^halfWidth

    value:
        P < K/r  : v = m * P
        P > K*r  : v = m * K
        범위 내  : v = m * (2*sqrt(P*K*r) - P - K) / (r - 1)

    delta (dv/dP):
        범위 아래: m, 범위 위: 0
        범위 내  : m * (sqrt(K*r) - sqrt(P)) / (sqrt(P) * (r - 1))

    gamma:
        범위 내에서만 m' * sqrt(K*P*r) / (2 * (r - 1))

- m = positionSize * optionRatio (숏 +, 롱 -), gamma는 반대 부호 (롱 = 양의 감마)
- 모든 가격은 sqrtPriceX96으로 계산하고 X96/X192 정밀도를 마지막 나눗셈까지 유지
- 나눗셈은 Solidity와 같이 0 방향 버림 (div_trunc)
- sqrt(P*K*r)은 sqrt(P)*sqrt(K)*sqrt(r)로 계산하므로 세 틱의 합이 MAX_TICK을 넘어도 됨
- 각 greek은 자신이 평가하는 틱만 [MIN_TICK, MAX_TICK]를 확인하고, 벗어나면 0
- halfWidth가 0인 레그 (width == 0, loan/credit)는 0을 반환

단위: position_size의 고정소수점 스케일을 그대로 따릅니다.
기본값 position_size = WAD이면 계약 1개당 WAD 스케일 값입니다.
"""

import logging
from typing import List, Optional, Sequence

from ..constants import Q96, Q192, WAD, MIN_TICK, MAX_TICK
from ..data.types import PositionGreeks, TokenIdLeg
from .bit_math import div_trunc
from .tick_math import get_sqrt_ratio_at_tick

logger = logging.getLogger(__name__)


def is_call(token_type: int, is_asset_token0: bool) -> bool:
    """asset 토큰을 움직이는 레그면 콜

    - asset = token0: tokenType 0이면 콜
    - asset = token1: tokenType 1이면 콜
    """
    return token_type == 0 if is_asset_token0 else token_type == 1


def is_defined_risk(legs: Sequence[TokenIdLeg]) -> bool:
    """같은 tokenType 레그가 2개 이상이고 롱/숏이 섞여 있으면 defined risk (스프레드)"""
    if len(legs) < 2:
        return False

    for token_type in (0, 1):
        group = [leg for leg in legs if leg.token_type == token_type]
        if (
            len(group) >= 2
            and any(leg.is_long for leg in group)
            and any(not leg.is_long for leg in group)
        ):
            return True
    return False


def _quote_tick(tick: int, is_asset_token0: bool) -> int:
    return -tick if is_asset_token0 else tick


def _is_asset_token0(leg: TokenIdLeg, asset_index: Optional[int]) -> bool:
    if asset_index is not None:
        return asset_index == 0
    return leg.asset == 0


def _half_width(leg: TokenIdLeg, pool_tick_spacing: int) -> int:
    return (leg.width * pool_tick_spacing) // 2


def _ticks_in_bounds(*ticks: int) -> bool:
    return all(MIN_TICK <= t <= MAX_TICK for t in ticks)


def _price_x192(tick: int) -> int:
    sqrt_price = get_sqrt_ratio_at_tick(tick)
    return sqrt_price * sqrt_price


class _LegGeometry:
    """레그 하나의 quote tick 공간 좌표"""

    def __init__(
        self,
        leg: TokenIdLeg,
        current_tick: int,
        mint_tick: Optional[int],
        pool_tick_spacing: int,
        asset_index: Optional[int],
    ):
        self.is_asset_token0 = _is_asset_token0(leg, asset_index)
        self.current = _quote_tick(current_tick, self.is_asset_token0)
        self.mint = None if mint_tick is None else _quote_tick(mint_tick, self.is_asset_token0)
        self.strike = _quote_tick(leg.strike, self.is_asset_token0)
        self.half_width = _half_width(leg, pool_tick_spacing)
        self.lower = self.strike - self.half_width
        self.upper = self.strike + self.half_width
        self.is_put = not is_call(leg.token_type, self.is_asset_token0)

    @property
    def degenerate(self) -> bool:
        return self.half_width <= 0

    def below(self, tick: int) -> bool:
        return tick < self.lower

    def above(self, tick: int) -> bool:
        return tick > self.upper

    def in_range(self, tick: int) -> bool:
        return not (self.below(tick) or self.above(tick))

    def itm_ticks(self) -> List[int]:
        """_itm_adjustment()가 평가하는 틱"""
        if self.mint is None:
            return []
        if self.is_put:
            if self.below(self.mint):
                return [self.strike, self.mint]
            if self.above(self.mint):
                return []
            return [self.upper, self.mint, self.half_width]
        if self.below(self.mint):
            return []
        if self.above(self.mint):
            return [self.strike, self.mint]
        return [self.strike, self.mint, self.half_width]

    def sqrt_pkr_x96(self) -> int:
        """sqrt(P * K * r) (X96)

        틱을 더하지 않고 sqrt 값을 곱하므로 current + strike + halfWidth가
        MAX_TICK을 넘어도 계산됩니다.
        """
        return (
            get_sqrt_ratio_at_tick(self.current)
            * get_sqrt_ratio_at_tick(self.strike)
            * get_sqrt_ratio_at_tick(self.half_width)
        ) // Q192

    def r_minus_one_x192(self) -> int:
        sqrt_r = get_sqrt_ratio_at_tick(self.half_width)
        return sqrt_r * sqrt_r - Q192


def _signed_size(leg: TokenIdLeg, position_size: int) -> int:
    """value/delta 부호: 숏 +, 롱 -"""
    size = position_size * leg.option_ratio
    return -size if leg.is_long else size


def _usable(geometry: _LegGeometry, leg: TokenIdLeg, ticks: Sequence[int]) -> bool:
    """범위가 있고, 공식이 평가할 틱이 모두 [MIN_TICK, MAX_TICK] 안이면 True"""
    if geometry.degenerate:
        return False
    if not _ticks_in_bounds(*ticks):
        logger.debug("레그 %d의 틱이 유효 범위를 벗어나 0으로 처리합니다", leg.index)
        return False
    return True


def _itm_adjustment(geometry: _LegGeometry, m: int) -> int:
    """민트 시점 ITM 보정"""
    g = geometry
    if g.mint is None:
        return 0

    if g.is_put:
        if g.below(g.mint):
            # (K - Pm) * m
            return div_trunc(m * (_price_x192(g.strike) - _price_x192(g.mint)), Q192)
        if g.above(g.mint):
            return 0
        # m * (sqrt(K*r) - sqrt(Pm))^2 / (r - 1)
        diff = get_sqrt_ratio_at_tick(g.upper) - get_sqrt_ratio_at_tick(g.mint)
        return div_trunc(m * diff * diff, g.r_minus_one_x192())

    if g.below(g.mint):
        return 0
    if g.above(g.mint):
        # (1 - K/Pm) * m
        mint_x192 = _price_x192(g.mint)
        return div_trunc(m * (mint_x192 - _price_x192(g.strike)), mint_x192)
    # m * (sqrt(r) - sqrt(K/Pm))^2 / (r - 1)
    sqrt_k_over_pm = div_trunc(
        get_sqrt_ratio_at_tick(g.strike) * Q96, get_sqrt_ratio_at_tick(g.mint)
    )
    diff = get_sqrt_ratio_at_tick(g.half_width) - sqrt_k_over_pm
    return div_trunc(m * diff * diff, g.r_minus_one_x192())


def leg_value(
    leg: TokenIdLeg,
    current_tick: int,
    mint_tick: Optional[int],
    pool_tick_spacing: int,
    defined_risk: bool = False,
    asset_index: Optional[int] = None,
    position_size: int = WAD,
) -> int:
    """레그 value (numeraire 토큰 단위)

    base value + debt + 민트 시점 ITM 보정.
    - 풋: debt*K + v + itm
    - 콜: debt*P + v + itm*Pm (defined risk) / itm*P (그 외)

    Args:
        leg: 레그
        current_tick: 현재 풀 틱
        mint_tick: 포지션 민트 시점 틱 (None이면 ITM 보정 없음)
        pool_tick_spacing: 풀 tick spacing
        defined_risk: 스프레드 여부 (is_defined_risk)
        asset_index: leg.asset 대신 사용할 asset (0 = token0)
        position_size: 포지션 크기 (기본 WAD = 계약 1개)

    Returns:
        value (부호 있는 정수)
    """
    g = _LegGeometry(leg, current_tick, mint_tick, pool_tick_spacing, asset_index)
    ticks = [g.current, g.strike] + g.itm_ticks()
    if g.in_range(g.current):
        ticks.append(g.half_width)
    if not _usable(g, leg, ticks):
        return 0

    m = _signed_size(leg, position_size)

    if g.below(g.current):
        v = div_trunc(m * _price_x192(g.current), Q192)
    elif g.above(g.current):
        v = div_trunc(m * _price_x192(g.strike), Q192)
    else:
        numerator = m * (
            2 * g.sqrt_pkr_x96() * Q96 - _price_x192(g.current) - _price_x192(g.strike)
        )
        v = div_trunc(numerator, g.r_minus_one_x192())

    debt = -m
    itm = _itm_adjustment(g, m)

    if g.is_put:
        return div_trunc(debt * _price_x192(g.strike), Q192) + v + itm

    debt_p = div_trunc(debt * _price_x192(g.current), Q192)
    if itm == 0:
        return debt_p + v
    itm_tick = g.mint if defined_risk else g.current
    return debt_p + v + div_trunc(itm * _price_x192(itm_tick), Q192)


def leg_delta(
    leg: TokenIdLeg,
    current_tick: int,
    mint_tick: Optional[int],
    pool_tick_spacing: int,
    defined_risk: bool = False,
    asset_index: Optional[int] = None,
    position_size: int = WAD,
) -> int:
    """레그 delta (asset 토큰 단위)

    - 풋: vDelta
    - 콜: -m + vDelta (+ ITM 보정, defined risk가 아닐 때)
    """
    g = _LegGeometry(leg, current_tick, mint_tick, pool_tick_spacing, asset_index)
    ticks = []
    if g.in_range(g.current):
        ticks.extend([g.current, g.upper, g.half_width])
    if not g.is_put and not defined_risk:
        ticks.extend(g.itm_ticks())
    if not _usable(g, leg, ticks):
        return 0

    m = _signed_size(leg, position_size)

    if g.below(g.current):
        v_delta = m
    elif g.above(g.current):
        v_delta = 0
    else:
        sqrt_p = get_sqrt_ratio_at_tick(g.current)
        sqrt_kr = get_sqrt_ratio_at_tick(g.upper)
        v_delta = div_trunc(m * (sqrt_kr - sqrt_p) * Q192, sqrt_p * g.r_minus_one_x192())

    if g.is_put:
        return v_delta

    debt_delta = -m
    if defined_risk:
        return debt_delta + v_delta
    return debt_delta + v_delta + _itm_adjustment(g, m)


def leg_gamma(
    leg: TokenIdLeg,
    current_tick: int,
    pool_tick_spacing: int,
    asset_index: Optional[int] = None,
    position_size: int = WAD,
) -> int:
    """레그 gamma (범위 밖이면 0, 롱 = 양수)"""
    g = _LegGeometry(leg, current_tick, None, pool_tick_spacing, asset_index)
    if not g.in_range(g.current):
        return 0
    if not _usable(g, leg, [g.current, g.strike, g.half_width]):
        return 0

    m = -_signed_size(leg, position_size)

    return div_trunc(m * g.sqrt_pkr_x96() * Q96, 2 * g.r_minus_one_x192())


def leg_greeks(
    leg: TokenIdLeg,
    current_tick: int,
    mint_tick: int,
    pool_tick_spacing: int,
    defined_risk: bool = False,
    asset_index: Optional[int] = None,
    position_size: int = WAD,
) -> PositionGreeks:
    """레그 하나의 (value, delta, gamma)"""
    return PositionGreeks(
        value=leg_value(
            leg, current_tick, mint_tick, pool_tick_spacing,
            defined_risk, asset_index, position_size,
        ),
        delta=leg_delta(
            leg, current_tick, mint_tick, pool_tick_spacing,
            defined_risk, asset_index, position_size,
        ),
        gamma=leg_gamma(leg, current_tick, pool_tick_spacing, asset_index, position_size),
    )


def position_value(
    legs: Sequence[TokenIdLeg],
    current_tick: int,
    mint_tick: int,
    position_size: int,
    pool_tick_spacing: int,
    asset_index: Optional[int] = None,
) -> int:
    defined_risk = is_defined_risk(legs)
    return sum(
        leg_value(
            leg, current_tick, mint_tick, pool_tick_spacing,
            defined_risk, asset_index, position_size,
        )
        for leg in legs
    )


def position_delta(
    legs: Sequence[TokenIdLeg],
    current_tick: int,
    mint_tick: Optional[int],
    position_size: int,
    pool_tick_spacing: int,
    asset_index: Optional[int] = None,
) -> int:
    defined_risk = is_defined_risk(legs)
    return sum(
        leg_delta(
            leg, current_tick, mint_tick, pool_tick_spacing,
            defined_risk, asset_index, position_size,
        )
        for leg in legs
    )


def position_gamma(
    legs: Sequence[TokenIdLeg],
    current_tick: int,
    position_size: int,
    pool_tick_spacing: int,
    asset_index: Optional[int] = None,
) -> int:
    return sum(
        leg_gamma(leg, current_tick, pool_tick_spacing, asset_index, position_size)
        for leg in legs
    )


def position_greeks(
    legs: Sequence[TokenIdLeg],
    current_tick: int,
    mint_tick: int,
    position_size: int,
    pool_tick_spacing: int,
    asset_index: Optional[int] = None,
) -> PositionGreeks:
    """포지션 전체 (value, delta, gamma)

    Args:
        legs: decode_position()이 반환한 레그
        current_tick: 현재 풀 틱
        mint_tick: 민트 시점 틱 (PositionBalance.tick_at_mint)
        position_size: 포지션 크기 (PositionBalance.position_size)
        pool_tick_spacing: 풀 tick spacing
        asset_index: 모든 레그의 asset을 덮어쓸 값

    Returns:
        PositionGreeks
    """
    return PositionGreeks(
        value=position_value(
            legs, current_tick, mint_tick, position_size, pool_tick_spacing, asset_index
        ),
        delta=position_delta(
            legs, current_tick, mint_tick, position_size, pool_tick_spacing, asset_index
        ),
        gamma=position_gamma(legs, current_tick, position_size, pool_tick_spacing, asset_index),
    )
