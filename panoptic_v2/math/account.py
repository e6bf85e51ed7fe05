"""
Account Greeks - 계정 전체 포지션의 틱별 value / delta / gamma 곡선

포지션마다 position_value / position_delta / position_gamma를 at_ticks의
각 틱에서 계산하고 합산합니다. 담보 잔고가 주어지면 합계에 더합니다.

    value += assetBal * P + otherBal   (asset = token0)
    value += assetBal / P + otherBal   (asset = token1)
    delta += assetBal

P는 틱의 token1/token0 가격 (sqrtPriceX96^2 / 2^192)입니다.
풀 상태(tick spacing)와 담보 잔고는 호출자가 넘깁니다.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from ..constants import Q192
from ..data.types import (
    AccountGreeksCurve,
    AccountPosition,
    PositionBalance,
    PositionGreeksCurve,
)
from ..tokenid.decode import decode_position
from .bit_math import div_trunc
from .greeks import position_delta, position_gamma, position_value
from .tick_math import get_sqrt_ratio_at_tick

logger = logging.getLogger(__name__)


def account_position(
    token_id: int,
    balance: PositionBalance,
    tick_spacing: Optional[int] = None,
) -> AccountPosition:
    """TokenId + PositionBalance → AccountPosition

    Raises:
        MalformedTokenIdError: token_id가 잘못된 경우
    """
    decoded = decode_position(token_id, tick_spacing)
    return AccountPosition(
        token_id=token_id,
        legs=decoded.legs,
        tick_at_mint=balance.tick_at_mint,
        position_size=balance.position_size,
    )


def _collateral_value(tick: int, asset_balance: int, other_balance: int, is_asset_token0: bool) -> int:
    sqrt_price = get_sqrt_ratio_at_tick(tick)
    price_x192 = sqrt_price * sqrt_price
    if is_asset_token0:
        converted = div_trunc(asset_balance * price_x192, Q192)
    else:
        converted = div_trunc(asset_balance * Q192, price_x192)
    return converted + other_balance


def position_greeks_curve(
    position: AccountPosition,
    tick_spacing: int,
    at_ticks: Sequence[int],
    asset_index: Optional[int] = None,
) -> PositionGreeksCurve:
    """포지션 하나의 틱별 (value, delta, gamma)"""
    legs = position.legs
    size = position.position_size
    mint_tick = position.tick_at_mint

    return PositionGreeksCurve(
        token_id=position.token_id,
        value=tuple(
            position_value(legs, tick, mint_tick, size, tick_spacing, asset_index)
            for tick in at_ticks
        ),
        delta=tuple(
            position_delta(legs, tick, mint_tick, size, tick_spacing, asset_index)
            for tick in at_ticks
        ),
        gamma=tuple(
            position_gamma(legs, tick, size, tick_spacing, asset_index)
            for tick in at_ticks
        ),
    )


def account_greeks(
    positions: Iterable[AccountPosition],
    tick_spacing: int,
    at_ticks: Sequence[int],
    collateral_assets: Optional[Tuple[int, int]] = None,
    asset_index: Optional[int] = None,
) -> AccountGreeksCurve:
    """계정 전체 그릭스 곡선

    Args:
        positions: 계정의 열린 포지션
        tick_spacing: 풀 tick spacing
        at_ticks: 평가할 틱 목록 (결과 곡선의 순서)
        collateral_assets: (token0 잔고, token1 잔고), 없으면 담보 제외
        asset_index: 레그 asset 대신 사용할 asset (0 = token0, 기본 0)

    Returns:
        AccountGreeksCurve (포지션이 없으면 담보만의 곡선, gamma 0)

    Raises:
        ValueError: tick_spacing이 양수가 아닌 경우
        TickRangeError: at_ticks에 [MIN_TICK, MAX_TICK] 밖의 틱이 있고 담보가 주어진 경우
    """
    if tick_spacing <= 0:
        raise ValueError(f"틱 간격은 양수여야 합니다: {tick_spacing}")

    ticks = list(at_ticks)
    curves = [
        position_greeks_curve(position, tick_spacing, ticks, asset_index)
        for position in positions
    ]

    total_value: List[int] = [sum(c.value[i] for c in curves) for i in range(len(ticks))]
    total_delta: List[int] = [sum(c.delta[i] for c in curves) for i in range(len(ticks))]
    total_gamma: List[int] = [sum(c.gamma[i] for c in curves) for i in range(len(ticks))]

    if collateral_assets is not None:
        is_asset_token0 = asset_index is None or asset_index == 0
        balance0, balance1 = collateral_assets
        asset_balance, other_balance = (
            (balance0, balance1) if is_asset_token0 else (balance1, balance0)
        )
        for i, tick in enumerate(ticks):
            total_value[i] += _collateral_value(tick, asset_balance, other_balance, is_asset_token0)
            total_delta[i] += asset_balance

    logger.debug("계정 그릭스: 포지션 %d개, 틱 %d개", len(curves), len(ticks))

    return AccountGreeksCurve(
        total_value=tuple(total_value),
        total_delta=tuple(total_delta),
        total_gamma=tuple(total_gamma),
        position_count=len(curves),
        positions=tuple(curves),
    )
