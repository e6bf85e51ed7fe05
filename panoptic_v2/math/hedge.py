"""
Delta Hedge - 목표 delta를 맞추기 위한 loan 레그 파라미터

두 방향 모두 swapAtMint loan으로 헤지하고 tokenType이 방향을 정합니다.
- 양의 delta가 필요: numeraire를 빌려 asset으로 스왑 (tokenType = numeraire)
- 음의 delta가 필요: asset을 빌려 numeraire로 스왑 (tokenType = asset)

loan + swapAtMint 크기 X는 asset 단위로 약 ±X의 delta를 만들므로
hedge_amount = |delta_adjustment| 입니다.

풀 상태(현재 틱, tick spacing)는 호출자가 넘깁니다.
"""

import logging
from typing import Optional

from ..data.types import DeltaHedgeResult, HedgeLeg
from ..tokenid.decode import decode_position
from .bit_math import div_trunc
from .greeks import position_delta

logger = logging.getLogger(__name__)


def get_delta_hedge_params(
    token_id: int,
    position_size: int,
    target_delta: int,
    current_tick: int,
    tick_spacing: int,
    current_delta: Optional[int] = None,
    mint_tick: Optional[int] = None,
) -> DeltaHedgeResult:
    """목표 delta를 위한 헤지 loan 레그 계산

    Args:
        token_id: 헤지할 포지션의 TokenId
        position_size: 포지션 크기
        target_delta: 목표 delta (0이면 delta-neutral)
        current_tick: 현재 풀 틱
        tick_spacing: 풀 tick spacing
        current_delta: 현재 delta (없으면 레그에서 계산)
        mint_tick: 민트 시점 틱 (없으면 current_tick)

    Returns:
        DeltaHedgeResult (hedge_type은 항상 "loan", swap_at_mint는 항상 True)

    Raises:
        MalformedTokenIdError: token_id가 잘못된 경우
    """
    if tick_spacing <= 0:
        raise ValueError(f"틱 간격은 양수여야 합니다: {tick_spacing}")

    position = decode_position(token_id, tick_spacing)

    if mint_tick is None:
        mint_tick = current_tick

    if current_delta is None:
        current_delta = position_delta(
            position.legs, current_tick, mint_tick, position_size, tick_spacing
        )

    delta_adjustment = target_delta - current_delta
    hedge_amount = abs(delta_adjustment)

    primary_asset = position.legs[0].asset
    numeraire = 1 - primary_asset
    hedge_token_type = numeraire if delta_adjustment > 0 else primary_asset

    hedge_leg = HedgeLeg(
        asset=primary_asset,
        option_ratio=1,
        is_long=False,
        token_type=hedge_token_type,
        risk_partner=0,
        strike=div_trunc(current_tick, tick_spacing) * tick_spacing,
        width=0,
    )

    logger.debug(
        "델타 헤지: current=%d target=%d adjustment=%d",
        current_delta, target_delta, delta_adjustment,
    )

    return DeltaHedgeResult(
        current_delta=current_delta,
        target_delta=target_delta,
        delta_adjustment=delta_adjustment,
        hedge_amount=hedge_amount,
        hedge_leg=hedge_leg,
        hedge_type="loan",
        swap_at_mint=True,
    )
