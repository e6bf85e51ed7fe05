"""
TokenId 디코딩

- decode_position(): 구조 검증 포함 (레그 없음 / 슬롯 간격 / 빈 범위)
- decode_token_id(): poolId 하위 필드까지 포함한 전체 디코딩
- encode_position(): decode_position()의 역
- 포지션 판별 함수 (롱/숏, 스프레드, loan/credit)
"""

import logging
from typing import Callable, Iterable, List, Mapping, Optional, Sequence, Union

from ..constants import MAX_LEGS
from ..data.registry import PoolRegistry
from ..data.types import DecodedPosition, TokenIdInfo, TokenIdLeg
from ..errors import (
    DegenerateRangeError,
    InvalidTokenIdParameterError,
    TokenIdHasZeroLegsError,
    TokenIdLegGapError,
    TokenIdRangeError,
)
from ..math.bit_math import require_uint256
from .encoding import (
    INVALID_INDEX,
    NO_LEGS,
    TOO_MANY_LEGS,
    decode_all_legs,
    decode_embedded_tick_spacing,
    decode_leg,
    decode_pool_address_bits,
    decode_pool_id,
    decode_vegoid,
    encode_leg,
    leg_word,
    validate_pool_id_bits,
)

logger = logging.getLogger(__name__)

TickSpacingSource = Union[PoolRegistry, Mapping[int, int], Callable[[int], int]]


def with_tick_bounds(leg: TokenIdLeg, tick_spacing: int) -> TokenIdLeg:
    """tick spacing으로 레그의 tickLower / tickUpper 계산

    halfWidth = width * tickSpacing // 2
    tickLower = strike - halfWidth, tickUpper = strike + halfWidth

    Raises:
        DegenerateRangeError: width > 0인데 tickLower >= tickUpper
    """
    half_width = (leg.width * tick_spacing) // 2
    tick_lower = leg.strike - half_width
    tick_upper = leg.strike + half_width

    if leg.width > 0 and tick_lower >= tick_upper:
        raise DegenerateRangeError(leg.index, tick_lower, tick_upper)

    return TokenIdLeg(
        index=leg.index,
        asset=leg.asset,
        option_ratio=leg.option_ratio,
        is_long=leg.is_long,
        token_type=leg.token_type,
        risk_partner=leg.risk_partner,
        strike=leg.strike,
        width=leg.width,
        tick_lower=tick_lower,
        tick_upper=tick_upper,
    )


def decode_position(token_id: int, tick_spacing: Optional[int] = None) -> DecodedPosition:
    """TokenId → (poolId, 레그 목록)

    슬롯 0부터 순서대로 읽고, optionRatio == 0인 슬롯에서 멈춥니다.
    그 뒤 슬롯에 값이 있으면 잘못된 TokenId입니다.

    Args:
        token_id: uint256 TokenId
        tick_spacing: 주어지면 레그 tick 경계를 계산

    Returns:
        DecodedPosition(pool_id, legs)

    Raises:
        TokenIdRangeError: uint256 정수가 아님
        TokenIdHasZeroLegsError: 활성 레그 없음
        TokenIdLegGapError: 빈 슬롯 뒤에 사용 중인 슬롯
        DegenerateRangeError: tick_spacing이 주어졌고 범위가 비어 있는 레그
    """
    require_uint256(token_id, "TokenId", TokenIdRangeError)

    legs: List[TokenIdLeg] = []
    ended = False

    for i in range(MAX_LEGS):
        leg = decode_leg(token_id, i)

        if leg.option_ratio == 0:
            if leg_word(token_id, i) != 0:
                logger.warning(
                    "optionRatio가 0인 레그 슬롯 %d에 값이 남아 있습니다: %s", i, hex(token_id)
                )
            ended = True
            continue

        if ended:
            raise TokenIdLegGapError(token_id, i)

        if tick_spacing is not None:
            leg = with_tick_bounds(leg, tick_spacing)
        legs.append(leg)

    if not legs:
        raise TokenIdHasZeroLegsError(token_id)

    logger.debug("TokenId 디코딩: %s -> %d legs", hex(token_id), len(legs))
    return DecodedPosition(pool_id=decode_pool_id(token_id), legs=tuple(legs))


def decode_tick_spacing(
    token_id: int,
    registry: Optional[TickSpacingSource] = None
) -> int:
    """TokenId의 풀 tick spacing

    레지스트리(PoolRegistry, 매핑 또는 callable)가 주어지면 poolId로 조회하고,
    없으면 poolId 48-63비트에 들어 있는 값을 사용합니다.

    Raises:
        UnknownPoolError: PoolRegistry에 없는 poolId
        KeyError: 일반 매핑에 없는 poolId
    """
    if registry is None:
        return decode_embedded_tick_spacing(token_id)

    pool_id = decode_pool_id(token_id)
    if isinstance(registry, PoolRegistry):
        return registry.tick_spacing(pool_id)
    if isinstance(registry, Mapping):
        return registry[pool_id]
    return registry(pool_id)


def encode_position(legs: Sequence[TokenIdLeg], pool_id: int) -> int:
    """(레그 목록, poolId) → TokenId

    레그 index는 0부터 연속이어야 합니다 (순서는 무관).

    Raises:
        InvalidTokenIdParameterError: 레그 수 초과, 레그 없음, 중복/비연속 index,
            범위를 벗어난 필드, uint64가 아닌 poolId
    """
    validate_pool_id_bits(pool_id)

    if len(legs) > MAX_LEGS:
        raise InvalidTokenIdParameterError(
            TOO_MANY_LEGS, f"레그는 최대 {MAX_LEGS}개입니다: {len(legs)}"
        )
    if not legs:
        raise InvalidTokenIdParameterError(NO_LEGS, "레그가 하나 이상 필요합니다")

    indices = [leg.index for leg in legs]
    if len(set(indices)) != len(indices):
        raise InvalidTokenIdParameterError(INVALID_INDEX, f"레그 index가 중복됩니다: {indices}")

    token_id = pool_id
    for leg in legs:
        token_id |= encode_leg(leg)

    if sorted(indices) != list(range(len(legs))):
        raise InvalidTokenIdParameterError(
            INVALID_INDEX, f"레그 index는 0부터 연속이어야 합니다: {sorted(indices)}"
        )

    logger.debug("TokenId 인코딩: %d legs -> %s", len(legs), hex(token_id))
    return token_id


def decode_token_id(token_id: int, tick_spacing: Optional[int] = None) -> TokenIdInfo:
    """TokenId 전체 디코딩

    tick_spacing이 없으면 poolId에 들어 있는 값으로 레그 경계를 계산합니다.
    """
    spacing = decode_embedded_tick_spacing(token_id) if tick_spacing is None else tick_spacing
    position = decode_position(token_id, spacing)

    return TokenIdInfo(
        token_id=token_id,
        pool_id=position.pool_id,
        pool_address_bits=decode_pool_address_bits(token_id),
        vegoid=decode_vegoid(token_id),
        tick_spacing=spacing,
        legs=position.legs,
    )


def validate_pool_id(token_id: int, expected_pool_id: int) -> bool:
    """TokenId의 poolId가 기대값과 같은지"""
    return decode_pool_id(token_id) == expected_pool_id


# =============================================================================
# 포지션 판별
# =============================================================================

def is_loan_leg(leg: TokenIdLeg) -> bool:
    """width == 0 숏 레그 (풀에서 유동성 차입)"""
    return leg.width == 0 and not leg.is_long


def is_credit_leg(leg: TokenIdLeg) -> bool:
    """width == 0 롱 레그 (풀에 유동성 대여)"""
    return leg.width == 0 and leg.is_long


def _legs(token_id: int) -> List[TokenIdLeg]:
    return decode_all_legs(token_id)


def has_long_leg(token_id: int) -> bool:
    return any(leg.is_long for leg in _legs(token_id))


def is_short_only(token_id: int) -> bool:
    legs = _legs(token_id)
    return len(legs) > 0 and all(not leg.is_long for leg in legs)


def is_spread(token_id: int) -> bool:
    """리스크 파트너가 자기 자신이 아닌 레그가 있는지"""
    return any(leg.risk_partner != leg.index for leg in _legs(token_id))


def get_asset_index(token_id: int) -> Optional[int]:
    """첫 번째 레그의 asset (레그가 없으면 None)"""
    legs = _legs(token_id)
    if not legs:
        return None
    return legs[0].asset


def has_loan_leg(token_id: int) -> bool:
    return any(is_loan_leg(leg) for leg in _legs(token_id))


def has_credit_leg(token_id: int) -> bool:
    return any(is_credit_leg(leg) for leg in _legs(token_id))


def _all_legs_match(legs: Iterable[TokenIdLeg], predicate: Callable[[TokenIdLeg], bool]) -> bool:
    legs = list(legs)
    return len(legs) > 0 and all(predicate(leg) for leg in legs)


def is_loan(token_id: int) -> bool:
    """모든 레그가 loan"""
    return _all_legs_match(_legs(token_id), is_loan_leg)


def is_credit(token_id: int) -> bool:
    """모든 레그가 credit"""
    return _all_legs_match(_legs(token_id), is_credit_leg)


def has_loan_or_credit(token_id: int) -> bool:
    return any(leg.width == 0 for leg in _legs(token_id))
