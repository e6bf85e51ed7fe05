"""
TokenId 저수준 인코딩

TokenId 레이아웃 (uint256, LSB부터):
    [0, 64)      poolId
                   [0, 40)   풀 주소 / V4 poolId 5바이트 (little-endian)
                   [40, 48)  vegoid
                   [48, 64)  tickSpacing
    [64, 256)    레그 4개 × 48비트 (레그 i는 64 + 48*i에서 시작)

레그 내부 (레그 시작 기준):
    optionRatio 7 @0 | asset 1 @7 | isLong 1 @8 | tokenType 1 @9 |
    riskPartner 2 @10 | strike 24 (int24) @12 | width 12 @36

optionRatio == 0인 슬롯은 빈 슬롯입니다.
"""

import logging
from typing import List

from ..constants import (
    POOL_ID_SIZE,
    LEG_SIZE,
    MAX_LEGS,
    POOL_ADDRESS_SIZE,
    VEGOID_STARTING_BIT,
    VEGOID_SIZE,
    TICK_SPACING_STARTING_BIT,
    TICK_SPACING_SIZE,
    DEFAULT_VEGOID,
    RATIO_BIT,
    RATIO_SIZE,
    ASSET_BIT,
    ASSET_SIZE,
    IS_LONG_BIT,
    IS_LONG_SIZE,
    TOKEN_TYPE_BIT,
    TOKEN_TYPE_SIZE,
    RISK_PARTNER_BIT,
    RISK_PARTNER_SIZE,
    STRIKE_BIT,
    STRIKE_SIZE,
    WIDTH_BIT,
    WIDTH_SIZE,
    MAX_RATIO,
    MAX_WIDTH,
    MIN_STRIKE,
    MAX_STRIKE,
    UINT64_MAX,
)
from ..data.types import TokenIdLeg
from ..errors import InvalidTokenIdParameterError, TokenIdRangeError
from ..math.bit_math import mask, extract_bits, sign_extend, to_unsigned, require_uint256

logger = logging.getLogger(__name__)

# 파라미터 오류 코드
TOO_MANY_LEGS = 0
INVALID_RATIO = 1
INVALID_WIDTH = 2
INVALID_STRIKE = 3
INVALID_ASSET = 4
INVALID_TOKEN_TYPE = 5
INVALID_RISK_PARTNER = 6
NO_LEGS = 7
INVALID_INDEX = 8
INVALID_POOL_ID = 9


def get_leg_offset(leg_index: int) -> int:
    """레그 i의 TokenId 내 시작 비트"""
    return POOL_ID_SIZE + leg_index * LEG_SIZE


def validate_leg(leg: TokenIdLeg) -> None:
    """레그 필드 범위 검사

    Raises:
        InvalidTokenIdParameterError: 범위를 벗어난 필드 (코드는 errors 참고)
    """
    if leg.index < 0 or leg.index >= MAX_LEGS:
        raise InvalidTokenIdParameterError(
            INVALID_INDEX, f"레그 index는 0~{MAX_LEGS - 1}이어야 합니다: {leg.index}"
        )
    if leg.option_ratio < 1 or leg.option_ratio > MAX_RATIO:
        raise InvalidTokenIdParameterError(
            INVALID_RATIO, f"optionRatio는 1~{MAX_RATIO}이어야 합니다: {leg.option_ratio}"
        )
    if leg.width < 0 or leg.width > MAX_WIDTH:
        raise InvalidTokenIdParameterError(
            INVALID_WIDTH, f"width는 0~{MAX_WIDTH}이어야 합니다: {leg.width}"
        )
    if leg.strike < MIN_STRIKE or leg.strike > MAX_STRIKE:
        raise InvalidTokenIdParameterError(
            INVALID_STRIKE, f"strike가 int24 범위를 벗어났습니다: {leg.strike}"
        )
    if leg.asset not in (0, 1):
        raise InvalidTokenIdParameterError(INVALID_ASSET, f"asset은 0 또는 1이어야 합니다: {leg.asset}")
    if leg.token_type not in (0, 1):
        raise InvalidTokenIdParameterError(
            INVALID_TOKEN_TYPE, f"tokenType은 0 또는 1이어야 합니다: {leg.token_type}"
        )
    if leg.risk_partner < 0 or leg.risk_partner >= MAX_LEGS:
        raise InvalidTokenIdParameterError(
            INVALID_RISK_PARTNER, f"riskPartner는 0~3이어야 합니다: {leg.risk_partner}"
        )


def validate_pool_id_bits(pool_id: int) -> None:
    if pool_id < 0 or pool_id > UINT64_MAX:
        raise InvalidTokenIdParameterError(
            INVALID_POOL_ID, f"poolId가 uint64 범위를 벗어났습니다: {pool_id}"
        )


def encode_leg(leg: TokenIdLeg) -> int:
    """레그 하나를 TokenId 내 위치로 시프트한 값 (기존 TokenId와 OR)

    Raises:
        InvalidTokenIdParameterError: 필드가 범위를 벗어난 경우
    """
    validate_leg(leg)

    word = (
        (leg.option_ratio << RATIO_BIT)
        | (leg.asset << ASSET_BIT)
        | (int(bool(leg.is_long)) << IS_LONG_BIT)
        | (leg.token_type << TOKEN_TYPE_BIT)
        | (leg.risk_partner << RISK_PARTNER_BIT)
        | (to_unsigned(leg.strike, STRIKE_SIZE) << STRIKE_BIT)
        | (leg.width << WIDTH_BIT)
    )
    return word << get_leg_offset(leg.index)


def decode_leg(token_id: int, leg_index: int) -> TokenIdLeg:
    """TokenId에서 레그 하나 디코딩 (빈 슬롯도 그대로 반환, tick 경계 없음)"""
    word = extract_bits(token_id, get_leg_offset(leg_index), LEG_SIZE)

    return TokenIdLeg(
        index=leg_index,
        asset=extract_bits(word, ASSET_BIT, ASSET_SIZE),
        option_ratio=extract_bits(word, RATIO_BIT, RATIO_SIZE),
        is_long=bool(extract_bits(word, IS_LONG_BIT, IS_LONG_SIZE)),
        token_type=extract_bits(word, TOKEN_TYPE_BIT, TOKEN_TYPE_SIZE),
        risk_partner=extract_bits(word, RISK_PARTNER_BIT, RISK_PARTNER_SIZE),
        strike=sign_extend(extract_bits(word, STRIKE_BIT, STRIKE_SIZE), STRIKE_SIZE),
        width=extract_bits(word, WIDTH_BIT, WIDTH_SIZE),
    )


def leg_word(token_id: int, leg_index: int) -> int:
    """레그 슬롯의 원시 48비트 값"""
    return extract_bits(token_id, get_leg_offset(leg_index), LEG_SIZE)


def count_legs(token_id: int) -> int:
    """optionRatio > 0인 레그 수"""
    return sum(
        1 for i in range(MAX_LEGS)
        if decode_leg(token_id, i).option_ratio > 0
    )


def decode_all_legs(token_id: int) -> List[TokenIdLeg]:
    """optionRatio > 0인 레그 전체 (슬롯 연속성은 검사하지 않음)"""
    legs = []
    for i in range(MAX_LEGS):
        leg = decode_leg(token_id, i)
        if leg.option_ratio > 0:
            legs.append(leg)
    return legs


def _little_endian_bits(hex_bytes: str) -> int:
    """5바이트 16진 문자열 → little-endian 40비트 정수"""
    return int.from_bytes(bytes.fromhex(hex_bytes), "little")


def _pack_pool_id(address_bits: int, tick_spacing: int, vegoid: int) -> int:
    return (
        address_bits
        | ((vegoid & mask(VEGOID_SIZE)) << VEGOID_STARTING_BIT)
        | ((tick_spacing & mask(TICK_SPACING_SIZE)) << TICK_SPACING_STARTING_BIT)
    )


def _strip_hex(value: str, min_length: int, label: str) -> str:
    text = value[2:] if value[:2].lower() == "0x" else value
    if len(text) < min_length:
        raise InvalidTokenIdParameterError(INVALID_POOL_ID, f"{label}가 너무 짧습니다: {value}")
    try:
        int(text, 16)
    except ValueError:
        raise InvalidTokenIdParameterError(
            INVALID_POOL_ID, f"{label}가 16진수가 아닙니다: {value}"
        ) from None
    return text.lower()


def encode_pool_id(address: str, tick_spacing: int, vegoid: int = DEFAULT_VEGOID) -> int:
    """Uniswap V3 풀 주소 → 64비트 poolId

    주소 앞 5바이트를 little-endian으로 하위 40비트에 넣고,
    vegoid와 tickSpacing을 위에 쌓습니다.

    Args:
        address: 풀 컨트랙트 주소 (0x...)
        tick_spacing: 풀 tick spacing
        vegoid: vegoid (기본 4)

    Returns:
        poolId
    """
    text = _strip_hex(address, 10, "풀 주소")
    return _pack_pool_id(_little_endian_bits(text[:10]), tick_spacing, vegoid)


def encode_v4_pool_id(pool_id_hex: str, tick_spacing: int, vegoid: int = DEFAULT_VEGOID) -> int:
    """Uniswap V4 poolId (bytes32) → 64비트 poolId (마지막 5바이트 사용)"""
    text = _strip_hex(pool_id_hex, 10, "V4 poolId")
    return _pack_pool_id(_little_endian_bits(text[-10:]), tick_spacing, vegoid)


def decode_pool_id(token_id: int) -> int:
    """TokenId 하위 64비트 (poolId)"""
    return extract_bits(token_id, 0, POOL_ID_SIZE)


def decode_pool_address_bits(token_id: int) -> int:
    return extract_bits(token_id, 0, POOL_ADDRESS_SIZE)


def decode_vegoid(token_id: int) -> int:
    return extract_bits(token_id, VEGOID_STARTING_BIT, VEGOID_SIZE)


def decode_embedded_tick_spacing(token_id: int) -> int:
    """poolId 48-63비트에 들어 있는 tick spacing"""
    return extract_bits(token_id, TICK_SPACING_STARTING_BIT, TICK_SPACING_SIZE)


def add_leg_to_token_id(token_id: int, leg: TokenIdLeg) -> int:
    """기존 TokenId (또는 poolId)에 레그 OR

    Raises:
        InvalidTokenIdParameterError: 해당 슬롯이 이미 사용 중인 경우
    """
    require_uint256(token_id, "TokenId", TokenIdRangeError)
    validate_leg(leg)
    if leg_word(token_id, leg.index) != 0:
        raise InvalidTokenIdParameterError(
            INVALID_INDEX, f"레그 슬롯 {leg.index}이(가) 이미 사용 중입니다"
        )
    return token_id | encode_leg(leg)
