"""
Packed Value Codec - LeftRight / PositionBalance 인코딩·디코딩

컨트랙트는 여러 값을 uint256 하나에 패킹해서 반환합니다.
- LeftRightUnsigned / LeftRightSigned: 두 개의 128비트 슬롯 (token0 / token1)
- PositionBalance: 포지션 크기 + 민트 시점 스냅샷

디코더는 모든 uint256에 대해 정의됩니다 (total).
인코더는 각 필드의 범위를 검사하고 PackedValueError를 발생시킵니다.
"""

import logging

from ..constants import (
    LEFT_RIGHT_SLOT_SIZE,
    POSITION_SIZE_BIT,
    POSITION_SIZE_SIZE,
    UTILIZATION0_BIT,
    UTILIZATION1_BIT,
    UTILIZATION_SIZE,
    TICK_AT_MINT_BIT,
    TICK_AT_MINT_SIZE,
    TIMESTAMP_AT_MINT_BIT,
    TIMESTAMP_AT_MINT_SIZE,
    BLOCK_AT_MINT_BIT,
    BLOCK_AT_MINT_SIZE,
    SWAP_AT_MINT_BIT,
)
from ..errors import PackedValueError
from ..math.bit_math import (
    mask,
    extract_bits,
    sign_extend,
    to_unsigned,
    require_uint256,
)
from .types import LeftRightUnsigned, LeftRightSigned, PositionBalance

logger = logging.getLogger(__name__)


def decode_left_right_unsigned(packed: int) -> LeftRightUnsigned:
    """uint256 → (right: 하위 128비트, left: 상위 128비트)

    Example:
        >>> decode_left_right_unsigned((2000 << 128) | 1000)
        LeftRightUnsigned(right=1000, left=2000)
    """
    require_uint256(packed, "LeftRightUnsigned")
    return LeftRightUnsigned(
        right=extract_bits(packed, 0, LEFT_RIGHT_SLOT_SIZE),
        left=extract_bits(packed, LEFT_RIGHT_SLOT_SIZE, LEFT_RIGHT_SLOT_SIZE),
    )


def decode_left_right_signed(packed: int) -> LeftRightSigned:
    """uint256 → 두 개의 int128 (2의 보수)"""
    require_uint256(packed, "LeftRightSigned")
    return LeftRightSigned(
        right=sign_extend(extract_bits(packed, 0, LEFT_RIGHT_SLOT_SIZE), LEFT_RIGHT_SLOT_SIZE),
        left=sign_extend(
            extract_bits(packed, LEFT_RIGHT_SLOT_SIZE, LEFT_RIGHT_SLOT_SIZE),
            LEFT_RIGHT_SLOT_SIZE,
        ),
    )


def encode_left_right_unsigned(right: int, left: int) -> int:
    """(right, left) uint128 쌍 → uint256"""
    for name, value in (("right", right), ("left", left)):
        if value < 0 or value > mask(LEFT_RIGHT_SLOT_SIZE):
            raise PackedValueError(f"{name}이(가) uint128 범위를 벗어났습니다: {value}")
    return (left << LEFT_RIGHT_SLOT_SIZE) | right


def encode_left_right_signed(right: int, left: int) -> int:
    """(right, left) int128 쌍 → uint256"""
    return (
        (to_unsigned(left, LEFT_RIGHT_SLOT_SIZE) << LEFT_RIGHT_SLOT_SIZE)
        | to_unsigned(right, LEFT_RIGHT_SLOT_SIZE)
    )


def decode_position_balance(packed: int) -> PositionBalance:
    """PositionBalance uint256 디코딩

    tickAtMint는 int24이므로 부호 확장합니다.

    Args:
        packed: 컨트랙트가 반환한 balanceData

    Returns:
        PositionBalance
    """
    require_uint256(packed, "PositionBalance")

    tick_field = extract_bits(packed, TICK_AT_MINT_BIT, TICK_AT_MINT_SIZE)

    return PositionBalance(
        position_size=extract_bits(packed, POSITION_SIZE_BIT, POSITION_SIZE_SIZE),
        utilization0=extract_bits(packed, UTILIZATION0_BIT, UTILIZATION_SIZE),
        utilization1=extract_bits(packed, UTILIZATION1_BIT, UTILIZATION_SIZE),
        tick_at_mint=sign_extend(tick_field, TICK_AT_MINT_SIZE),
        timestamp_at_mint=extract_bits(packed, TIMESTAMP_AT_MINT_BIT, TIMESTAMP_AT_MINT_SIZE),
        block_at_mint=extract_bits(packed, BLOCK_AT_MINT_BIT, BLOCK_AT_MINT_SIZE),
        swap_at_mint=bool(extract_bits(packed, SWAP_AT_MINT_BIT, 1)),
    )


def _check_unsigned_field(name: str, value: int, bits: int) -> int:
    if value < 0 or value > mask(bits):
        raise PackedValueError(f"{name}이(가) uint{bits} 범위를 벗어났습니다: {value}")
    return value


def encode_position_balance(balance: PositionBalance) -> int:
    """PositionBalance → uint256 (decode_position_balance의 역)

    Raises:
        PackedValueError: 필드가 비트 폭을 넘는 경우
    """
    packed = _check_unsigned_field("position_size", balance.position_size, POSITION_SIZE_SIZE)
    packed |= _check_unsigned_field(
        "utilization0", balance.utilization0, UTILIZATION_SIZE
    ) << UTILIZATION0_BIT
    packed |= _check_unsigned_field(
        "utilization1", balance.utilization1, UTILIZATION_SIZE
    ) << UTILIZATION1_BIT
    packed |= to_unsigned(balance.tick_at_mint, TICK_AT_MINT_SIZE) << TICK_AT_MINT_BIT
    packed |= _check_unsigned_field(
        "timestamp_at_mint", balance.timestamp_at_mint, TIMESTAMP_AT_MINT_SIZE
    ) << TIMESTAMP_AT_MINT_BIT
    packed |= _check_unsigned_field(
        "block_at_mint", balance.block_at_mint, BLOCK_AT_MINT_SIZE
    ) << BLOCK_AT_MINT_BIT
    if balance.swap_at_mint:
        packed |= 1 << SWAP_AT_MINT_BIT

    logger.debug("PositionBalance 인코딩: %s -> %s", balance, hex(packed))
    return packed
