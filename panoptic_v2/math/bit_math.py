"""
Bit Math - 고정폭 필드 추출/부호 확장

컨트랙트의 패킹 레이아웃은 모두 uint256 위의 고정폭 필드입니다.
Python int는 무제한 정밀도이므로 마스크로 폭을 명시적으로 제한합니다.
"""

from typing import Type

from ..errors import PackedValueError
from ..constants import UINT256_MAX


def mask(bits: int) -> int:
    """하위 `bits`비트 마스크"""
    return (1 << bits) - 1


def extract_bits(value: int, offset: int, bits: int) -> int:
    """value의 [offset, offset + bits) 비트를 부호 없는 정수로 추출"""
    return (value >> offset) & mask(bits)


def sign_extend(value: int, bits: int) -> int:
    """`bits`비트 2의 보수 필드를 부호 있는 정수로 변환

    최상위 비트(bit `bits - 1`)가 1이면 2^bits를 뺍니다.

    Args:
        value: 부호 없는 필드 값 (0 ~ 2^bits - 1)
        bits: 필드 폭

    Returns:
        부호 있는 정수 (-2^(bits-1) ~ 2^(bits-1) - 1)

    Example:
        >>> sign_extend(0xFFFB50, 24)
        -1200
    """
    value &= mask(bits)
    if value & (1 << (bits - 1)):
        return value - (1 << bits)
    return value


def to_unsigned(value: int, bits: int) -> int:
    """부호 있는 정수를 `bits`비트 2의 보수 표현으로 변환 (sign_extend의 역)"""
    if value < -(1 << (bits - 1)) or value >= (1 << (bits - 1)):
        raise PackedValueError(f"int{bits} 범위를 벗어났습니다: {value}")
    return value & mask(bits)


def require_uint256(
    value: int, name: str = "value", error: Type[PackedValueError] = PackedValueError
) -> int:
    """value가 uint256 범위인지 확인 (벗어나면 error 발생)"""
    if not isinstance(value, int) or isinstance(value, bool):
        raise error(f"{name}은(는) 정수여야 합니다: {value!r}")
    if value < 0 or value > UINT256_MAX:
        raise error(f"{name}이(가) uint256 범위를 벗어났습니다: {value}")
    return value


def div_trunc(numerator: int, denominator: int) -> int:
    """0 방향으로 버림하는 정수 나눗셈 (Solidity `/` 동작)

    Python `//`는 음의 무한대 방향(floor)이므로 부호가 다르면 결과가 달라집니다.
        Solidity: -7 / 2 = -3
        Python:   -7 // 2 = -4
    분모가 0이면 0을 반환합니다.
    """
    if denominator == 0:
        return 0
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient
