"""
Token List Formatter - 토큰 리스트 ID, 풀 표시 이름, fee tier

토큰 리스트 표준은 'chainId:address' 형식의 ID를 사용합니다.
"""

from ..data.types import TokenListId
from ..errors import ParseError
from .price import format_ratio


def get_token_list_id(chain_id: int, address: str) -> str:
    """예: (1, '0xC02a...6Cc2') -> '1:0xc02a...6cc2'"""
    return f"{chain_id}:{address.lower()}"


def parse_token_list_id(token_list_id: str) -> TokenListId:
    """'chainId:address' → TokenListId

    Raises:
        ParseError: chainId 또는 address가 없거나 chainId가 정수가 아닌 경우
    """
    chain_id_str, _, address = token_list_id.partition(":")
    if not chain_id_str or not address:
        raise ParseError(f"토큰 리스트 ID를 해석할 수 없습니다: {token_list_id!r}")
    if not chain_id_str.isdigit():
        raise ParseError(f"chainId는 정수여야 합니다: {token_list_id!r}")
    return TokenListId(chain_id=int(chain_id_str), address=address)


def format_fee_tier(fee: int) -> str:
    """fee (1e-6 단위, 500 = 0.05%) → 퍼센트 문자열

    1% 미만은 소수 둘째 자리, 그 이상은 첫째 자리까지 반올림합니다.

    Example:
        >>> format_fee_tier(500)
        '0.05%'
        >>> format_fee_tier(10000)
        '1.0%'
    """
    precision = 2 if fee < 10_000 else 1
    return f"{format_ratio(fee, 10_000, precision)}%"


def get_pool_display_id(token0_symbol: str, token1_symbol: str, fee: int) -> str:
    """예: ('WETH', 'USDC', 500) -> 'WETH/USDC 0.05%'"""
    return f"{token0_symbol}/{token1_symbol} {format_fee_tier(fee)}"
