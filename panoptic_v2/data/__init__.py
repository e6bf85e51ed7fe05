"""
Data layer for Panoptic V2

디코딩 결과 타입, 패킹 값 코덱, 풀 레지스트리
"""

from .types import (
    PriceRatio,
    PricePair,
    LeftRightUnsigned,
    LeftRightSigned,
    PositionBalance,
    TokenIdLeg,
    DecodedPosition,
    TokenIdInfo,
    PositionGreeks,
    HedgeLeg,
    DeltaHedgeResult,
    AccountPosition,
    PositionGreeksCurve,
    AccountGreeksCurve,
    TokenFlow,
    FormattedTokenFlow,
    TokenListId,
)
from .packed import (
    decode_left_right_unsigned,
    decode_left_right_signed,
    encode_left_right_unsigned,
    encode_left_right_signed,
    decode_position_balance,
    encode_position_balance,
)
from .registry import PoolRegistry
