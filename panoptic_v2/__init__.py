"""
Panoptic V2 Encoding / Conversion Core

온체인 Panoptic V2 컨트랙트의 원시 정수를 타입이 있는 값으로 변환하는 라이브러리.
- Tick ↔ Price ↔ sqrtPriceX96 (TickMath와 비트 단위로 동일)
- TokenId (256비트 멀티 레그 옵션 포지션 ID) 인코딩 / 디코딩
- LeftRight / PositionBalance 패킹 값 디코딩
- 레그 / 포지션 / 계정 그릭스 (value, delta, gamma)

네트워크 I/O와 세션 상태가 없는 순수 함수만 제공합니다.
"""

import logging

__version__ = "0.1.0"

from .constants import (
    Q96,
    Q128,
    Q192,
    WAD,
    MIN_TICK,
    MAX_TICK,
    MIN_SQRT_RATIO,
    MAX_SQRT_RATIO,
    FEE_TIERS,
    TICK_SPACINGS,
)
from .errors import (
    PanopticError,
    TickRangeError,
    SqrtPriceRangeError,
    InvalidPriceError,
    ParseError,
    PriceParseError,
    AmountParseError,
    MalformedTokenIdError,
    TokenIdHasZeroLegsError,
    TokenIdLegGapError,
    InvalidTokenIdParameterError,
    DegenerateRangeError,
    PackedValueError,
    UnknownPoolError,
    TokenIdRangeError,
)
from .math import (
    get_sqrt_ratio_at_tick,
    tick_to_sqrt_price_x96,
    sqrt_price_x96_to_tick,
    tick_to_price,
    price_to_tick,
    position_greeks,
)
from .math.hedge import get_delta_hedge_params
from .math.account import account_greeks, account_position
from .data import (
    TokenIdLeg,
    PositionBalance,
    LeftRightUnsigned,
    PositionGreeks,
    PoolRegistry,
    decode_left_right_unsigned,
    decode_position_balance,
)
from .tokenid import (
    decode_position,
    encode_position,
    decode_tick_spacing,
    TokenIdBuilder,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())
