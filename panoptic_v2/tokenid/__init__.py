"""
TokenId codec for Panoptic V2

- encoding: 레그 / poolId 비트 단위 인코딩
- decode: 구조 검증 디코딩, 포지션 판별
- builder: 플루언트 TokenIdBuilder
"""

from .encoding import (
    encode_leg,
    decode_leg,
    count_legs,
    decode_all_legs,
    encode_pool_id,
    encode_v4_pool_id,
    decode_pool_id,
    decode_vegoid,
    add_leg_to_token_id,
)
from .decode import (
    decode_position,
    decode_tick_spacing,
    encode_position,
    decode_token_id,
    validate_pool_id,
    has_long_leg,
    is_short_only,
    is_spread,
    get_asset_index,
    is_loan_leg,
    is_credit_leg,
    has_loan_leg,
    has_credit_leg,
    is_loan,
    is_credit,
    has_loan_or_credit,
)
from .builder import TokenIdBuilder
