"""
TokenId Builder - 플루언트 API로 TokenId 구성

Example:
    >>> token_id = (
    ...     TokenIdBuilder.for_v3_pool(pool_address, tick_spacing=60)
    ...     .add_call(strike=100, width=10)
    ...     .add_put(strike=-100, width=10)
    ...     .build()
    ... )
"""

import logging
from typing import Optional

from ..constants import DEFAULT_VEGOID, MAX_LEGS
from ..data.types import TokenIdLeg
from ..errors import InvalidTokenIdParameterError
from .encoding import (
    NO_LEGS,
    TOO_MANY_LEGS,
    add_leg_to_token_id,
    encode_pool_id,
    encode_v4_pool_id,
    validate_pool_id_bits,
)

logger = logging.getLogger(__name__)


class TokenIdBuilder:
    """레그를 하나씩 추가해 TokenId를 만드는 빌더

    레그 index는 추가 순서대로 0부터 부여되고,
    riskPartner를 지정하지 않으면 자기 자신을 가리킵니다.
    """

    def __init__(self, pool_id: int):
        validate_pool_id_bits(pool_id)
        self.pool_id = pool_id
        self._token_id = pool_id
        self._leg_count = 0

    @classmethod
    def for_v3_pool(
        cls,
        pool_address: str,
        tick_spacing: int,
        vegoid: int = DEFAULT_VEGOID
    ) -> "TokenIdBuilder":
        return cls(encode_pool_id(pool_address, tick_spacing, vegoid))

    @classmethod
    def for_v4_pool(
        cls,
        pool_id_hex: str,
        tick_spacing: int,
        vegoid: int = DEFAULT_VEGOID
    ) -> "TokenIdBuilder":
        return cls(encode_v4_pool_id(pool_id_hex, tick_spacing, vegoid))

    def add_leg(
        self,
        asset: int,
        option_ratio: int,
        is_long: bool,
        token_type: int,
        strike: int,
        width: int,
        risk_partner: Optional[int] = None,
    ) -> "TokenIdBuilder":
        """레그 추가

        Raises:
            InvalidTokenIdParameterError: 레그 수 초과 또는 범위를 벗어난 필드
        """
        if self._leg_count >= MAX_LEGS:
            raise InvalidTokenIdParameterError(
                TOO_MANY_LEGS, f"레그는 최대 {MAX_LEGS}개입니다"
            )

        leg = TokenIdLeg(
            index=self._leg_count,
            asset=asset,
            option_ratio=option_ratio,
            is_long=is_long,
            token_type=token_type,
            risk_partner=self._leg_count if risk_partner is None else risk_partner,
            strike=strike,
            width=width,
        )

        self._token_id = add_leg_to_token_id(self._token_id, leg)
        self._leg_count += 1
        return self

    def add_call(
        self,
        strike: int,
        width: int,
        option_ratio: int = 1,
        is_long: bool = False,
        asset: int = 0,
        risk_partner: Optional[int] = None,
    ) -> "TokenIdBuilder":
        """콜 레그 (tokenType == asset)"""
        return self.add_leg(
            asset=asset,
            option_ratio=option_ratio,
            is_long=is_long,
            token_type=asset,
            strike=strike,
            width=width,
            risk_partner=risk_partner,
        )

    def add_put(
        self,
        strike: int,
        width: int,
        option_ratio: int = 1,
        is_long: bool = False,
        asset: int = 0,
        risk_partner: Optional[int] = None,
    ) -> "TokenIdBuilder":
        """풋 레그 (tokenType != asset)"""
        return self.add_leg(
            asset=asset,
            option_ratio=option_ratio,
            is_long=is_long,
            token_type=1 - asset if asset in (0, 1) else asset,
            strike=strike,
            width=width,
            risk_partner=risk_partner,
        )

    def add_loan(
        self,
        token_type: int,
        strike: int,
        asset: int = 0,
        option_ratio: int = 1,
        risk_partner: Optional[int] = None,
    ) -> "TokenIdBuilder":
        """Loan 레그 (width 0, 숏) - 풀에서 유동성 차입"""
        return self.add_leg(
            asset=asset,
            option_ratio=option_ratio,
            is_long=False,
            token_type=token_type,
            strike=strike,
            width=0,
            risk_partner=risk_partner,
        )

    def add_credit(
        self,
        token_type: int,
        strike: int,
        asset: int = 0,
        option_ratio: int = 1,
        risk_partner: Optional[int] = None,
    ) -> "TokenIdBuilder":
        """Credit 레그 (width 0, 롱) - 풀에 유동성 대여"""
        return self.add_leg(
            asset=asset,
            option_ratio=option_ratio,
            is_long=True,
            token_type=token_type,
            strike=strike,
            width=0,
            risk_partner=risk_partner,
        )

    def build(self) -> int:
        """TokenId 반환

        Raises:
            InvalidTokenIdParameterError: 레그가 없는 경우
        """
        if self._leg_count == 0:
            raise InvalidTokenIdParameterError(NO_LEGS, "레그가 하나 이상 필요합니다")
        logger.debug("TokenId 빌드: %d legs -> %s", self._leg_count, hex(self._token_id))
        return self._token_id

    def leg_count(self) -> int:
        return self._leg_count

    def reset(self) -> "TokenIdBuilder":
        """poolId만 남기고 초기화"""
        self._token_id = self.pool_id
        self._leg_count = 0
        return self
