"""
TokenIdBuilder 테스트
"""

import pytest

from ..tokenid.builder import TokenIdBuilder
from ..tokenid.decode import decode_position, is_loan, is_credit
from ..tokenid.encoding import encode_pool_id, TOO_MANY_LEGS, NO_LEGS, INVALID_POOL_ID
from ..errors import InvalidTokenIdParameterError

WETH_USDC_POOL = "0x88e6A0c2dDD26FEEb64F039a2c41296FcB3f5640"


class TestTokenIdBuilder:
    """플루언트 빌더 테스트"""

    def test_strangle(self):
        """콜 + 풋 숏 스트랭글"""
        token_id = (
            TokenIdBuilder.for_v3_pool(WETH_USDC_POOL, tick_spacing=10)
            .add_call(strike=1000, width=10)
            .add_put(strike=-1000, width=10)
            .build()
        )

        position = decode_position(token_id)
        assert position.pool_id == encode_pool_id(WETH_USDC_POOL, 10)

        call, put = position.legs
        assert (call.index, call.asset, call.token_type, call.strike) == (0, 0, 0, 1000)
        assert (put.index, put.asset, put.token_type, put.strike) == (1, 0, 1, -1000)
        assert call.risk_partner == 0
        assert put.risk_partner == 1
        assert not call.is_long and not put.is_long

    def test_call_put_follow_asset(self):
        """asset 1이면 콜은 tokenType 1, 풋은 tokenType 0"""
        token_id = (
            TokenIdBuilder(0x1234)
            .add_call(strike=0, width=2, asset=1, is_long=True)
            .add_put(strike=0, width=2, asset=1)
            .build()
        )
        call, put = decode_position(token_id).legs
        assert call.token_type == 1 and call.is_long
        assert put.token_type == 0

    def test_risk_partner(self):
        token_id = (
            TokenIdBuilder(1)
            .add_call(strike=0, width=10, risk_partner=1)
            .add_call(strike=600, width=10, is_long=True, risk_partner=0)
            .build()
        )
        legs = decode_position(token_id).legs
        assert [leg.risk_partner for leg in legs] == [1, 0]

    def test_loan_and_credit(self):
        loan = TokenIdBuilder(1).add_loan(token_type=0, strike=120).build()
        assert is_loan(loan)
        leg = decode_position(loan).legs[0]
        assert leg.width == 0 and leg.strike == 120

        credit = TokenIdBuilder(1).add_credit(token_type=1, strike=-60, option_ratio=5).build()
        assert is_credit(credit)
        assert decode_position(credit).legs[0].option_ratio == 5

    def test_v4_pool(self):
        builder = TokenIdBuilder.for_v4_pool("0x" + "00" * 27 + "0102030405", tick_spacing=1)
        assert builder.pool_id & 0xFFFFFFFFFF == 0x0504030201

    def test_too_many_legs(self):
        builder = TokenIdBuilder(1)
        for strike in (0, 10, 20, 30):
            builder.add_call(strike=strike, width=1)
        assert builder.leg_count() == 4

        with pytest.raises(InvalidTokenIdParameterError) as exc_info:
            builder.add_call(strike=40, width=1)
        assert exc_info.value.parameter == TOO_MANY_LEGS

    def test_build_without_legs(self):
        with pytest.raises(InvalidTokenIdParameterError) as exc_info:
            TokenIdBuilder(1).build()
        assert exc_info.value.parameter == NO_LEGS

    def test_invalid_pool_id(self):
        with pytest.raises(InvalidTokenIdParameterError) as exc_info:
            TokenIdBuilder(2 ** 64)
        assert exc_info.value.parameter == INVALID_POOL_ID

    def test_invalid_leg_does_not_advance(self):
        """실패한 add_leg는 빌더 상태를 바꾸지 않음"""
        builder = TokenIdBuilder(1)
        with pytest.raises(InvalidTokenIdParameterError):
            builder.add_call(strike=0, width=5000)
        assert builder.leg_count() == 0

    def test_reset(self):
        builder = TokenIdBuilder(7).add_call(strike=0, width=1)
        builder.reset()
        assert builder.leg_count() == 0
        token_id = builder.add_put(strike=60, width=1).build()
        assert decode_position(token_id).legs[0].strike == 60
        assert decode_position(token_id).pool_id == 7
