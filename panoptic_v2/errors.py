"""
Panoptic V2 오류 정의

모든 오류는 잘못된 입력(프로토콜 포맷 불일치 또는 사용자 입력)을 뜻하며
재시도 대상이 아닙니다. 기존 코드와 호환되도록 ValueError를 상속합니다.
"""

from typing import Optional


class PanopticError(ValueError):
    """Panoptic V2 코어 오류의 기반 클래스"""
    pass


class TickRangeError(PanopticError):
    """틱이 [MIN_TICK, MAX_TICK] 범위를 벗어남"""
    pass


class SqrtPriceRangeError(TickRangeError):
    """sqrtPriceX96이 [MIN_SQRT_RATIO, MAX_SQRT_RATIO] 범위를 벗어남"""
    pass


class InvalidPriceError(PanopticError):
    """가격 또는 sqrtPriceX96이 양수가 아님"""
    pass


class ParseError(PanopticError):
    """사람이 입력한 숫자 문자열을 해석할 수 없음"""
    pass


class PriceParseError(ParseError):
    pass


class AmountParseError(ParseError):
    pass


class MalformedTokenIdError(PanopticError):
    """TokenId 구조가 프로토콜 레이아웃과 맞지 않음"""
    pass


class TokenIdHasZeroLegsError(MalformedTokenIdError):
    """활성 레그가 하나도 없는 TokenId"""

    def __init__(self, token_id: int):
        self.token_id = token_id
        super().__init__(f"TokenId에 활성 레그가 없습니다: {hex(token_id)}")


class TokenIdLegGapError(MalformedTokenIdError):
    """빈 레그 슬롯 뒤에 사용 중인 슬롯이 있음"""

    def __init__(self, token_id: int, leg_index: int):
        self.token_id = token_id
        self.leg_index = leg_index
        super().__init__(
            f"TokenId 레그가 연속적이지 않습니다: 빈 슬롯 뒤 레그 {leg_index} "
            f"({hex(token_id)})"
        )


class InvalidTokenIdParameterError(MalformedTokenIdError):
    """레그 인코딩 파라미터가 허용 범위를 벗어남

    parameter 코드:
        0: 레그 수 초과, 1: optionRatio, 2: width, 3: strike,
        4: asset, 5: tokenType, 6: riskPartner, 7: 레그 없음,
        8: 중복 index, 9: poolId
    """

    def __init__(self, parameter: int, message: Optional[str] = None):
        self.parameter = parameter
        super().__init__(message or f"잘못된 TokenId 파라미터 (코드 {parameter})")


class DegenerateRangeError(MalformedTokenIdError):
    """레그 범위가 tickLower >= tickUpper"""

    def __init__(self, leg_index: int, tick_lower: int, tick_upper: int):
        self.leg_index = leg_index
        self.tick_lower = tick_lower
        self.tick_upper = tick_upper
        super().__init__(
            f"레그 {leg_index}의 범위가 비어 있습니다: "
            f"tickLower={tick_lower}, tickUpper={tick_upper}"
        )


class PackedValueError(PanopticError):
    """패킹된 정수가 uint256이 아니거나 필드 값이 범위를 벗어남"""
    pass


class UnknownPoolError(PanopticError):
    """풀 레지스트리에 없는 poolId"""

    def __init__(self, pool_id: int):
        self.pool_id = pool_id
        super().__init__(f"레지스트리에 없는 poolId: {hex(pool_id)}")


class TokenIdRangeError(MalformedTokenIdError, PackedValueError):
    """TokenId가 uint256 정수가 아님 (두 오류 계열 모두로 잡을 수 있음)"""
    pass
