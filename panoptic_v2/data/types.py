"""
Panoptic V2 데이터 타입 정의

컨트랙트가 반환하는 uint256 값을 디코딩한 결과를 Python 값 타입으로 정의.
모든 숫자 필드는 온체인 정밀도를 위해 int 타입 사용.
디코딩 호출마다 새로 만들어지며 변경할 수 없습니다.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple


class PriceRatio(NamedTuple):
    """정확한 가격 비율 (numerator / denominator)"""
    numerator: int
    denominator: int


class PricePair(NamedTuple):
    """한 틱에서의 양방향 가격 (소수점 조정된 문자열)"""
    token1_per_token0: str
    token0_per_token1: str


class LeftRightUnsigned(NamedTuple):
    """uint256을 두 개의 uint128로 나눈 값

    - right: 하위 128비트 (token0)
    - left: 상위 128비트 (token1)
    """
    right: int
    left: int


class LeftRightSigned(NamedTuple):
    """uint256을 두 개의 int128로 나눈 값 (2의 보수)"""
    right: int
    left: int


@dataclass(frozen=True)
class PositionBalance:
    """민트 시점 스냅샷 + 포지션 크기

    비트 레이아웃 (LSB부터):
    - positionSize: 0-127
    - utilization0: 128-143 (bps, 10000 = 100%)
    - utilization1: 144-159
    - tickAtMint: 160-183 (int24)
    - timestampAtMint: 184-215 (uint32)
    - blockAtMint: 216-254 (uint39)
    - swapAtMint: 255
    """
    position_size: int
    utilization0: int
    utilization1: int
    tick_at_mint: int
    timestamp_at_mint: int
    block_at_mint: int
    swap_at_mint: bool


@dataclass(frozen=True)
class TokenIdLeg:
    """TokenId의 레그 하나

    - index: 레그 슬롯 (0-3)
    - asset: 옵션 기초자산 (0 = token0, 1 = token1)
    - option_ratio: 계약 배수 (1-127, 0이면 빈 슬롯)
    - is_long: True면 유동성 제거 (롱), False면 유동성 공급 (숏)
    - token_type: 커버/청산 토큰 (0 = token0, 1 = token1)
    - risk_partner: 위험 상쇄 파트너 레그 index (0-3, 자기 자신이면 단독)
    - strike: 범위 중심 틱 (int24)
    - width: 틱 간격 단위 범위 폭 (0-4095, 0이면 loan/credit)
    - tick_lower / tick_upper: tick spacing을 알 때만 채워짐
    """
    index: int
    asset: int
    option_ratio: int
    is_long: bool
    token_type: int
    risk_partner: int
    strike: int
    width: int
    tick_lower: Optional[int] = None
    tick_upper: Optional[int] = None

    @property
    def has_bounds(self) -> bool:
        return self.tick_lower is not None and self.tick_upper is not None

    def without_bounds(self) -> "TokenIdLeg":
        """tick 경계를 제거한 사본 (인코딩 입력 비교용)"""
        return TokenIdLeg(
            index=self.index,
            asset=self.asset,
            option_ratio=self.option_ratio,
            is_long=self.is_long,
            token_type=self.token_type,
            risk_partner=self.risk_partner,
            strike=self.strike,
            width=self.width,
        )


class DecodedPosition(NamedTuple):
    """decode_position() 결과"""
    pool_id: int
    legs: Tuple[TokenIdLeg, ...]


@dataclass(frozen=True)
class TokenIdInfo:
    """TokenId 전체 디코딩 결과 (poolId 하위 필드 포함)"""
    token_id: int
    pool_id: int
    pool_address_bits: int
    vegoid: int
    tick_spacing: int
    legs: Tuple[TokenIdLeg, ...]

    @property
    def leg_count(self) -> int:
        return len(self.legs)


class PositionGreeks(NamedTuple):
    """포지션 그릭스 (부호 있는 정수, 포지션 크기의 고정소수점 스케일)"""
    value: int
    delta: int
    gamma: int


@dataclass(frozen=True)
class HedgeLeg:
    """델타 헤지용 레그 파라미터"""
    asset: int
    option_ratio: int
    is_long: bool
    token_type: int
    risk_partner: int
    strike: int
    width: int


@dataclass(frozen=True)
class DeltaHedgeResult:
    """get_delta_hedge_params() 결과

    - hedge_type: 항상 "loan" (width 0 숏 레그)
    - swap_at_mint: 민트 시점 스왑 여부 (헤지는 항상 True)
    """
    current_delta: int
    target_delta: int
    delta_adjustment: int
    hedge_amount: int
    hedge_leg: HedgeLeg
    hedge_type: str
    swap_at_mint: bool


@dataclass(frozen=True)
class AccountPosition:
    """계정 그릭스 계산에 쓰는 포지션 하나

    - legs: decode_position()이 반환한 레그
    - tick_at_mint / position_size: PositionBalance에서 꺼낸 값
    """
    token_id: int
    legs: Tuple[TokenIdLeg, ...]
    tick_at_mint: int
    position_size: int


class PositionGreeksCurve(NamedTuple):
    """포지션 하나의 틱별 그릭스 (at_ticks 순서)"""
    token_id: int
    value: Tuple[int, ...]
    delta: Tuple[int, ...]
    gamma: Tuple[int, ...]


@dataclass(frozen=True)
class AccountGreeksCurve:
    """account_greeks() 결과

    total_* 는 모든 포지션의 합 + 담보 (gamma는 담보 기여 없음)
    """
    total_value: Tuple[int, ...]
    total_delta: Tuple[int, ...]
    total_gamma: Tuple[int, ...]
    position_count: int
    positions: Tuple[PositionGreeksCurve, ...]


@dataclass(frozen=True)
class TokenFlow:
    """트랜잭션 전후 토큰 잔고 변화 (최소 단위 정수)"""
    delta0: int
    delta1: int
    balance_before0: int
    balance_before1: int
    balance_after0: int
    balance_after1: int


class FormattedTokenFlow(NamedTuple):
    """format_token_flow() 결과 (delta는 부호 포함)"""
    delta0: str
    delta1: str
    balance_before0: str
    balance_before1: str
    balance_after0: str
    balance_after1: str


class TokenListId(NamedTuple):
    """'chainId:address' 토큰 리스트 ID (address는 소문자)"""
    chain_id: int
    address: str
