"""
Panoptic V2 상수 정의

온체인 컨트랙트가 고정한 상수와 비트 레이아웃:
- Q96/Q128/Q192: 고정소수점 인코딩 (2^96, 2^128, 2^192)
- MIN_TICK/MAX_TICK: 틱 범위
- WAD: 10^18 = 1.0
- TokenId / 레그 / PositionBalance 비트 오프셋
"""

from typing import Dict

# Fixed-point 인코딩 상수
Q96: int = 2 ** 96
Q128: int = 2 ** 128
Q192: int = 2 ** 192

# WAD 고정소수점 (1e18 = 1.0)
WAD: int = 10 ** 18

# 틱 범위 상수
MIN_TICK: int = -887272
MAX_TICK: int = 887272

# TickMath sqrtPriceX96 경계 (MIN_TICK, MAX_TICK에서의 값)
MIN_SQRT_RATIO: int = 4295128739
MAX_SQRT_RATIO: int = 1461446703485210103287273052203988822378723970342

# uint 최대값
UINT256_MAX: int = 2 ** 256 - 1
UINT128_MAX: int = 2 ** 128 - 1
UINT64_MAX: int = 2 ** 64 - 1

# 수수료 티어 (basis points의 1/100 단위, Uniswap 표기)
FEE_TIERS: Dict[int, str] = {
    100: "0.01%",
    500: "0.05%",
    3000: "0.30%",
    10000: "1.00%",
}

# 각 수수료 티어별 틱 간격
TICK_SPACINGS: Dict[int, int] = {
    100: 1,
    500: 10,
    3000: 60,
    10000: 200,
}

# === TokenId 레이아웃 ===
# [legs: 4 x 48 bits][poolId: 64 bits]
POOL_ID_SIZE: int = 64
LEG_SIZE: int = 48
MAX_LEGS: int = 4

# poolId 내부: [tickSpacing 16][vegoid 8][pool address 하위 40]
POOL_ADDRESS_SIZE: int = 40
VEGOID_STARTING_BIT: int = 40
VEGOID_SIZE: int = 8
TICK_SPACING_STARTING_BIT: int = 48
TICK_SPACING_SIZE: int = 16
DEFAULT_VEGOID: int = 4

# 레그 내부 (레그 시작 비트 기준)
RATIO_BIT: int = 0
RATIO_SIZE: int = 7
ASSET_BIT: int = 7
ASSET_SIZE: int = 1
IS_LONG_BIT: int = 8
IS_LONG_SIZE: int = 1
TOKEN_TYPE_BIT: int = 9
TOKEN_TYPE_SIZE: int = 1
RISK_PARTNER_BIT: int = 10
RISK_PARTNER_SIZE: int = 2
STRIKE_BIT: int = 12
STRIKE_SIZE: int = 24
WIDTH_BIT: int = 36
WIDTH_SIZE: int = 12

# 레그 필드 한계
MAX_RATIO: int = 127
MAX_WIDTH: int = 4095
MAX_STRIKE: int = 2 ** 23 - 1  # int24 최대
MIN_STRIKE: int = -(2 ** 23)   # int24 최소

# === PositionBalance 레이아웃 ===
POSITION_SIZE_BIT: int = 0
POSITION_SIZE_SIZE: int = 128
UTILIZATION0_BIT: int = 128
UTILIZATION1_BIT: int = 144
UTILIZATION_SIZE: int = 16
TICK_AT_MINT_BIT: int = 160
TICK_AT_MINT_SIZE: int = 24
TIMESTAMP_AT_MINT_BIT: int = 184
TIMESTAMP_AT_MINT_SIZE: int = 32
BLOCK_AT_MINT_BIT: int = 216
BLOCK_AT_MINT_SIZE: int = 39
SWAP_AT_MINT_BIT: int = 255

# LeftRight 패킹: right = 하위 128비트 (token0), left = 상위 128비트 (token1)
LEFT_RIGHT_SLOT_SIZE: int = 128

# 십진 문자열 파싱 한도 (자릿수, 지수 절댓값)
MAX_PARSE_DIGITS: int = 1000
MAX_PARSE_EXPONENT: int = 1000
