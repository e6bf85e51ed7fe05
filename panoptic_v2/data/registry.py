"""
Pool Registry - poolId → tickSpacing 조회

TokenId에는 poolId만 들어 있으므로 레그의 tick 경계를 계산하려면
풀별 tick spacing을 알아야 합니다. 레지스트리는 호출자가 주입하는 의존성이며
코어는 전역 레지스트리를 갖지 않습니다.

YAML 형식:
    pools:
      - pool_id: 0x000a04...   # 64비트 poolId (정수 또는 16진 문자열)
        tick_spacing: 10
        name: WETH/USDC 0.05%  # 선택
"""

import logging
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional, Union

import yaml

from ..constants import UINT64_MAX, TICK_SPACING_SIZE
from ..errors import UnknownPoolError, PanopticError

logger = logging.getLogger(__name__)


def _parse_int(value: Union[int, str]) -> int:
    if isinstance(value, int):
        return value
    return int(str(value), 0)


class PoolRegistry(Mapping):
    """poolId → tickSpacing 매핑

    Example:
        >>> registry = PoolRegistry({pool_id: 60})
        >>> registry.tick_spacing(pool_id)
        60
    """

    def __init__(
        self,
        spacings: Optional[Mapping[int, int]] = None,
        names: Optional[Mapping[int, str]] = None
    ):
        self._spacings: Dict[int, int] = {}
        self._names: Dict[int, str] = dict(names or {})
        for pool_id, spacing in (spacings or {}).items():
            self.register(pool_id, spacing)

    def register(self, pool_id: int, tick_spacing: int, name: Optional[str] = None) -> None:
        """풀 등록 (같은 poolId는 덮어씀)"""
        if pool_id < 0 or pool_id > UINT64_MAX:
            raise PanopticError(f"poolId가 uint64 범위를 벗어났습니다: {pool_id}")
        if tick_spacing <= 0 or tick_spacing >= 1 << TICK_SPACING_SIZE:
            raise PanopticError(f"잘못된 tick spacing: {tick_spacing}")
        self._spacings[pool_id] = tick_spacing
        if name:
            self._names[pool_id] = name

    def tick_spacing(self, pool_id: int) -> int:
        """poolId의 tick spacing

        Raises:
            UnknownPoolError: 등록되지 않은 poolId
        """
        try:
            return self._spacings[pool_id]
        except KeyError:
            raise UnknownPoolError(pool_id) from None

    def name(self, pool_id: int) -> Optional[str]:
        return self._names.get(pool_id)

    def __getitem__(self, pool_id: int) -> int:
        # Mapping 프로토콜 (in, get)은 KeyError를 기대함
        return self._spacings[pool_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._spacings)

    def __len__(self) -> int:
        return len(self._spacings)

    def __call__(self, pool_id: int) -> int:
        return self.tick_spacing(pool_id)

    def __repr__(self) -> str:
        return f"PoolRegistry({len(self)} pools)"

    @classmethod
    def from_dict(cls, data: dict) -> "PoolRegistry":
        """{"pools": [{"pool_id": ..., "tick_spacing": ..., "name": ...}, ...]}"""
        registry = cls()
        for entry in data.get("pools") or []:
            registry.register(
                _parse_int(entry["pool_id"]),
                int(entry["tick_spacing"]),
                entry.get("name"),
            )
        return registry

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "PoolRegistry":
        """YAML 파일에서 레지스트리 로드"""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        registry = cls.from_dict(data)
        logger.debug("풀 레지스트리 로드: %s (%d pools)", path, len(registry))
        return registry
