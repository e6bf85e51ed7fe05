"""
Configuration settings for panoptic_v2

환경 변수 (.env 지원)에서 설정을 읽습니다.
코어 함수는 설정을 암묵적으로 읽지 않으며, 호출자가 필요한 값을 꺼내 넘깁니다.
"""
import logging
import os
from typing import Optional

from dotenv import load_dotenv

from .data.registry import PoolRegistry

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Library settings"""

    # 풀 레지스트리 YAML 경로 (없으면 TokenId에 들어 있는 tick spacing 사용)
    POOL_REGISTRY_PATH: str = os.getenv("PANOPTIC_POOL_REGISTRY_PATH", "")

    # 로깅
    LOG_LEVEL: str = os.getenv("PANOPTIC_LOG_LEVEL", "WARNING").upper()

    # 표시용 기본 소수점 자릿수 (포매터는 이 값을 직접 읽지 않음)
    DISPLAY_PRECISION: int = int(os.getenv("PANOPTIC_DISPLAY_PRECISION", 4))

    def load_pool_registry(self) -> Optional[PoolRegistry]:
        """POOL_REGISTRY_PATH가 설정되어 있으면 레지스트리 로드"""
        if not self.POOL_REGISTRY_PATH:
            return None
        return PoolRegistry.from_yaml(self.POOL_REGISTRY_PATH)


# Create global settings instance
settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """panoptic_v2 로거 레벨 설정 (NullHandler 외 핸들러가 없으면 StreamHandler 추가)"""
    logger = logging.getLogger("panoptic_v2")
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    if not any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(handler)
