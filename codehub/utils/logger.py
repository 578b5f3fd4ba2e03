"""애플리케이션 로깅 설정."""
import logging
import sys

from codehub.config import settings

_level = logging.DEBUG if settings.environment == "development" else logging.INFO

logger = logging.getLogger("codehub")
logger.setLevel(_level)

handler = logging.StreamHandler(sys.stdout)
handler.setLevel(_level)
handler.setFormatter(logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
))

# 모듈이 여러 번 임포트되어도 핸들러가 중복 등록되지 않도록 합니다.
if not logger.handlers:
    logger.addHandler(handler)

logger.propagate = False

__all__ = ["logger"]
