"""배포 URL 생성 유틸리티."""
import re
import time
from typing import Optional

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def generate_slug(name: str) -> str:
    """프로젝트 이름으로 URL에 쓸 수 있는 slug를 만듭니다."""
    slug = name.lower()
    # 공백과 밑줄은 하이픈으로
    slug = re.sub(r'[\s_]+', '-', slug)
    slug = re.sub(r'[^a-z0-9-]', '', slug)
    slug = re.sub(r'-+', '-', slug)
    slug = slug.strip('-')
    return slug or 'project'


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def time_token(now_ms: Optional[int] = None) -> str:
    """현재 시각(밀리초)을 36진수로 표현한 토큰입니다."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return to_base36(now_ms)


def build_deployment_url(base_url: str, slug: str) -> str:
    return f"{base_url.rstrip('/')}/deploy/{slug}"
