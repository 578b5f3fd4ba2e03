from abc import ABC, abstractmethod
from typing import Optional
from codehub.database import models

class IUserRepository(ABC):
    @abstractmethod
    def create(self, user_model: models.User) -> models.User:
        """새로운 사용자를 데이터베이스에 생성합니다."""
        pass

    @abstractmethod
    def find_by_external_id(self, external_id: str) -> Optional[models.User]:
        """외부 인증 제공자의 식별자로 사용자를 조회합니다."""
        pass
