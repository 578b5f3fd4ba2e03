from datetime import datetime
from typing import Optional

from codehub.database import models
from codehub.repositories.interfaces import IUserRepository, IUnitOfWork
from codehub.services.exceptions import AuthenticationError
from codehub.utils.logger import logger

class IdentityService:
    """외부 인증 제공자가 발급한 사용자 식별자를 내부 사용자 ID로 변환합니다."""

    def __init__(self, user_repo: IUserRepository, uow: IUnitOfWork):
        self.user_repo = user_repo
        self.uow = uow

    def resolve_user(self, external_id: Optional[str]) -> int:
        """
        외부 사용자 식별자에 해당하는 내부 사용자 ID를 반환합니다. 처음 보는 식별자면 사용자를 새로 만듭니다.

        Raises:
            AuthenticationError: 식별자가 없거나 비어 있을 때.
        """
        if not external_id or not external_id.strip():
            raise AuthenticationError("Authentication required")
        external_id = external_id.strip()

        with self.uow.transaction():
            user = self.user_repo.find_by_external_id(external_id)
            if not user:
                user = self.user_repo.create(models.User(external_id=external_id, created_at=datetime.now()))
                logger.info("User %s registered for external id '%s'.", user.id, external_id)
        return user.id
