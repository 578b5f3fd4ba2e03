from abc import ABC, abstractmethod
from typing import List, Optional
from codehub.database import models

class IDeploymentRepository(ABC):
    @abstractmethod
    def create(self, deployment_model: models.Deployment) -> models.Deployment:
        """새로운 배포 기록을 생성합니다."""
        pass

    @abstractmethod
    def find_by_url(self, url: str) -> Optional[models.Deployment]:
        """공개 URL로 배포 기록을 조회합니다."""
        pass

    @abstractmethod
    def list_by_project_id(self, project_id: int) -> List[models.Deployment]:
        """특정 프로젝트의 배포 기록을 최신순으로 조회합니다. (커밋 정보 포함)"""
        pass

    @abstractmethod
    def update_status(self, deployment: models.Deployment, status: str) -> models.Deployment:
        """배포 상태를 변경합니다. (pending -> deployed | failed)"""
        pass
