from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from codehub.database import models

class IProjectRepository(ABC):
    @abstractmethod
    def create(self, project_model: models.Project) -> models.Project:
        """새로운 프로젝트를 데이터베이스에 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, project_id: int) -> Optional[models.Project]:
        """고유 ID로 특정 프로젝트를 조회합니다."""
        pass

    @abstractmethod
    def find_by_id_for_update(self, project_id: int) -> Optional[models.Project]:
        """
        고유 ID로 프로젝트를 조회하면서 행 잠금(SELECT ... FOR UPDATE)을 겁니다.
        같은 프로젝트에 대한 커밋, 복원, 파일 수정이 서로 직렬화되도록 하는 데 사용됩니다.
        """
        pass

    @abstractmethod
    def list_by_owner_id(self, owner_id: int) -> List[models.Project]:
        """특정 사용자가 소유한 프로젝트 목록을 최근 수정 순으로 조회합니다."""
        pass

    @abstractmethod
    def count_by_owner_id(self, owner_id: int) -> int:
        """특정 사용자가 소유한 프로젝트의 개수를 조회합니다."""
        pass

    @abstractmethod
    def list_public_with_file_counts(self) -> List[Tuple[models.Project, int]]:
        """공개 프로젝트와 각 프로젝트의 파일 개수를 최근 수정 순으로 조회합니다."""
        pass

    @abstractmethod
    def update(self, project: models.Project) -> models.Project:
        """변경된 프로젝트 정보를 반영합니다."""
        pass

    @abstractmethod
    def delete(self, project: models.Project) -> bool:
        """프로젝트와 그에 종속된 파일, 커밋, 배포를 모두 삭제합니다."""
        pass
