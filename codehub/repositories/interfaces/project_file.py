from abc import ABC, abstractmethod
from typing import List, Optional
from codehub.database import models

class IProjectFileRepository(ABC):
    @abstractmethod
    def create(self, file_model: models.ProjectFile) -> models.ProjectFile:
        """새로운 파일을 데이터베이스에 생성합니다."""
        pass

    @abstractmethod
    def add_all(self, file_models: List[models.ProjectFile]) -> List[models.ProjectFile]:
        """
        여러 파일을 한 번에 추가합니다.
        일부만 저장되는 일이 없도록 전부 성공하거나 전부 실패해야 합니다.
        """
        pass

    @abstractmethod
    def find_by_id_and_project_id(self, file_id: int, project_id: int) -> Optional[models.ProjectFile]:
        """프로젝트 내에서 ID로 특정 파일을 조회합니다."""
        pass

    @abstractmethod
    def find_by_path_and_project_id(self, path: str, project_id: int) -> Optional[models.ProjectFile]:
        """프로젝트 내에서 경로로 특정 파일을 조회합니다."""
        pass

    @abstractmethod
    def list_by_project_id(self, project_id: int) -> List[models.ProjectFile]:
        """특정 프로젝트에 속한 모든 파일을 이름 순으로 조회합니다."""
        pass

    @abstractmethod
    def count_by_project_id(self, project_id: int) -> int:
        """특정 프로젝트에 속한 파일의 개수를 조회합니다."""
        pass

    @abstractmethod
    def update(self, file_model: models.ProjectFile) -> models.ProjectFile:
        """변경된 파일 정보를 반영합니다."""
        pass

    @abstractmethod
    def delete(self, file_model: models.ProjectFile) -> bool:
        """특정 파일을 데이터베이스에서 삭제합니다."""
        pass

    @abstractmethod
    def delete_by_project_id(self, project_id: int) -> int:
        """특정 프로젝트의 모든 파일을 삭제하고, 삭제된 파일 수를 반환합니다."""
        pass
