from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from codehub.database import models

class ICommitRepository(ABC):
    @abstractmethod
    def create(self, commit_model: models.Commit) -> models.Commit:
        """새로운 커밋 행을 생성합니다. 커밋 파일은 add_files로 따로 추가합니다."""
        pass

    @abstractmethod
    def add_files(self, commit_files: List[models.CommitFile]) -> List[models.CommitFile]:
        """
        커밋에 속한 파일들을 한 번에 추가합니다.
        실패하면 아무것도 남기지 않고 예외를 전파해야 합니다. (호출자가 보상 조치를 수행합니다)
        """
        pass

    @abstractmethod
    def find_by_id_and_project_id(self, commit_id: int, project_id: int) -> Optional[models.Commit]:
        """프로젝트 내에서 ID로 특정 커밋을 조회합니다."""
        pass

    @abstractmethod
    def list_files(self, commit_id: int) -> List[models.CommitFile]:
        """특정 커밋에 속한 파일 스냅샷을 조회합니다."""
        pass

    @abstractmethod
    def list_with_file_counts(self, project_id: int) -> List[Tuple[models.Commit, int]]:
        """
        특정 프로젝트의 커밋을 최신순으로 조회합니다.
        파일 내용은 읽지 않고, 커밋마다 파일 개수만 집계합니다.

        Returns:
            (커밋, 파일 개수) 튜플의 리스트.
        """
        pass

    @abstractmethod
    def count_by_project_id(self, project_id: int) -> int:
        """특정 프로젝트에 속한 커밋의 개수를 조회합니다."""
        pass

    @abstractmethod
    def delete(self, commit: models.Commit) -> bool:
        """커밋과 그 파일들을 삭제합니다. 커밋 생성 실패 시 보상 조치로만 사용됩니다."""
        pass
