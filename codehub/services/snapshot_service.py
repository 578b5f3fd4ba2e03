from datetime import datetime
from typing import Dict, Any, List

from codehub.database import models
from codehub.repositories.interfaces import (
    IProjectRepository, IProjectFileRepository, ICommitRepository, IUnitOfWork
)
from codehub.services.access import get_owned_project
from codehub.services.exceptions import (
    CommitNotFoundError, EmptyProjectError, ConsistencyError, StorageError
)
from codehub.utils.logger import logger
from codehub.utils.serialization import serialize_commit, serialize_commit_file
from codehub.utils.validations import validate_commit_message, content_size

class SnapshotService:
    """프로젝트 파일 전체를 불변 커밋으로 저장하고, 커밋을 작업 사본으로 복원합니다."""

    def __init__(
        self,
        project_repo: IProjectRepository,
        file_repo: IProjectFileRepository,
        commit_repo: ICommitRepository,
        uow: IUnitOfWork
    ):
        self.project_repo = project_repo
        self.file_repo = file_repo
        self.commit_repo = commit_repo
        self.uow = uow

    def create_commit(self, project_id: int, author_id: int, message: str) -> Dict[str, Any]:
        """
        현재 작업 사본 전체를 새 커밋으로 저장합니다.

        커밋 행을 먼저 만든 뒤 파일마다 CommitFile을 추가합니다. 파일 내용은 값으로 복사되므로
        이후의 파일 수정이 이 커밋에 영향을 주지 않습니다. CommitFile 추가가 실패하면
        파일 없는 커밋이 남지 않도록 방금 만든 커밋을 삭제하는 보상 조치가 반드시 실행됩니다.

        Args:
            project_id: 커밋할 프로젝트의 ID.
            author_id: 커밋하는 사용자의 ID. 프로젝트 소유자여야 합니다.
            message: 커밋 메시지. 앞뒤 공백을 제거한 뒤 1~200자여야 합니다.

        Returns:
            생성된 커밋 정보와 file_count를 담은 딕셔너리.

        Raises:
            InvalidMessageError: 커밋 메시지가 비어 있거나 너무 길 때.
            EmptyProjectError: 프로젝트에 파일이 하나도 없을 때.
            StorageError: 커밋 파일 저장에 실패했을 때. (커밋은 삭제됨)
            ConsistencyError: 보상 조치로 커밋을 삭제하는 것마저 실패했을 때.
        """
        trimmed_message = validate_commit_message(message)

        with self.uow.transaction():
            project = get_owned_project(self.project_repo, project_id, author_id, for_update=True)
            files = self.file_repo.list_by_project_id(project_id)
            if not files:
                raise EmptyProjectError("No files to commit")

            commit = self.commit_repo.create(models.Commit(
                project_id=project_id,
                author_id=author_id,
                message=trimmed_message,
                parent_commit_id=project.last_commit_id,
                created_at=datetime.now()
            ))

            commit_files = [
                models.CommitFile(
                    commit_id=commit.id,
                    source_file_id=f.id,
                    file_name=f.name,
                    file_path=f.path,
                    file_content=f.content,
                    file_type=f.file_type
                )
                for f in files
            ]
            try:
                self.commit_repo.add_files(commit_files)
            except Exception as e:
                logger.error("Creating files for commit %s failed: %s. Starting rollback...", commit.id, e)
                self._rollback_commit_creation(commit)
                raise StorageError(f"Failed to create commit files for project '{project_id}'.") from e

            project.last_commit_id = commit.id
            project.updated_at = datetime.now()
            self.project_repo.update(project)

        logger.info("Commit %s created in project %s with %d files.", commit.id, project_id, len(commit_files))
        return serialize_commit(commit, file_count=len(commit_files))

    def _rollback_commit_creation(self, commit: models.Commit):
        try:
            self.commit_repo.delete(commit)
        except Exception as e:
            logger.critical("Rollback failed: commit %s could not be deleted: %s", commit.id, e)
            raise ConsistencyError(f"Failed to roll back empty commit '{commit.id}'.") from e
        logger.warning("Rollback: commit %s deleted.", commit.id)

    def restore_commit(self, project_id: int, commit_id: int, owner_id: int) -> Dict[str, Any]:
        """
        커밋의 파일로 작업 사본 전체를 교체합니다.

        현재 파일을 모두 삭제하고 커밋의 파일을 새로 추가하는 과정은 하나의 트랜잭션으로 처리되어,
        일부만 교체된 상태가 남지 않습니다. 이미 해당 커밋이 last_commit_id이면 아무것도 바꾸지 않습니다.

        Returns:
            commit_id, already_up_to_date, files_restored, files_added, files_removed를 담은 딕셔너리.

        Raises:
            CommitNotFoundError: 커밋이 없거나 다른 프로젝트의 커밋일 때.
            ConsistencyError: 커밋에 파일이 하나도 없을 때.
            StorageError: 파일 교체에 실패했을 때. (전체 롤백됨)
        """
        with self.uow.transaction():
            project = get_owned_project(self.project_repo, project_id, owner_id, for_update=True)
            commit = self.commit_repo.find_by_id_and_project_id(commit_id, project_id)
            if not commit:
                raise CommitNotFoundError(f"Commit with id '{commit_id}' not found.")

            if project.last_commit_id == commit.id:
                return {
                    "message": "Project is already at this commit",
                    "commit_id": commit.id,
                    "already_up_to_date": True,
                    "files_restored": 0,
                    "files_added": 0,
                    "files_removed": 0,
                }

            commit_files = self.commit_repo.list_files(commit.id)
            if not commit_files:
                raise ConsistencyError(f"Commit '{commit.id}' has no files.")

            now = datetime.now()
            restored_files = [
                models.ProjectFile(
                    project_id=project_id,
                    name=cf.file_name,
                    path=cf.file_path,
                    content=cf.file_content or "",
                    file_type=cf.file_type,
                    size=content_size(cf.file_content or ""),
                    created_at=now,
                    updated_at=now
                )
                for cf in commit_files
            ]
            try:
                files_removed = self.file_repo.delete_by_project_id(project_id)
                self.file_repo.add_all(restored_files)
            except Exception as e:
                logger.error("Restoring commit %s into project %s failed: %s", commit.id, project_id, e)
                raise StorageError(f"Failed to restore commit '{commit.id}'.") from e

            project.last_commit_id = commit.id
            project.updated_at = now
            self.project_repo.update(project)

        logger.info("Project %s restored to commit %s (%d removed, %d added).",
                    project_id, commit.id, files_removed, len(restored_files))
        return {
            "message": "Project restored to commit successfully",
            "commit_id": commit.id,
            "already_up_to_date": False,
            "files_restored": len(restored_files),
            "files_added": len(restored_files),
            "files_removed": files_removed,
        }

    def list_commits(self, project_id: int, owner_id: int) -> List[Dict[str, Any]]:
        """커밋 목록을 최신순으로 조회합니다. 파일 내용 없이 파일 개수만 포함합니다."""
        get_owned_project(self.project_repo, project_id, owner_id)
        return [
            serialize_commit(commit, file_count=file_count)
            for commit, file_count in self.commit_repo.list_with_file_counts(project_id)
        ]

    def get_commit(self, project_id: int, commit_id: int, owner_id: int) -> Dict[str, Any]:
        """
        커밋 하나를 파일 스냅샷과 함께 조회합니다.

        Raises:
            CommitNotFoundError: 커밋이 없거나 다른 프로젝트의 커밋일 때.
        """
        get_owned_project(self.project_repo, project_id, owner_id)
        commit = self.commit_repo.find_by_id_and_project_id(commit_id, project_id)
        if not commit:
            raise CommitNotFoundError(f"Commit with id '{commit_id}' not found.")
        files = self.commit_repo.list_files(commit.id)
        data = serialize_commit(commit, file_count=len(files))
        data["files"] = [serialize_commit_file(f) for f in files]
        return data
