from datetime import datetime
from typing import Dict, Any, List

from codehub.database import models
from codehub.repositories.interfaces import IProjectRepository, IProjectFileRepository, IUnitOfWork
from codehub.services.access import get_owned_project
from codehub.services.exceptions import (
    ProjectFileNotFoundError, DuplicatePathError, EssentialFileError
)
from codehub.utils.html_renderer import INDEX_FILE_NAME
from codehub.utils.logger import logger
from codehub.utils.serialization import serialize_file
from codehub.utils.validations import validate_file_name, validate_file_content, content_size

class FileService:
    """프로젝트의 작업 사본(live file set)에 대한 CRUD를 제공합니다."""

    def __init__(self, file_repo: IProjectFileRepository, project_repo: IProjectRepository, uow: IUnitOfWork):
        self.file_repo = file_repo
        self.project_repo = project_repo
        self.uow = uow

    def list_files(self, project_id: int, owner_id: int) -> List[Dict[str, Any]]:
        """프로젝트의 모든 파일을 이름 순으로 조회합니다."""
        get_owned_project(self.project_repo, project_id, owner_id)
        return [serialize_file(f) for f in self.file_repo.list_by_project_id(project_id)]

    def get_file(self, project_id: int, file_id: int, owner_id: int) -> Dict[str, Any]:
        """
        Raises:
            ProjectFileNotFoundError: 프로젝트에 해당 파일이 없을 때.
        """
        get_owned_project(self.project_repo, project_id, owner_id)
        file = self.file_repo.find_by_id_and_project_id(file_id, project_id)
        if not file:
            raise ProjectFileNotFoundError(f"File with id '{file_id}' not found.")
        return serialize_file(file)

    def create_file(self, project_id: int, owner_id: int, name: str, content: str) -> Dict[str, Any]:
        """
        프로젝트에 새 파일을 추가합니다. 경로는 파일 이름과 같습니다.

        Args:
            project_id: 파일을 추가할 프로젝트의 ID.
            owner_id: 요청한 사용자의 ID. 프로젝트 소유자여야 합니다.
            name: 파일 이름. 확장자로 파일 유형(html/css/js)이 결정됩니다.
            content: 파일 내용.

        Returns:
            생성된 파일 정보를 담은 딕셔너리.

        Raises:
            InvalidNameError: 파일 이름이 규칙에 맞지 않을 때.
            InvalidContentError: 내용이 크기 제한을 넘을 때.
            DuplicatePathError: 같은 경로의 파일이 이미 있을 때.
        """
        file_type = validate_file_name(name)
        validate_file_content(content, file_type)

        with self.uow.transaction():
            project = get_owned_project(self.project_repo, project_id, owner_id, for_update=True)
            if self.file_repo.find_by_path_and_project_id(name, project_id):
                raise DuplicatePathError(f"File '{name}' already exists in this project.")

            now = datetime.now()
            new_file = models.ProjectFile(
                project_id=project_id,
                name=name,
                path=name,
                content=content,
                file_type=file_type,
                size=content_size(content),
                created_at=now,
                updated_at=now
            )
            created_file = self.file_repo.create(new_file)
            self._touch_project(project, now)

        logger.info("File '%s' created in project %s.", name, project_id)
        return serialize_file(created_file)

    def update_file(self, project_id: int, file_id: int, owner_id: int, content: str) -> Dict[str, Any]:
        """
        파일 내용을 교체하고 크기를 다시 계산합니다.

        Raises:
            ProjectFileNotFoundError: 프로젝트에 해당 파일이 없을 때.
            InvalidContentError: 내용이 크기 제한을 넘을 때.
        """
        with self.uow.transaction():
            project = get_owned_project(self.project_repo, project_id, owner_id, for_update=True)
            file = self.file_repo.find_by_id_and_project_id(file_id, project_id)
            if not file:
                raise ProjectFileNotFoundError(f"File with id '{file_id}' not found.")
            validate_file_content(content, file.file_type)

            now = datetime.now()
            file.content = content
            file.size = content_size(content)
            file.updated_at = now
            updated_file = self.file_repo.update(file)
            self._touch_project(project, now)

        return serialize_file(updated_file)

    def delete_file(self, project_id: int, file_id: int, owner_id: int) -> bool:
        """
        파일을 삭제합니다. index.html은 이름만으로 판단하여 항상 삭제를 거부합니다.

        Raises:
            ProjectFileNotFoundError: 프로젝트에 해당 파일이 없을 때.
            EssentialFileError: index.html을 삭제하려고 할 때.
        """
        with self.uow.transaction():
            project = get_owned_project(self.project_repo, project_id, owner_id, for_update=True)
            file = self.file_repo.find_by_id_and_project_id(file_id, project_id)
            if not file:
                raise ProjectFileNotFoundError(f"File with id '{file_id}' not found.")
            if file.name == INDEX_FILE_NAME:
                raise EssentialFileError("Cannot delete essential project files")

            self.file_repo.delete(file)
            self._touch_project(project, datetime.now())

        logger.info("File %s deleted from project %s.", file_id, project_id)
        return True

    def _touch_project(self, project: models.Project, now: datetime):
        project.updated_at = now
        self.project_repo.update(project)
