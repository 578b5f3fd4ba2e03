# codehub/services/access.py
from codehub.database import models
from codehub.repositories.interfaces import IProjectRepository
from codehub.services.exceptions import ProjectNotFoundError, AuthorizationError


def get_owned_project(project_repo: IProjectRepository, project_id: int, owner_id: int, for_update: bool = False) -> models.Project:
    """
    소유자만 접근할 수 있는 작업을 위해 프로젝트를 조회합니다.

    비공개 프로젝트는 존재 여부를 드러내지 않도록 소유자가 아니면 찾을 수 없는 것으로 처리하고,
    공개 프로젝트는 권한 없음으로 처리합니다.

    Args:
        project_repo: 프로젝트 리포지토리.
        project_id: 조회할 프로젝트의 ID.
        owner_id: 요청한 사용자의 내부 ID.
        for_update: True이면 행 잠금을 걸고 조회합니다. 쓰기 작업에서 사용합니다.

    Raises:
        ProjectNotFoundError: 프로젝트가 없거나, 소유자가 아닌 사용자가 비공개 프로젝트에 접근할 때.
        AuthorizationError: 소유자가 아닌 사용자가 공개 프로젝트를 변경하려고 할 때.
    """
    if for_update:
        project = project_repo.find_by_id_for_update(project_id)
    else:
        project = project_repo.find_by_id(project_id)

    if not project:
        raise ProjectNotFoundError(f"Project with id '{project_id}' not found.")
    if project.owner_id != owner_id:
        if project.is_public:
            raise AuthorizationError(f"Only the owner can modify project '{project_id}'.")
        raise ProjectNotFoundError(f"Project with id '{project_id}' not found.")
    return project
