from datetime import datetime
from typing import Dict, Any, List, Optional

from codehub.config import settings
from codehub.database import models
from codehub.repositories.interfaces import (
    IProjectRepository, IProjectFileRepository, ICommitRepository, IDeploymentRepository, IUnitOfWork
)
from codehub.services.access import get_owned_project
from codehub.services.snapshot_service import SnapshotService
from codehub.services.exceptions import (
    ProjectNotFoundError, CommitNotFoundError, AuthorizationError, QuotaExceededError,
    NoFilesToDeployError, NoIndexError, ValidationError, ConsistencyError, StorageError
)
from codehub.utils.html_renderer import render_html, from_commit_files
from codehub.utils.logger import logger
from codehub.utils.seed_files import generate_seed_files
from codehub.utils.serialization import serialize_project, serialize_file, serialize_deployment
from codehub.utils.slug import generate_slug, time_token, build_deployment_url
from codehub.utils.validations import validate_project_name, validate_description, content_size

_UNSET = object()

class ProjectService:
    """프로젝트 생성, 포크, 공개 여부 변경, 배포 등 프로젝트 생명주기를 관리합니다."""

    def __init__(
        self,
        project_repo: IProjectRepository,
        file_repo: IProjectFileRepository,
        commit_repo: ICommitRepository,
        deployment_repo: IDeploymentRepository,
        snapshot_service: SnapshotService,
        uow: IUnitOfWork
    ):
        """
        ProjectService를 초기화합니다.

        Args:
            project_repo: 프로젝트 데이터에 접근하기 위한 리포지토리.
            file_repo: 프로젝트 파일에 접근하기 위한 리포지토리 (시드 파일 생성, 포크 복사용).
            commit_repo: 배포할 커밋을 조회하기 위한 리포지토리.
            deployment_repo: 배포 기록을 저장하기 위한 리포지토리.
            snapshot_service: 커밋 없이 배포할 때 배포용 커밋을 만드는 서비스.
            uow: 트랜잭션 경계를 관리하는 UnitOfWork.
        """
        self.project_repo = project_repo
        self.file_repo = file_repo
        self.commit_repo = commit_repo
        self.deployment_repo = deployment_repo
        self.snapshot_service = snapshot_service
        self.uow = uow

    def create_project(self, owner_id: int, name: str, description: Optional[str] = None, is_public: bool = False) -> Dict[str, Any]:
        """
        새 프로젝트를 만들고 index.html, style.css, script.js 기본 파일 3개를 함께 생성합니다.

        Args:
            owner_id: 프로젝트를 소유할 사용자의 ID.
            name: 프로젝트 이름. 1~50자의 영문자, 숫자, 공백, 하이픈, 밑줄만 허용됩니다.
            description: 선택 사항인 프로젝트 설명 (최대 500자).
            is_public: 공개 여부.

        Returns:
            생성된 프로젝트 정보를 담은 딕셔너리.

        Raises:
            InvalidNameError: 프로젝트 이름이 규칙에 맞지 않을 때.
            InvalidDescriptionError: 설명이 너무 길 때.
            ValidationError: is_public가 bool이 아닐 때.
            QuotaExceededError: 사용자가 이미 최대 개수의 프로젝트를 가지고 있을 때.
        """
        project_name = validate_project_name(name)
        project_description = validate_description(description)
        if not isinstance(is_public, bool):
            raise ValidationError("is_public must be a boolean")

        with self.uow.transaction():
            self._check_quota(owner_id)

            now = datetime.now()
            project = self.project_repo.create(models.Project(
                owner_id=owner_id,
                name=project_name,
                description=project_description,
                is_public=is_public,
                created_at=now,
                updated_at=now
            ))
            for file_name, file_type, content in generate_seed_files(project.name):
                self.file_repo.create(models.ProjectFile(
                    project_id=project.id,
                    name=file_name,
                    path=file_name,
                    content=content,
                    file_type=file_type,
                    size=content_size(content),
                    created_at=now,
                    updated_at=now
                ))

        logger.info("Project %s ('%s') created for user %s.", project.id, project.name, owner_id)
        return serialize_project(project)

    def fork_project(self, source_project_id: int, new_owner_id: int) -> Dict[str, Any]:
        """
        공개 프로젝트를 복사하여 새 사용자 소유의 비공개 프로젝트를 만듭니다.

        모든 파일을 그대로 복사하며, 복사 도중 실패하면 새로 만든 프로젝트를 삭제하여
        호출자 입장에서는 전부 성공하거나 아무것도 생기지 않도록 합니다.

        Raises:
            ProjectNotFoundError: 원본 프로젝트가 없거나 비공개일 때.
            QuotaExceededError: 새 소유자가 이미 최대 개수의 프로젝트를 가지고 있을 때.
            StorageError: 파일 복사에 실패했을 때. (새 프로젝트는 삭제됨)
            ConsistencyError: 보상 조치로 새 프로젝트를 삭제하는 것마저 실패했을 때.
        """
        with self.uow.transaction():
            source = self.project_repo.find_by_id(source_project_id)
            if not source or not source.is_public:
                raise ProjectNotFoundError("Project not found or not public")
            self._check_quota(new_owner_id)

            source_files = self.file_repo.list_by_project_id(source.id)
            now = datetime.now()
            forked = self.project_repo.create(models.Project(
                owner_id=new_owner_id,
                name=f"{source.name} (Fork)",
                description=f"Forked from: {source.description}" if source.description else "Forked project",
                is_public=False,
                created_at=now,
                updated_at=now
            ))

            copies = [
                models.ProjectFile(
                    project_id=forked.id,
                    name=f.name,
                    path=f.path,
                    content=f.content,
                    file_type=f.file_type,
                    size=f.size,
                    created_at=now,
                    updated_at=now
                )
                for f in source_files
            ]
            try:
                self.file_repo.add_all(copies)
            except Exception as e:
                logger.error("Copying files into fork %s failed: %s. Starting rollback...", forked.id, e)
                self._rollback_fork(forked)
                raise StorageError(f"Failed to copy files of project '{source_project_id}'.") from e

        logger.info("Project %s forked into %s for user %s.", source_project_id, forked.id, new_owner_id)
        return serialize_project(forked)

    def _rollback_fork(self, forked: models.Project):
        try:
            self.project_repo.delete(forked)
        except Exception as e:
            logger.critical("Rollback failed: forked project %s could not be deleted: %s", forked.id, e)
            raise ConsistencyError(f"Failed to roll back forked project '{forked.id}'.") from e
        logger.warning("Rollback: forked project %s deleted.", forked.id)

    def set_visibility(self, project_id: int, owner_id: int, is_public: bool) -> Dict[str, Any]:
        """
        프로젝트의 공개 여부를 변경합니다. 이미 같은 값이면 아무것도 바꾸지 않습니다.

        Raises:
            ValidationError: is_public이 bool이 아닐 때.
            ProjectNotFoundError: 프로젝트가 없을 때.
            AuthorizationError: 소유자가 아닐 때.
        """
        if not isinstance(is_public, bool):
            raise ValidationError("is_public must be a boolean")

        with self.uow.transaction():
            project = get_owned_project(self.project_repo, project_id, owner_id, for_update=True)
            if project.is_public != is_public:
                project.is_public = is_public
                project.updated_at = datetime.now()
                self.project_repo.update(project)
                logger.info("Project %s visibility set to %s.", project_id, "public" if is_public else "private")

        return serialize_project(project)

    def deploy(self, project_id: int, owner_id: int, commit_id: Optional[int] = None) -> Dict[str, Any]:
        """
        커밋 하나를 공개 URL에 배포합니다.

        commit_id를 지정하지 않으면 현재 작업 사본으로 배포용 커밋을 먼저 만듭니다.
        배포 기록은 pending으로 생성된 뒤, 커밋 파일을 미리 렌더링해 보고 deployed 또는 failed로 바뀝니다.
        성공한 경우에만 Project.deployed_url이 새 URL로 갱신됩니다.

        Args:
            project_id: 배포할 프로젝트의 ID.
            owner_id: 요청한 사용자의 ID. 프로젝트 소유자여야 합니다.
            commit_id: 배포할 커밋의 ID. 생략하면 현재 파일로 새 커밋을 만듭니다.

        Returns:
            배포 기록 정보를 담은 딕셔너리.

        Raises:
            NoFilesToDeployError: commit_id 없이 호출했는데 프로젝트에 파일이 없을 때.
            CommitNotFoundError: 지정한 커밋이 이 프로젝트의 커밋이 아닐 때.
        """
        with self.uow.transaction():
            project = get_owned_project(self.project_repo, project_id, owner_id, for_update=True)

            if commit_id is None:
                if self.file_repo.count_by_project_id(project_id) == 0:
                    raise NoFilesToDeployError("No files to deploy")
                message = f"Deployment commit - {datetime.now().isoformat()}"
                deploy_commit_id = self.snapshot_service.create_commit(project_id, owner_id, message)["id"]
            else:
                commit = self.commit_repo.find_by_id_and_project_id(commit_id, project_id)
                if not commit:
                    raise CommitNotFoundError(f"Commit with id '{commit_id}' not found.")
                deploy_commit_id = commit.id

            url = self._generate_deployment_url(project.name)
            deployment = self.deployment_repo.create(models.Deployment(
                project_id=project_id,
                commit_id=deploy_commit_id,
                url=url,
                status=models.DEPLOYMENT_PENDING,
                created_at=datetime.now()
            ))

            files = from_commit_files(self.commit_repo.list_files(deploy_commit_id))
            try:
                render_html(files, project.name, deployment_url=url, generator=settings.generator_name)
            except NoIndexError:
                logger.warning("Deployment %s of project %s failed: no index.html in commit %s.",
                               deployment.id, project_id, deploy_commit_id)
                self.deployment_repo.update_status(deployment, models.DEPLOYMENT_FAILED)
            else:
                self.deployment_repo.update_status(deployment, models.DEPLOYMENT_DEPLOYED)
                project.deployed_url = url
                project.updated_at = datetime.now()
                self.project_repo.update(project)
                logger.info("Project %s deployed at %s (commit %s).", project_id, url, deploy_commit_id)

        return serialize_deployment(deployment)

    def _generate_deployment_url(self, project_name: str) -> str:
        base_slug = f"{generate_slug(project_name)}-{time_token()}"
        url = build_deployment_url(settings.public_base_url, base_slug)
        counter = 1
        # 같은 밀리초에 같은 이름으로 배포된 경우에만 번호를 덧붙입니다.
        while self.deployment_repo.find_by_url(url):
            url = build_deployment_url(settings.public_base_url, f"{base_slug}-{counter}")
            counter += 1
        return url

    def _check_quota(self, owner_id: int):
        if self.project_repo.count_by_owner_id(owner_id) >= settings.max_projects_per_user:
            raise QuotaExceededError(f"Maximum of {settings.max_projects_per_user} projects allowed per user")

    def list_projects(self, owner_id: int) -> List[Dict[str, Any]]:
        """사용자가 소유한 프로젝트를 최근 수정 순으로 조회합니다."""
        return [serialize_project(p) for p in self.project_repo.list_by_owner_id(owner_id)]

    def get_project(self, project_id: int, actor_id: int) -> Dict[str, Any]:
        """
        프로젝트와 파일 목록, 커밋 개수를 조회합니다. 소유자이거나 공개 프로젝트일 때만 볼 수 있습니다.

        Raises:
            ProjectNotFoundError: 프로젝트가 없을 때.
            AuthorizationError: 다른 사용자의 비공개 프로젝트일 때.
        """
        project = self.project_repo.find_by_id(project_id)
        if not project:
            raise ProjectNotFoundError(f"Project with id '{project_id}' not found.")
        if project.owner_id != actor_id and not project.is_public:
            raise AuthorizationError("Access denied")

        data = serialize_project(project)
        data["files"] = [serialize_file(f) for f in self.file_repo.list_by_project_id(project_id)]
        data["commit_count"] = self.commit_repo.count_by_project_id(project_id)
        return data

    def update_project(self, project_id: int, owner_id: int, name=_UNSET, description=_UNSET, is_public=_UNSET) -> Dict[str, Any]:
        """
        프로젝트의 이름, 설명, 공개 여부 중 전달된 값만 변경합니다.
        description에 None이나 빈 문자열을 넘기면 설명을 지웁니다.
        """
        changes = {}
        if name is not _UNSET and name is not None:
            changes["name"] = validate_project_name(name)
        if description is not _UNSET:
            changes["description"] = validate_description(description)
        if is_public is not _UNSET and is_public is not None:
            if not isinstance(is_public, bool):
                raise ValidationError("is_public must be a boolean")
            changes["is_public"] = is_public

        with self.uow.transaction():
            project = get_owned_project(self.project_repo, project_id, owner_id, for_update=True)
            for field, value in changes.items():
                setattr(project, field, value)
            project.updated_at = datetime.now()
            self.project_repo.update(project)

        return serialize_project(project)

    def delete_project(self, project_id: int, owner_id: int) -> bool:
        """
        프로젝트와 그 파일, 커밋, 배포를 모두 삭제합니다. 삭제하면 프로젝트 개수 제한이 하나 풀립니다.

        Raises:
            ProjectNotFoundError: 프로젝트가 없을 때.
            AuthorizationError: 소유자가 아닐 때.
        """
        with self.uow.transaction():
            project = get_owned_project(self.project_repo, project_id, owner_id, for_update=True)
            self.project_repo.delete(project)

        logger.info("Project %s deleted by user %s.", project_id, owner_id)
        return True

    def explore_public_projects(self) -> List[Dict[str, Any]]:
        """공개 프로젝트 목록을 파일 개수와 함께 최근 수정 순으로 조회합니다."""
        results = []
        for project, file_count in self.project_repo.list_public_with_file_counts():
            data = serialize_project(project)
            data["file_count"] = file_count
            results.append(data)
        return results
