from typing import Dict, Any, List, Optional

from codehub.config import settings
from codehub.database import models
from codehub.repositories.interfaces import (
    IProjectRepository, IProjectFileRepository, ICommitRepository, IDeploymentRepository
)
from codehub.services.access import get_owned_project
from codehub.services.exceptions import DeploymentNotFoundError, CommitNotFoundError
from codehub.utils.html_renderer import render_html, from_project_files, from_commit_files
from codehub.utils.serialization import serialize_deployment, serialize_datetime
from codehub.utils.slug import build_deployment_url

class DeploymentService:
    """배포된 사이트와 미리보기 HTML을 렌더링하고 배포 기록을 조회합니다."""

    def __init__(
        self,
        project_repo: IProjectRepository,
        file_repo: IProjectFileRepository,
        commit_repo: ICommitRepository,
        deployment_repo: IDeploymentRepository
    ):
        self.project_repo = project_repo
        self.file_repo = file_repo
        self.commit_repo = commit_repo
        self.deployment_repo = deployment_repo

    def list_deployments(self, project_id: int, owner_id: int) -> List[Dict[str, Any]]:
        """프로젝트의 배포 기록을 최신순으로 조회합니다. 각 기록에 배포한 커밋 정보를 함께 담습니다."""
        get_owned_project(self.project_repo, project_id, owner_id)
        results = []
        for deployment in self.deployment_repo.list_by_project_id(project_id):
            data = serialize_deployment(deployment)
            commit = deployment.commit
            data["commit"] = {
                "id": commit.id,
                "message": commit.message,
                "created_at": serialize_datetime(commit.created_at),
            } if commit else None
            results.append(data)
        return results

    def render_deployment(self, slug: str) -> str:
        """
        공개 배포 URL로 요청된 사이트의 HTML을 렌더링합니다.

        배포 당시 커밋의 파일로 렌더링하므로, 이후 작업 사본을 수정해도 결과는 바뀌지 않습니다.
        프로젝트의 공개 여부와 상관없이 deployed 상태의 배포만 제공합니다.

        Raises:
            DeploymentNotFoundError: 해당 URL의 배포가 없거나 deployed 상태가 아닐 때.
            NoIndexError: 커밋에 index.html이 없을 때.
        """
        url = build_deployment_url(settings.public_base_url, slug)
        deployment = self.deployment_repo.find_by_url(url)
        if not deployment or deployment.status != models.DEPLOYMENT_DEPLOYED:
            raise DeploymentNotFoundError("Deployment not found")

        project = self.project_repo.find_by_id(deployment.project_id)
        files = from_commit_files(self.commit_repo.list_files(deployment.commit_id))
        return render_html(
            files,
            project.name if project else None,
            deployment_url=deployment.url,
            generator=settings.generator_name
        )

    def render_preview(self, project_id: int, owner_id: int, commit_id: Optional[int] = None) -> str:
        """
        소유자용 미리보기 HTML을 렌더링합니다. 배포 메타 태그는 붙이지 않습니다.

        Args:
            commit_id: 지정하면 해당 커밋의 파일로, 생략하면 현재 작업 사본으로 렌더링합니다.

        Raises:
            CommitNotFoundError: 지정한 커밋이 이 프로젝트의 커밋이 아닐 때.
            NoIndexError: index.html이 없을 때.
        """
        project = get_owned_project(self.project_repo, project_id, owner_id)
        if commit_id is None:
            files = from_project_files(self.file_repo.list_by_project_id(project_id))
        else:
            commit = self.commit_repo.find_by_id_and_project_id(commit_id, project_id)
            if not commit:
                raise CommitNotFoundError(f"Commit with id '{commit_id}' not found.")
            files = from_commit_files(self.commit_repo.list_files(commit.id))
        return render_html(files, project.name)
