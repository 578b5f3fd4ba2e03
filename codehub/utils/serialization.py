"""모델을 API 응답용 딕셔너리로 변환하는 유틸리티."""
from datetime import datetime
from typing import Any, Dict, Optional

from codehub.database import models


def serialize_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def serialize_project(project: models.Project) -> Dict[str, Any]:
    return {
        "id": project.id,
        "owner_id": project.owner_id,
        "name": project.name,
        "description": project.description,
        "is_public": project.is_public,
        "deployed_url": project.deployed_url,
        "last_commit_id": project.last_commit_id,
        "created_at": serialize_datetime(project.created_at),
        "updated_at": serialize_datetime(project.updated_at),
    }


def serialize_file(file: models.ProjectFile) -> Dict[str, Any]:
    return {
        "id": file.id,
        "project_id": file.project_id,
        "name": file.name,
        "path": file.path,
        "content": file.content,
        "file_type": file.file_type,
        "size": file.size,
        "created_at": serialize_datetime(file.created_at),
        "updated_at": serialize_datetime(file.updated_at),
    }


def serialize_commit(commit: models.Commit, file_count: Optional[int] = None) -> Dict[str, Any]:
    data = {
        "id": commit.id,
        "project_id": commit.project_id,
        "author_id": commit.author_id,
        "message": commit.message,
        "parent_commit_id": commit.parent_commit_id,
        "created_at": serialize_datetime(commit.created_at),
    }
    if file_count is not None:
        data["file_count"] = file_count
    return data


def serialize_commit_file(commit_file: models.CommitFile) -> Dict[str, Any]:
    return {
        "id": commit_file.id,
        "source_file_id": commit_file.source_file_id,
        "file_name": commit_file.file_name,
        "file_path": commit_file.file_path,
        "file_content": commit_file.file_content,
        "file_type": commit_file.file_type,
    }


def serialize_deployment(deployment: models.Deployment) -> Dict[str, Any]:
    return {
        "id": deployment.id,
        "project_id": deployment.project_id,
        "commit_id": deployment.commit_id,
        "url": deployment.url,
        "status": deployment.status,
        "created_at": serialize_datetime(deployment.created_at),
    }
