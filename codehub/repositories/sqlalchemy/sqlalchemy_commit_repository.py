from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session
from codehub.database import models
from codehub.repositories.interfaces import ICommitRepository

class SqlalchemyCommitRepository(ICommitRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, commit_model: models.Commit) -> models.Commit:
        self.db.add(commit_model)
        self.db.flush()
        return commit_model

    def add_files(self, commit_files: List[models.CommitFile]) -> List[models.CommitFile]:
        with self.db.begin_nested():
            self.db.add_all(commit_files)
        return commit_files

    def find_by_id_and_project_id(self, commit_id: int, project_id: int) -> Optional[models.Commit]:
        return self.db.query(models.Commit).filter(
            models.Commit.id == commit_id,
            models.Commit.project_id == project_id
        ).first()

    def list_files(self, commit_id: int) -> List[models.CommitFile]:
        return self.db.query(models.CommitFile).filter(models.CommitFile.commit_id == commit_id).order_by(models.CommitFile.id.asc()).all()

    def list_with_file_counts(self, project_id: int) -> List[Tuple[models.Commit, int]]:
        rows = (
            self.db.query(models.Commit, func.count(models.CommitFile.id))
            .outerjoin(models.CommitFile, models.CommitFile.commit_id == models.Commit.id)
            .filter(models.Commit.project_id == project_id)
            .group_by(models.Commit.id)
            .order_by(models.Commit.created_at.desc(), models.Commit.id.desc())
            .all()
        )
        return [(commit, file_count) for commit, file_count in rows]

    def count_by_project_id(self, project_id: int) -> int:
        return self.db.query(models.Commit).filter(models.Commit.project_id == project_id).count()

    def delete(self, commit: models.Commit) -> bool:
        if commit:
            self.db.delete(commit)
            self.db.flush()
            return True
        return False
