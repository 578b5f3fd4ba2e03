from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session
from codehub.database import models
from codehub.repositories.interfaces import IProjectRepository

class SqlalchemyProjectRepository(IProjectRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, project_model: models.Project) -> models.Project:
        self.db.add(project_model)
        self.db.flush()
        return project_model

    def find_by_id(self, project_id: int) -> Optional[models.Project]:
        return self.db.query(models.Project).filter(models.Project.id == project_id).first()

    def find_by_id_for_update(self, project_id: int) -> Optional[models.Project]:
        # SQLite 방언은 FOR UPDATE를 생략하며, 쓰기 트랜잭션 자체가 직렬화됩니다.
        return self.db.query(models.Project).filter(models.Project.id == project_id).with_for_update().first()

    def list_by_owner_id(self, owner_id: int) -> List[models.Project]:
        return self.db.query(models.Project).filter(models.Project.owner_id == owner_id).order_by(models.Project.updated_at.desc(), models.Project.id.desc()).all()

    def count_by_owner_id(self, owner_id: int) -> int:
        return self.db.query(models.Project).filter(models.Project.owner_id == owner_id).count()

    def list_public_with_file_counts(self) -> List[Tuple[models.Project, int]]:
        rows = (
            self.db.query(models.Project, func.count(models.ProjectFile.id))
            .outerjoin(models.ProjectFile, models.ProjectFile.project_id == models.Project.id)
            .filter(models.Project.is_public.is_(True))
            .group_by(models.Project.id)
            .order_by(models.Project.updated_at.desc(), models.Project.id.desc())
            .all()
        )
        return [(project, file_count) for project, file_count in rows]

    def update(self, project: models.Project) -> models.Project:
        self.db.flush()
        return project

    def delete(self, project: models.Project) -> bool:
        if project:
            # 파일, 커밋, 커밋 파일, 배포는 relationship cascade로 함께 삭제됩니다.
            self.db.delete(project)
            self.db.flush()
            return True
        return False
