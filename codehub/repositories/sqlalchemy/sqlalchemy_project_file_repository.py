from typing import List, Optional
from sqlalchemy.orm import Session
from codehub.database import models
from codehub.repositories.interfaces import IProjectFileRepository

class SqlalchemyProjectFileRepository(IProjectFileRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, file_model: models.ProjectFile) -> models.ProjectFile:
        self.db.add(file_model)
        self.db.flush()
        return file_model

    def add_all(self, file_models: List[models.ProjectFile]) -> List[models.ProjectFile]:
        # SAVEPOINT 안에서 저장하므로 실패해도 바깥 트랜잭션은 계속 사용할 수 있습니다.
        with self.db.begin_nested():
            self.db.add_all(file_models)
        return file_models

    def find_by_id_and_project_id(self, file_id: int, project_id: int) -> Optional[models.ProjectFile]:
        return self.db.query(models.ProjectFile).filter(
            models.ProjectFile.id == file_id,
            models.ProjectFile.project_id == project_id
        ).first()

    def find_by_path_and_project_id(self, path: str, project_id: int) -> Optional[models.ProjectFile]:
        return self.db.query(models.ProjectFile).filter(
            models.ProjectFile.path == path,
            models.ProjectFile.project_id == project_id
        ).first()

    def list_by_project_id(self, project_id: int) -> List[models.ProjectFile]:
        return self.db.query(models.ProjectFile).filter(models.ProjectFile.project_id == project_id).order_by(models.ProjectFile.name.asc(), models.ProjectFile.id.asc()).all()

    def count_by_project_id(self, project_id: int) -> int:
        return self.db.query(models.ProjectFile).filter(models.ProjectFile.project_id == project_id).count()

    def update(self, file_model: models.ProjectFile) -> models.ProjectFile:
        self.db.flush()
        return file_model

    def delete(self, file_model: models.ProjectFile) -> bool:
        if file_model:
            self.db.delete(file_model)
            self.db.flush()
            return True
        return False

    def delete_by_project_id(self, project_id: int) -> int:
        files = self.list_by_project_id(project_id)
        for file_model in files:
            self.db.delete(file_model)
        # 같은 경로의 새 파일을 넣기 전에 삭제가 먼저 반영되어야 (project_id, path) 제약을 위반하지 않습니다.
        self.db.flush()
        return len(files)
