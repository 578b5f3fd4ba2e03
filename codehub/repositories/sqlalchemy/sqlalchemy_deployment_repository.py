from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from codehub.database import models
from codehub.repositories.interfaces import IDeploymentRepository

class SqlalchemyDeploymentRepository(IDeploymentRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, deployment_model: models.Deployment) -> models.Deployment:
        self.db.add(deployment_model)
        self.db.flush()
        return deployment_model

    def find_by_url(self, url: str) -> Optional[models.Deployment]:
        return self.db.query(models.Deployment).options(
            joinedload(models.Deployment.project),
            joinedload(models.Deployment.commit)
        ).filter(models.Deployment.url == url).first()

    def list_by_project_id(self, project_id: int) -> List[models.Deployment]:
        return self.db.query(models.Deployment).options(
            joinedload(models.Deployment.commit)
        ).filter(models.Deployment.project_id == project_id).order_by(models.Deployment.created_at.desc(), models.Deployment.id.desc()).all()

    def update_status(self, deployment: models.Deployment, status: str) -> models.Deployment:
        deployment.status = status
        self.db.flush()
        return deployment
