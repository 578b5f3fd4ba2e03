from typing import Optional
from sqlalchemy.orm import Session
from codehub.database import models
from codehub.repositories.interfaces import IUserRepository

class SqlalchemyUserRepository(IUserRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, user_model: models.User) -> models.User:
        self.db.add(user_model)
        self.db.flush()
        return user_model

    def find_by_external_id(self, external_id: str) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.external_id == external_id).first()
