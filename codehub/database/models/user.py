from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from ..database import Base

class User(Base):
    """
    외부 인증 제공자가 확인한 사용자를 내부 ID에 연결합니다.
    인증 자체는 외부에서 처리되며, 이 모델은 소유권 관계를 위한 식별자만 보관합니다.
    """
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    external_id = Column(String, unique=True, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    projects = relationship("Project", back_populates="owner", cascade="all, delete-orphan")
