from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base

DEPLOYMENT_PENDING = "pending"
DEPLOYMENT_DEPLOYED = "deployed"
DEPLOYMENT_FAILED = "failed"

class Deployment(Base):
    """
    공개 URL을 특정 커밋 하나에 영구적으로 연결합니다.
    생성 이후에는 status가 pending에서 deployed 또는 failed로 바뀌는 것 외에는 변경되지 않습니다.
    """
    __tablename__ = "deployments"
    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    commit_id = Column(Integer, ForeignKey("commits.id", ondelete="CASCADE"), nullable=False)
    url = Column(String, unique=True, nullable=False, index=True)
    status = Column(String(16), nullable=False, default=DEPLOYMENT_PENDING)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    project = relationship("Project", back_populates="deployments")
    commit = relationship("Commit", back_populates="deployments")
