from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base

class Project(Base):
    """
    사용자가 소유한 하나의 정적 웹 프로젝트(HTML/CSS/JS 파일 묶음)를 나타냅니다.
    파일, 커밋, 배포는 모두 이 Project 모델에 종속되며 프로젝트 삭제 시 함께 삭제됩니다.
    """
    __tablename__ = "projects"
    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    is_public = Column(Boolean, nullable=False, default=False)
    deployed_url = Column(String, nullable=True)
    # commits 테이블과의 순환 외래 키를 피하기 위해 서비스 계층에서 무결성을 보장합니다.
    last_commit_id = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, nullable=False)

    owner = relationship("User", back_populates="projects")
    files = relationship("ProjectFile", back_populates="project", cascade="all, delete-orphan", order_by="ProjectFile.name")
    commits = relationship("Commit", back_populates="project", cascade="all, delete-orphan")
    deployments = relationship("Deployment", back_populates="project", cascade="all, delete-orphan")
