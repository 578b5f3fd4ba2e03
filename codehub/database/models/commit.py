from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base

class Commit(Base):
    """
    특정 시점의 프로젝트 전체 파일을 담은 불변 스냅샷입니다. diff가 아닌 전체 사본입니다.
    parent_commit_id는 생성 당시 프로젝트의 last_commit_id를 가리키는 이력 체인일 뿐,
    병합에는 사용되지 않습니다.
    """
    __tablename__ = "commits"
    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    message = Column(String(200), nullable=False)
    parent_commit_id = Column(Integer, ForeignKey("commits.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False, index=True)

    project = relationship("Project", back_populates="commits")
    files = relationship("CommitFile", back_populates="commit", cascade="all, delete-orphan", order_by="CommitFile.id")
    deployments = relationship("Deployment", back_populates="commit", cascade="all, delete-orphan")


class CommitFile(Base):
    """
    커밋 시점에 복사된 파일 한 개입니다. 내용은 값으로 복사되므로 이후 ProjectFile을
    수정해도 이전 커밋은 바뀌지 않습니다.
    source_file_id는 원본 ProjectFile에 대한 약한 참조이며 외래 키가 아닙니다.
    """
    __tablename__ = "commit_files"
    id = Column(Integer, primary_key=True, index=True)
    commit_id = Column(Integer, ForeignKey("commits.id", ondelete="CASCADE"), nullable=False, index=True)
    source_file_id = Column(Integer, nullable=True)
    file_name = Column(String(100), nullable=False)
    file_path = Column(String(100), nullable=False)
    file_content = Column(Text, nullable=False, default="")
    file_type = Column(String(8), nullable=False)

    commit = relationship("Commit", back_populates="files")
