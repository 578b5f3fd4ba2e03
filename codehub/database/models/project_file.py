from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from ..database import Base

class ProjectFile(Base):
    """
    프로젝트의 작업 사본(live file set)에 속한 수정 가능한 파일입니다.
    size는 항상 content의 UTF-8 바이트 길이와 일치해야 합니다.
    """
    __tablename__ = "project_files"
    __table_args__ = (UniqueConstraint("project_id", "path", name="uq_project_files_project_path"),)

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    path = Column(String(100), nullable=False)
    content = Column(Text, nullable=False, default="")
    file_type = Column(String(8), nullable=False)
    size = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, nullable=False)

    project = relationship("Project", back_populates="files")
