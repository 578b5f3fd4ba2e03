from .user import IUserRepository
from .project import IProjectRepository
from .project_file import IProjectFileRepository
from .commit import ICommitRepository
from .deployment import IDeploymentRepository
from .unit_of_work import IUnitOfWork

__all__ = [
    "IUserRepository", "IProjectRepository", "IProjectFileRepository",
    "ICommitRepository", "IDeploymentRepository", "IUnitOfWork",
]
