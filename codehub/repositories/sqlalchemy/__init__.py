from .sqlalchemy_user_repository import SqlalchemyUserRepository
from .sqlalchemy_project_repository import SqlalchemyProjectRepository
from .sqlalchemy_project_file_repository import SqlalchemyProjectFileRepository
from .sqlalchemy_commit_repository import SqlalchemyCommitRepository
from .sqlalchemy_deployment_repository import SqlalchemyDeploymentRepository
from .sqlalchemy_unit_of_work import SqlalchemyUnitOfWork

__all__ = [
    "SqlalchemyUserRepository", "SqlalchemyProjectRepository", "SqlalchemyProjectFileRepository",
    "SqlalchemyCommitRepository", "SqlalchemyDeploymentRepository", "SqlalchemyUnitOfWork",
]
