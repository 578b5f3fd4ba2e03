from .user import User
from .project import Project
from .project_file import ProjectFile
from .commit import Commit, CommitFile
from .deployment import Deployment, DEPLOYMENT_PENDING, DEPLOYMENT_DEPLOYED, DEPLOYMENT_FAILED

__all__ = [
    "User", "Project", "ProjectFile", "Commit", "CommitFile", "Deployment",
    "DEPLOYMENT_PENDING", "DEPLOYMENT_DEPLOYED", "DEPLOYMENT_FAILED",
]
