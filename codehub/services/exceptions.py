# codehub/services/exceptions.py

class CodeHubError(Exception):
    """모든 도메인 예외의 기반 클래스"""
    pass

# --- Validation Exceptions (400) ---
class ValidationError(CodeHubError):
    """사용자가 고칠 수 있는 입력 오류"""
    pass

class InvalidNameError(ValidationError):
    """파일 또는 프로젝트 이름이 규칙에 맞지 않을 때"""
    pass

class InvalidContentError(ValidationError):
    """파일 내용이 크기 제한을 넘거나 형식이 잘못되었을 때"""
    pass

class InvalidMessageError(ValidationError):
    """커밋 메시지가 비어 있거나 너무 길 때"""
    pass

class InvalidDescriptionError(ValidationError):
    """프로젝트 설명이 너무 길 때"""
    pass

class DuplicatePathError(ValidationError):
    """같은 경로의 파일이 프로젝트에 이미 존재할 때"""
    pass

class EssentialFileError(ValidationError):
    """index.html 같은 필수 파일을 삭제하려고 할 때"""
    pass

class EmptyProjectError(ValidationError):
    """파일이 하나도 없는 프로젝트를 커밋하려고 할 때"""
    pass

class NoFilesToDeployError(ValidationError):
    """배포할 파일이 없을 때"""
    pass

class QuotaExceededError(CodeHubError):
    """사용자당 프로젝트 개수 제한을 넘었을 때"""
    pass

# --- Auth Exceptions ---
class AuthenticationError(CodeHubError):
    """요청에 인증된 사용자 정보가 없을 때"""
    pass

class AuthorizationError(CodeHubError):
    """리소스에 접근할 권한이 없을 때"""
    pass

# --- Not Found Exceptions (404) ---
class NotFoundError(CodeHubError):
    """요청한 리소스를 찾을 수 없을 때"""
    pass

class ProjectNotFoundError(NotFoundError):
    """프로젝트를 찾을 수 없을 때"""
    pass

class ProjectFileNotFoundError(NotFoundError):
    """파일을 찾을 수 없을 때"""
    pass

class CommitNotFoundError(NotFoundError):
    """커밋을 찾을 수 없거나 다른 프로젝트의 커밋일 때"""
    pass

class DeploymentNotFoundError(NotFoundError):
    """배포를 찾을 수 없을 때"""
    pass

class NoIndexError(NotFoundError):
    """렌더링할 파일 목록에 index.html이 없을 때"""
    def __init__(self, message: str = "No index.html file found"):
        super().__init__(message)

# --- Internal Exceptions (500) ---
class ConsistencyError(CodeHubError):
    """보상 조치(롤백)마저 실패해 데이터 일관성이 깨졌을 수 있을 때"""
    pass

class StorageError(CodeHubError):
    """저장소 작업이 실패했을 때"""
    pass
