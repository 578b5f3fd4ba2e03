"""파일, 프로젝트, 커밋 입력값 검증."""
import re
from typing import Optional

from codehub.config import settings
from codehub.services.exceptions import (
    InvalidNameError, InvalidContentError, InvalidMessageError, InvalidDescriptionError
)

ALLOWED_FILE_TYPES = ("html", "css", "js")
MAX_FILE_NAME_LENGTH = 100
MAX_PROJECT_NAME_LENGTH = 50
MAX_DESCRIPTION_LENGTH = 500
MAX_COMMIT_MESSAGE_LENGTH = 200

_INVALID_FILE_NAME_CHARS = re.compile(r'[<>:"|?*\x00-\x1f]')
_PROJECT_NAME_PATTERN = re.compile(r'^[A-Za-z0-9 _-]+$')


def content_size(content: str) -> int:
    """파일 크기는 문자 수가 아니라 UTF-8 바이트 길이입니다."""
    return len(content.encode("utf-8"))


def get_file_type(name: str) -> Optional[str]:
    """확장자(대소문자 무시)로 파일 유형을 결정합니다. 허용되지 않으면 None."""
    if "." not in name:
        return None
    extension = name.rsplit(".", 1)[1].lower()
    return extension if extension in ALLOWED_FILE_TYPES else None


def validate_file_name(name) -> str:
    """
    파일 이름을 검증하고 해당 파일 유형을 반환합니다.

    Raises:
        InvalidNameError: 이름이 비어 있거나, 100자를 넘거나, 허용되지 않은 확장자이거나,
            사용할 수 없는 문자를 포함할 때.
    """
    if not isinstance(name, str) or not name.strip():
        raise InvalidNameError("File name is required")
    if len(name) > MAX_FILE_NAME_LENGTH:
        raise InvalidNameError(f"File name too long (max {MAX_FILE_NAME_LENGTH} characters)")
    file_type = get_file_type(name)
    if file_type is None:
        raise InvalidNameError("Only .html, .css, and .js files are allowed")
    if _INVALID_FILE_NAME_CHARS.search(name):
        raise InvalidNameError("File name contains invalid characters")
    return file_type


def validate_file_content(content, file_type: str) -> None:
    """
    Raises:
        InvalidContentError: 문자열이 아니거나, 크기 제한을 넘거나, 알 수 없는 파일 유형일 때.
    """
    if not isinstance(content, str):
        raise InvalidContentError("File content must be a string")
    if file_type not in ALLOWED_FILE_TYPES:
        raise InvalidContentError(f"Unsupported file type '{file_type}'")
    if content_size(content) > settings.max_file_size_bytes:
        limit_mb = settings.max_file_size_bytes // (1024 * 1024)
        raise InvalidContentError(f"File size exceeds {limit_mb}MB limit")


def validate_project_name(name) -> str:
    """
    프로젝트 이름을 검증하고 앞뒤 공백을 제거한 이름을 반환합니다.

    Raises:
        InvalidNameError: 비어 있거나, 50자를 넘거나, 영문자/숫자/공백/하이픈/밑줄 외의 문자가 있을 때.
    """
    if not isinstance(name, str) or not name.strip():
        raise InvalidNameError("Project name is required")
    if len(name) > MAX_PROJECT_NAME_LENGTH:
        raise InvalidNameError(f"Project name too long (max {MAX_PROJECT_NAME_LENGTH} characters)")
    if not _PROJECT_NAME_PATTERN.match(name):
        raise InvalidNameError("Project name can only contain letters, numbers, spaces, hyphens, and underscores")
    return name.strip()


def validate_description(description) -> Optional[str]:
    """설명을 검증하고, 비어 있으면 None을 반환합니다."""
    if description is None:
        return None
    if not isinstance(description, str):
        raise InvalidDescriptionError("Description must be a string")
    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise InvalidDescriptionError(f"Description too long (max {MAX_DESCRIPTION_LENGTH} characters)")
    return description.strip() or None


def validate_commit_message(message) -> str:
    """
    커밋 메시지를 검증하고 앞뒤 공백을 제거한 메시지를 반환합니다.

    Raises:
        InvalidMessageError: 공백 제거 후 비어 있거나 200자를 넘을 때.
    """
    if not isinstance(message, str) or not message.strip():
        raise InvalidMessageError("Commit message is required")
    trimmed = message.strip()
    if len(trimmed) > MAX_COMMIT_MESSAGE_LENGTH:
        raise InvalidMessageError(f"Commit message too long (max {MAX_COMMIT_MESSAGE_LENGTH} characters)")
    return trimmed
