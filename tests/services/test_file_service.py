# tests/services/test_file_service.py
import pytest
from unittest.mock import MagicMock, ANY

from codehub.services.file_service import FileService
from codehub.services.exceptions import *
from codehub.repositories.interfaces import IProjectRepository, IProjectFileRepository, IUnitOfWork
from codehub.database import models

OWNER_ID = 1
PROJECT_ID = 10

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture
def mock_file_repo() -> MagicMock:
    """IProjectFileRepository에 대한 모의 객체를 생성합니다."""
    return MagicMock(spec=IProjectFileRepository)

@pytest.fixture
def mock_project_repo() -> MagicMock:
    """IProjectRepository에 대한 모의 객체를 생성합니다. 기본적으로 OWNER_ID 소유의 비공개 프로젝트를 반환합니다."""
    repo = MagicMock(spec=IProjectRepository)
    project = models.Project(id=PROJECT_ID, owner_id=OWNER_ID, name="demo", is_public=False)
    repo.find_by_id.return_value = project
    repo.find_by_id_for_update.return_value = project
    return repo

@pytest.fixture
def mock_uow() -> MagicMock:
    return MagicMock(spec=IUnitOfWork)

@pytest.fixture
def file_service(mock_file_repo: MagicMock, mock_project_repo: MagicMock, mock_uow: MagicMock) -> FileService:
    """테스트에 사용될 FileService 인스턴스를 생성하고, 의존성을 주입합니다."""
    return FileService(mock_file_repo, mock_project_repo, mock_uow)

def _file(file_id: int, name: str, content: str = "") -> models.ProjectFile:
    return models.ProjectFile(
        id=file_id, project_id=PROJECT_ID, name=name, path=name,
        content=content, file_type=name.rsplit(".", 1)[1], size=len(content.encode("utf-8"))
    )

# ===================================================================
#  파일 생성 테스트
# ===================================================================
class TestCreateFile:
    def test_create_file_success(self, file_service: FileService, mock_file_repo: MagicMock, mock_project_repo: MagicMock, mock_uow: MagicMock):
        """새 파일이 이름과 같은 경로, 확장자에 맞는 유형, 바이트 크기로 생성되는지 테스트합니다."""
        # === Arrange ===
        mock_file_repo.find_by_path_and_project_id.return_value = None
        mock_file_repo.create.side_effect = lambda f: f

        # === Act ===
        result = file_service.create_file(PROJECT_ID, OWNER_ID, "about.html", "<p>héllo</p>")

        # === Assert ===
        assert result["name"] == "about.html"
        assert result["path"] == "about.html"
        assert result["file_type"] == "html"
        # 'é'는 UTF-8에서 2바이트
        assert result["size"] == len("<p>héllo</p>") + 1
        mock_uow.transaction.assert_called_once()
        mock_project_repo.find_by_id_for_update.assert_called_once_with(PROJECT_ID)
        mock_project_repo.update.assert_called_once_with(ANY)

    def test_create_file_fails_on_duplicate_path(self, file_service: FileService, mock_file_repo: MagicMock):
        """같은 경로의 파일이 이미 있으면 DuplicatePathError가 발생하는지 테스트합니다."""
        # === Arrange ===
        mock_file_repo.find_by_path_and_project_id.return_value = _file(1, "style.css")

        # === Act & Assert ===
        with pytest.raises(DuplicatePathError):
            file_service.create_file(PROJECT_ID, OWNER_ID, "style.css", "body {}")
        mock_file_repo.create.assert_not_called()

    @pytest.mark.parametrize("name", ["readme.md", "noext", "", "bad|name.js", "a" * 98 + ".js"])
    def test_create_file_rejects_invalid_names(self, file_service: FileService, mock_file_repo: MagicMock, mock_uow: MagicMock, name):
        """잘못된 파일 이름은 트랜잭션을 시작하기 전에 거부되는지 테스트합니다."""
        with pytest.raises(InvalidNameError):
            file_service.create_file(PROJECT_ID, OWNER_ID, name, "")
        mock_uow.transaction.assert_not_called()
        mock_file_repo.create.assert_not_called()

    def test_create_file_accepts_uppercase_extension(self, file_service: FileService, mock_file_repo: MagicMock):
        """확장자는 대소문자를 구분하지 않는지 테스트합니다."""
        mock_file_repo.find_by_path_and_project_id.return_value = None
        mock_file_repo.create.side_effect = lambda f: f

        result = file_service.create_file(PROJECT_ID, OWNER_ID, "MAIN.JS", "")

        assert result["file_type"] == "js"

    def test_create_file_in_other_users_private_project(self, file_service: FileService, mock_file_repo: MagicMock):
        """다른 사용자의 비공개 프로젝트는 존재하지 않는 것처럼 처리되는지 테스트합니다."""
        with pytest.raises(ProjectNotFoundError):
            file_service.create_file(PROJECT_ID, 999, "a.js", "")
        mock_file_repo.create.assert_not_called()

    def test_create_file_in_other_users_public_project(self, file_service: FileService, mock_project_repo: MagicMock):
        """다른 사용자의 공개 프로젝트를 수정하려고 하면 AuthorizationError가 발생하는지 테스트합니다."""
        mock_project_repo.find_by_id_for_update.return_value.is_public = True

        with pytest.raises(AuthorizationError):
            file_service.create_file(PROJECT_ID, 999, "a.js", "")

# ===================================================================
#  파일 수정 및 삭제 테스트
# ===================================================================
class TestUpdateAndDeleteFile:
    def test_update_file_recomputes_size(self, file_service: FileService, mock_file_repo: MagicMock):
        """내용을 바꾸면 size가 새 내용의 UTF-8 바이트 길이로 다시 계산되는지 테스트합니다."""
        # === Arrange ===
        existing = _file(3, "script.js", "old")
        mock_file_repo.find_by_id_and_project_id.return_value = existing
        mock_file_repo.update.side_effect = lambda f: f

        # === Act ===
        result = file_service.update_file(PROJECT_ID, 3, OWNER_ID, "한글")

        # === Assert ===
        assert result["content"] == "한글"
        assert result["size"] == 6
        mock_file_repo.update.assert_called_once_with(existing)

    def test_update_file_not_found(self, file_service: FileService, mock_file_repo: MagicMock):
        mock_file_repo.find_by_id_and_project_id.return_value = None

        with pytest.raises(ProjectFileNotFoundError):
            file_service.update_file(PROJECT_ID, 3, OWNER_ID, "x")

    def test_update_file_rejects_oversized_content(self, file_service: FileService, mock_file_repo: MagicMock):
        """5MB를 넘는 내용은 InvalidContentError로 거부되는지 테스트합니다."""
        mock_file_repo.find_by_id_and_project_id.return_value = _file(3, "script.js")

        with pytest.raises(InvalidContentError):
            file_service.update_file(PROJECT_ID, 3, OWNER_ID, "x" * (5 * 1024 * 1024 + 1))
        mock_file_repo.update.assert_not_called()

    def test_delete_index_html_is_refused(self, file_service: FileService, mock_file_repo: MagicMock):
        """index.html은 항상 삭제할 수 없는지 테스트합니다."""
        mock_file_repo.find_by_id_and_project_id.return_value = _file(1, "index.html", "<html></html>")

        with pytest.raises(EssentialFileError):
            file_service.delete_file(PROJECT_ID, 1, OWNER_ID)
        mock_file_repo.delete.assert_not_called()

    def test_delete_file_success(self, file_service: FileService, mock_file_repo: MagicMock):
        target = _file(2, "style.css")
        mock_file_repo.find_by_id_and_project_id.return_value = target

        assert file_service.delete_file(PROJECT_ID, 2, OWNER_ID) is True
        mock_file_repo.delete.assert_called_once_with(target)

# ===================================================================
#  파일 조회 테스트
# ===================================================================
class TestReadFiles:
    def test_list_files(self, file_service: FileService, mock_file_repo: MagicMock):
        mock_file_repo.list_by_project_id.return_value = [_file(1, "index.html"), _file(2, "style.css")]

        files = file_service.list_files(PROJECT_ID, OWNER_ID)

        assert [f["name"] for f in files] == ["index.html", "style.css"]
        mock_file_repo.list_by_project_id.assert_called_once_with(PROJECT_ID)

    def test_get_file_not_found(self, file_service: FileService, mock_file_repo: MagicMock):
        mock_file_repo.find_by_id_and_project_id.return_value = None

        with pytest.raises(ProjectFileNotFoundError):
            file_service.get_file(PROJECT_ID, 42, OWNER_ID)
