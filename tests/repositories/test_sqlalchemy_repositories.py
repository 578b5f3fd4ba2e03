# tests/repositories/test_sqlalchemy_repositories.py
import pytest
from unittest.mock import MagicMock
from sqlalchemy.orm import sessionmaker

from codehub.app import build_services
from codehub.database import models
from codehub.database.database import Base, build_engine
from codehub.services.exceptions import *

# ===================================================================
#  Fixture 설정 (인메모리 SQLite)
# ===================================================================

@pytest.fixture
def db_session():
    """테스트마다 새 인메모리 SQLite 데이터베이스와 세션을 만듭니다."""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autoflush=False, bind=engine)()
    yield session
    session.close()
    engine.dispose()

@pytest.fixture
def services(db_session):
    return build_services(db_session)

@pytest.fixture
def owner_id(services):
    return services['identity'].resolve_user("owner")

@pytest.fixture
def project_id(services, owner_id):
    return services['projects'].create_project(owner_id, "Demo")["id"]

def _snapshot(db_session, project_id):
    files = db_session.query(models.ProjectFile).filter_by(project_id=project_id).order_by(models.ProjectFile.name).all()
    return [(f.name, f.path, f.content, f.file_type, f.size) for f in files]

def _file_id(services, project_id, owner_id, name):
    return next(f["id"] for f in services['files'].list_files(project_id, owner_id) if f["name"] == name)

# ===================================================================
#  프로젝트 생성 및 개수 제한
# ===================================================================
class TestProjectPersistence:
    def test_new_project_has_seed_files(self, services, owner_id, project_id):
        files = services['files'].list_files(project_id, owner_id)

        assert [f["name"] for f in files] == ["index.html", "script.js", "style.css"]
        assert all(f["size"] == len(f["content"].encode("utf-8")) for f in files)

    def test_quota_is_freed_by_delete(self, services, owner_id, project_id):
        """4번째 프로젝트는 거부되고, 하나를 삭제하면 다시 만들 수 있는지 테스트합니다."""
        services['projects'].create_project(owner_id, "Second")
        services['projects'].create_project(owner_id, "Third")

        with pytest.raises(QuotaExceededError):
            services['projects'].create_project(owner_id, "Fourth")

        services['projects'].delete_project(project_id, owner_id)
        assert services['projects'].create_project(owner_id, "Fourth")["name"] == "Fourth"

    def test_delete_project_cascades(self, services, db_session, owner_id, project_id):
        """프로젝트를 삭제하면 파일, 커밋, 커밋 파일, 배포가 모두 삭제되는지 테스트합니다."""
        services['projects'].deploy(project_id, owner_id)

        services['projects'].delete_project(project_id, owner_id)

        assert db_session.query(models.ProjectFile).count() == 0
        assert db_session.query(models.Commit).count() == 0
        assert db_session.query(models.CommitFile).count() == 0
        assert db_session.query(models.Deployment).count() == 0

    def test_duplicate_path_is_rejected(self, services, owner_id, project_id):
        with pytest.raises(DuplicatePathError):
            services['files'].create_file(project_id, owner_id, "style.css", "")

    def test_explore_counts_files(self, services, owner_id):
        public_id = services['projects'].create_project(owner_id, "Shared", is_public=True)["id"]
        services['files'].create_file(public_id, owner_id, "extra.js", "1")

        explored = services['projects'].explore_public_projects()

        assert [(p["id"], p["file_count"]) for p in explored] == [(public_id, 4)]

    def test_fork_copies_files(self, services, db_session, owner_id):
        source_id = services['projects'].create_project(owner_id, "Shared", is_public=True)["id"]
        other_id = services['identity'].resolve_user("other")

        forked = services['projects'].fork_project(source_id, other_id)

        assert forked["is_public"] is False
        assert _snapshot(db_session, forked["id"]) == _snapshot(db_session, source_id)

# ===================================================================
#  커밋과 복원
# ===================================================================
class TestSnapshots:
    def test_restore_then_commit_reproduces_snapshot(self, services, db_session, owner_id, project_id):
        """복원 후 다시 커밋하면 원래 커밋과 같은 파일이 저장되는지 테스트합니다."""
        # === Arrange ===
        first = services['snapshots'].create_commit(project_id, owner_id, "first")
        css_id = _file_id(services, project_id, owner_id, "style.css")
        services['files'].update_file(project_id, css_id, owner_id, "body { color: red; }")
        services['files'].create_file(project_id, owner_id, "extra.js", "let x = 'é';")
        services['snapshots'].create_commit(project_id, owner_id, "second")

        # === Act ===
        result = services['snapshots'].restore_commit(project_id, first["id"], owner_id)
        third = services['snapshots'].create_commit(project_id, owner_id, "third")

        # === Assert ===
        assert result["files_removed"] == 4
        assert result["files_added"] == 3

        def commit_contents(commit_id):
            files = services['snapshots'].get_commit(project_id, commit_id, owner_id)["files"]
            return sorted((f["file_name"], f["file_path"], f["file_content"], f["file_type"]) for f in files)

        assert commit_contents(third["id"]) == commit_contents(first["id"])
        assert third["parent_commit_id"] == first["id"]

    def test_commit_is_not_affected_by_later_edits(self, services, owner_id, project_id):
        commit = services['snapshots'].create_commit(project_id, owner_id, "v1")
        index_id = _file_id(services, project_id, owner_id, "index.html")
        services['files'].update_file(project_id, index_id, owner_id, "<html>changed</html>")

        files = services['snapshots'].get_commit(project_id, commit["id"], owner_id)["files"]

        index = next(f for f in files if f["file_name"] == "index.html")
        assert "changed" not in index["file_content"]

    def test_restore_current_commit_leaves_rows_untouched(self, services, db_session, owner_id, project_id):
        commit = services['snapshots'].create_commit(project_id, owner_id, "v1")
        before = [(f.id, f.updated_at) for f in db_session.query(models.ProjectFile).order_by(models.ProjectFile.id)]

        result = services['snapshots'].restore_commit(project_id, commit["id"], owner_id)

        after = [(f.id, f.updated_at) for f in db_session.query(models.ProjectFile).order_by(models.ProjectFile.id)]
        assert result["already_up_to_date"] is True
        assert after == before

    def test_failed_restore_keeps_previous_files(self, services, db_session, owner_id, project_id):
        """복원 도중 실패하면 이미 삭제한 파일까지 모두 원래대로 돌아오는지 테스트합니다."""
        # === Arrange ===
        commit = services['snapshots'].create_commit(project_id, owner_id, "v1")
        services['files'].create_file(project_id, owner_id, "later.css", "p{}")
        latest = services['snapshots'].create_commit(project_id, owner_id, "v2")
        before = _snapshot(db_session, project_id)
        services['snapshots'].file_repo.add_all = MagicMock(side_effect=RuntimeError("insert failed"))

        # === Act & Assert ===
        with pytest.raises(StorageError):
            services['snapshots'].restore_commit(project_id, commit["id"], owner_id)
        assert _snapshot(db_session, project_id) == before
        assert db_session.get(models.Project, project_id).last_commit_id == latest["id"]

    def test_empty_project_commit_writes_nothing(self, services, db_session, owner_id, project_id):
        with services['snapshots'].uow.transaction():
            services['snapshots'].file_repo.delete_by_project_id(project_id)

        with pytest.raises(EmptyProjectError):
            services['snapshots'].create_commit(project_id, owner_id, "nothing")
        assert services['snapshots'].commit_repo.count_by_project_id(project_id) == 0

    def test_list_commits_newest_first_with_counts(self, services, owner_id, project_id):
        services['snapshots'].create_commit(project_id, owner_id, "one")
        services['files'].create_file(project_id, owner_id, "more.js", "")
        services['snapshots'].create_commit(project_id, owner_id, "two")

        commits = services['snapshots'].list_commits(project_id, owner_id)

        assert [(c["message"], c["file_count"]) for c in commits] == [("two", 4), ("one", 3)]

# ===================================================================
#  배포
# ===================================================================
class TestDeployments:
    def test_deployment_serves_pinned_commit(self, services, owner_id, project_id):
        """배포 이후 작업 파일을 수정해도 배포된 HTML은 바뀌지 않는지 테스트합니다."""
        # === Arrange ===
        deployment = services['projects'].deploy(project_id, owner_id)
        slug = deployment["url"].rsplit("/", 1)[1]
        published = services['deployments'].render_deployment(slug)

        # === Act ===
        index_id = _file_id(services, project_id, owner_id, "index.html")
        services['files'].update_file(project_id, index_id, owner_id, "<html><head></head><body>new</body></html>")

        # === Assert ===
        assert deployment["status"] == models.DEPLOYMENT_DEPLOYED
        assert services['deployments'].render_deployment(slug) == published
        assert "/* style.css */" in published
        assert "new" in services['deployments'].render_preview(project_id, owner_id)
        project = services['projects'].get_project(project_id, owner_id)
        assert project["deployed_url"] == deployment["url"]

    def test_deploy_specific_commit(self, services, owner_id, project_id):
        commit = services['snapshots'].create_commit(project_id, owner_id, "release")

        deployment = services['projects'].deploy(project_id, owner_id, commit["id"])
        listed = services['deployments'].list_deployments(project_id, owner_id)

        assert deployment["commit_id"] == commit["id"]
        assert listed[0]["commit"]["message"] == "release"
