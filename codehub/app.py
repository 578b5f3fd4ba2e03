# codehub/app.py
from wsgiref.simple_server import make_server
from urllib.parse import parse_qs
import json
import sys
import re

# SQLAlchemy 및 의존성 임포트
from codehub.config import settings
from codehub.database import database
from codehub.database.db_init import initialize_db
from codehub.repositories.sqlalchemy import (
    SqlalchemyUserRepository, SqlalchemyProjectRepository, SqlalchemyProjectFileRepository,
    SqlalchemyCommitRepository, SqlalchemyDeploymentRepository, SqlalchemyUnitOfWork
)
from codehub.services.file_service import FileService
from codehub.services.snapshot_service import SnapshotService
from codehub.services.project_service import ProjectService
from codehub.services.deployment_service import DeploymentService
from codehub.services.identity_service import IdentityService
from codehub.services.exceptions import *
from codehub.utils.logger import logger

JSON_HEADERS = [("Content-Type", "application/json")]

# --------------------------------------------------------------------------
## 요청 처리 유틸리티 함수
# --------------------------------------------------------------------------

def get_request_data(environ):
    try:
        content_length = int(environ.get("CONTENT_LENGTH") or 0)
        data = json.loads(environ["wsgi.input"].read(content_length)) if content_length > 0 else {}
    except (ValueError, json.JSONDecodeError):
        raise ValueError("Invalid or missing JSON body.")
    if not isinstance(data, dict):
        raise ValueError("JSON body must be an object.")
    return data

def get_query_param(environ, name):
    values = parse_qs(environ.get("QUERY_STRING", "")).get(name)
    return values[0] if values else None

def authenticate(environ):
    """X-User-Id 헤더의 외부 사용자 식별자를 내부 사용자 ID로 변환합니다."""
    return environ['services']['identity'].resolve_user(environ.get('HTTP_X_USER_ID'))

def parse_id(value, label):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {label}.")

def handle_exception(e):
    error_map = {
        AuthenticationError: "401 Unauthorized",
        AuthorizationError: "403 Forbidden",
        NotFoundError: "404 Not Found",
        ValidationError: "400 Bad Request",
        QuotaExceededError: "400 Bad Request",
        ValueError: "400 Bad Request",
        ConsistencyError: "500 Internal Server Error",
        StorageError: "500 Internal Server Error",
    }
    # 하위 예외 클래스도 상위 클래스의 상태 코드를 따릅니다.
    status = next((error_map[cls] for cls in type(e).__mro__ if cls in error_map), None)
    if status is None:
        logger.error("Unhandled error while processing request: %s", e, exc_info=e)
        return "500 Internal Server Error", json.dumps({"error": "Internal server error"})
    if status.startswith("500"):
        logger.error("Request failed: %s", e, exc_info=e)
    return status, json.dumps({"error": str(e)})

def build_services(db_session):
    user_repo = SqlalchemyUserRepository(db_session)
    project_repo = SqlalchemyProjectRepository(db_session)
    file_repo = SqlalchemyProjectFileRepository(db_session)
    commit_repo = SqlalchemyCommitRepository(db_session)
    deployment_repo = SqlalchemyDeploymentRepository(db_session)
    uow = SqlalchemyUnitOfWork(db_session)

    snapshot_service = SnapshotService(project_repo, file_repo, commit_repo, uow)
    return {
        'identity': IdentityService(user_repo, uow),
        'files': FileService(file_repo, project_repo, uow),
        'snapshots': snapshot_service,
        'projects': ProjectService(project_repo, file_repo, commit_repo, deployment_repo, snapshot_service, uow),
        'deployments': DeploymentService(project_repo, file_repo, commit_repo, deployment_repo),
    }

# --------------------------------------------------------------------------
## WSGI 애플리케이션 (의존성 주입 및 라우팅)
# --------------------------------------------------------------------------

def application(environ, start_response):
    db_session = database.SessionLocal()
    headers = JSON_HEADERS
    try:
        # 1. 의존성 생성 (Repositories -> Services) 후 environ을 통해 핸들러에 전달
        environ['services'] = build_services(db_session)

        # 2. 라우팅 및 핸들러 실행
        path = environ.get("PATH_INFO", "")
        method = environ.get("REQUEST_METHOD", "")

        handler, path_args = None, []
        for route_method, pattern, route_handler in ROUTES:
            if method == route_method and (match := re.match(pattern, path)):
                handler, path_args = route_handler, match.groups()
                break

        if handler:
            result = handler(environ, *path_args)
            if len(result) == 3:
                status, response_body, headers = result
            else:
                status, response_body = result
        else:
            status, response_body = '404 Not Found', json.dumps({'error': 'Not Found'})

    except Exception as e:
        status, response_body = handle_exception(e)
        headers = JSON_HEADERS
    finally:
        db_session.close()

    start_response(status, list(headers))
    return [response_body.encode("utf-8")]

# --------------------------------------------------------------------------
## 핸들러 함수 - 프로젝트
# --------------------------------------------------------------------------

def list_projects_handler(environ, *args):
    user_id = authenticate(environ)
    projects = environ['services']['projects'].list_projects(user_id)
    return '200 OK', json.dumps({"projects": projects})

def create_project_handler(environ, *args):
    user_id = authenticate(environ)
    data = get_request_data(environ)
    project = environ['services']['projects'].create_project(
        user_id, data.get('name'), data.get('description'), data.get('isPublic', False)
    )
    return '201 Created', json.dumps(project)

def explore_projects_handler(environ, *args):
    projects = environ['services']['projects'].explore_public_projects()
    return '200 OK', json.dumps({"projects": projects})

def get_project_handler(environ, project_id):
    user_id = authenticate(environ)
    project = environ['services']['projects'].get_project(int(project_id), user_id)
    return '200 OK', json.dumps(project)

def update_project_handler(environ, project_id):
    user_id = authenticate(environ)
    data = get_request_data(environ)
    changes = {}
    if 'name' in data:
        changes['name'] = data['name']
    if 'description' in data:
        changes['description'] = data['description']
    if 'isPublic' in data:
        changes['is_public'] = data['isPublic']
    project = environ['services']['projects'].update_project(int(project_id), user_id, **changes)
    return '200 OK', json.dumps(project)

def set_visibility_handler(environ, project_id):
    user_id = authenticate(environ)
    data = get_request_data(environ)
    project = environ['services']['projects'].set_visibility(int(project_id), user_id, data.get('is_public'))
    return '200 OK', json.dumps(project)

def delete_project_handler(environ, project_id):
    user_id = authenticate(environ)
    environ['services']['projects'].delete_project(int(project_id), user_id)
    return '204 No Content', ''

def fork_project_handler(environ, project_id):
    user_id = authenticate(environ)
    project = environ['services']['projects'].fork_project(int(project_id), user_id)
    return '201 Created', json.dumps(project)

# --------------------------------------------------------------------------
## 핸들러 함수 - 파일
# --------------------------------------------------------------------------

def list_files_handler(environ, project_id):
    user_id = authenticate(environ)
    files = environ['services']['files'].list_files(int(project_id), user_id)
    return '200 OK', json.dumps({"files": files})

def create_file_handler(environ, project_id):
    user_id = authenticate(environ)
    data = get_request_data(environ)
    file = environ['services']['files'].create_file(int(project_id), user_id, data.get('name'), data.get('content', ''))
    return '201 Created', json.dumps(file)

def get_file_handler(environ, project_id, file_id):
    user_id = authenticate(environ)
    file = environ['services']['files'].get_file(int(project_id), int(file_id), user_id)
    return '200 OK', json.dumps(file)

def update_file_handler(environ, project_id, file_id):
    user_id = authenticate(environ)
    data = get_request_data(environ)
    file = environ['services']['files'].update_file(int(project_id), int(file_id), user_id, data.get('content'))
    return '200 OK', json.dumps(file)

def delete_file_handler(environ, project_id, file_id):
    user_id = authenticate(environ)
    environ['services']['files'].delete_file(int(project_id), int(file_id), user_id)
    return '204 No Content', ''

# --------------------------------------------------------------------------
## 핸들러 함수 - 커밋
# --------------------------------------------------------------------------

def list_commits_handler(environ, project_id):
    user_id = authenticate(environ)
    commits = environ['services']['snapshots'].list_commits(int(project_id), user_id)
    return '200 OK', json.dumps({"commits": commits})

def create_commit_handler(environ, project_id):
    user_id = authenticate(environ)
    data = get_request_data(environ)
    commit = environ['services']['snapshots'].create_commit(int(project_id), user_id, data.get('message'))
    return '201 Created', json.dumps(commit)

def get_commit_handler(environ, project_id, commit_id):
    user_id = authenticate(environ)
    commit = environ['services']['snapshots'].get_commit(int(project_id), int(commit_id), user_id)
    return '200 OK', json.dumps(commit)

def restore_commit_handler(environ, project_id, commit_id):
    user_id = authenticate(environ)
    result = environ['services']['snapshots'].restore_commit(int(project_id), int(commit_id), user_id)
    return '200 OK', json.dumps(result)

# --------------------------------------------------------------------------
## 핸들러 함수 - 배포 및 미리보기
# --------------------------------------------------------------------------

def list_deployments_handler(environ, project_id):
    user_id = authenticate(environ)
    deployments = environ['services']['deployments'].list_deployments(int(project_id), user_id)
    return '200 OK', json.dumps({"deployments": deployments})

def deploy_handler(environ, project_id):
    user_id = authenticate(environ)
    data = get_request_data(environ)
    commit_id = data.get('commitId')
    if commit_id is not None:
        commit_id = parse_id(commit_id, "commitId")
    deployment = environ['services']['projects'].deploy(int(project_id), user_id, commit_id)
    return '201 Created', json.dumps(deployment)

def preview_handler(environ, project_id):
    user_id = authenticate(environ)
    commit_id = get_query_param(environ, 'commit') or get_query_param(environ, 'commitId')
    if commit_id is not None:
        commit_id = parse_id(commit_id, "commitId")
    html = environ['services']['deployments'].render_preview(int(project_id), user_id, commit_id)
    return '200 OK', html, [("Content-Type", "text/html"), ("Cache-Control", "no-cache")]

def serve_deployment_handler(environ, slug):
    html = environ['services']['deployments'].render_deployment(slug)
    return '200 OK', html, [
        ("Content-Type", "text/html; charset=utf-8"),
        ("Cache-Control", f"public, max-age={settings.deployment_cache_max_age}"),
        ("X-Powered-By", settings.generator_name),
    ]

ROUTES = [
    ('GET', r'^/api/projects$', list_projects_handler),
    ('POST', r'^/api/projects$', create_project_handler),
    ('GET', r'^/api/explore$', explore_projects_handler),
    ('GET', r'^/api/projects/([0-9]+)$', get_project_handler),
    ('PUT', r'^/api/projects/([0-9]+)$', update_project_handler),
    ('PATCH', r'^/api/projects/([0-9]+)$', set_visibility_handler),
    ('DELETE', r'^/api/projects/([0-9]+)$', delete_project_handler),
    ('POST', r'^/api/projects/([0-9]+)/fork$', fork_project_handler),
    ('GET', r'^/api/projects/([0-9]+)/files$', list_files_handler),
    ('POST', r'^/api/projects/([0-9]+)/files$', create_file_handler),
    ('GET', r'^/api/projects/([0-9]+)/files/([0-9]+)$', get_file_handler),
    ('PUT', r'^/api/projects/([0-9]+)/files/([0-9]+)$', update_file_handler),
    ('DELETE', r'^/api/projects/([0-9]+)/files/([0-9]+)$', delete_file_handler),
    ('GET', r'^/api/projects/([0-9]+)/commits$', list_commits_handler),
    ('POST', r'^/api/projects/([0-9]+)/commits$', create_commit_handler),
    ('GET', r'^/api/projects/([0-9]+)/commits/([0-9]+)$', get_commit_handler),
    ('POST', r'^/api/projects/([0-9]+)/commits/([0-9]+)$', restore_commit_handler),
    ('GET', r'^/api/projects/([0-9]+)/deploy$', list_deployments_handler),
    ('POST', r'^/api/projects/([0-9]+)/deploy$', deploy_handler),
    ('GET', r'^/api/projects/([0-9]+)/preview$', preview_handler),
    ('GET', r'^/deploy/([a-zA-Z0-9_-]+)$', serve_deployment_handler),
]

# --------------------------------------------------------------------------
## 서버 실행
# --------------------------------------------------------------------------

if __name__ == "__main__":
    try:
        initialize_db()
        with make_server(settings.api_host, settings.api_port, application) as httpd:
            logger.info("Serving CodeHub on %s:%s...", settings.api_host, settings.api_port)
            httpd.serve_forever()
    except Exception as e:
        print(f"Error starting server: {e}", file=sys.stderr)
