# codehub/utils/html_renderer.py
from typing import Iterable, NamedTuple, Optional

from codehub.services.exceptions import NoIndexError

INDEX_FILE_NAME = "index.html"


class RenderFile(NamedTuple):
    """렌더링에 필요한 파일 정보. ProjectFile과 CommitFile 모두 이 형태로 변환해 넘깁니다."""
    name: str
    path: str
    content: str
    file_type: str


def _inline_style(file: RenderFile) -> str:
    return f"<style>\n/* {file.name} */\n{file.content}\n</style>"


def _inline_script(file: RenderFile) -> str:
    return f"<script>\n/* {file.name} */\n{file.content}\n</script>"


def _deployment_meta(deployment_url: str, project_name: str, generator: str) -> str:
    return (
        f'\n  <meta name="generator" content="{generator}">'
        f'\n  <meta name="deployment-url" content="{deployment_url}">'
        f'\n  <meta name="project-name" content="{project_name or "Untitled"}">'
    )


def render_html(
    files: Iterable[RenderFile],
    project_name: str,
    deployment_url: Optional[str] = None,
    generator: str = "CodeHub",
) -> str:
    """
    index.html에 CSS/JS 파일을 인라인으로 삽입하여 하나의 독립된 HTML 문서를 만듭니다.

    DOM 파싱 없이 문자열 포함 여부와 치환만으로 동작합니다.
    각 CSS 파일은 정확히 `<link rel="stylesheet" href="{path}">` 태그가 있으면 그 자리를,
    없으면 첫 번째 `</head>` 앞을 차지합니다. JS 파일은 `<script src="{path}"></script>`와
    `</body>`에 대해 같은 규칙을 따릅니다. 닫는 태그가 없으면 삽입은 조용히 생략됩니다.

    Args:
        files: 렌더링할 파일 목록. 나열된 순서대로 처리됩니다.
        project_name: 배포 메타 태그에 들어갈 프로젝트 이름.
        deployment_url: 공개 배포용으로 렌더링할 때만 지정합니다. 지정하면 메타 태그 3개를 추가합니다.
        generator: generator 메타 태그 값.

    Returns:
        최종 HTML 문자열.

    Raises:
        NoIndexError: 이름이 정확히 index.html인 파일이 없을 때.
    """
    files = [RenderFile(f.name, f.path, f.content or "", f.file_type) for f in files]

    index_file = next((f for f in files if f.name == INDEX_FILE_NAME), None)
    if index_file is None:
        raise NoIndexError()

    html = index_file.content

    for css_file in (f for f in files if f.file_type == "css"):
        css_link = f'<link rel="stylesheet" href="{css_file.path}">'
        style_tag = _inline_style(css_file)
        if css_link in html:
            html = html.replace(css_link, style_tag, 1)
        else:
            html = html.replace("</head>", f"  {style_tag}\n</head>", 1)

    for js_file in (f for f in files if f.file_type == "js"):
        script_src = f'<script src="{js_file.path}"></script>'
        script_tag = _inline_script(js_file)
        if script_src in html:
            html = html.replace(script_src, script_tag, 1)
        else:
            html = html.replace("</body>", f"  {script_tag}\n</body>", 1)

    if deployment_url:
        meta = _deployment_meta(deployment_url, project_name, generator)
        html = html.replace("</head>", f"{meta}\n</head>", 1)

    return html


def from_project_files(files) -> list:
    return [RenderFile(f.name, f.path, f.content, f.file_type) for f in files]


def from_commit_files(files) -> list:
    return [RenderFile(f.file_name, f.file_path, f.file_content, f.file_type) for f in files]
